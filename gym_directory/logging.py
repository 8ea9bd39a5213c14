from __future__ import annotations

import logging
import os

import structlog

from gym_directory.core.config import Settings, get_settings


def _resolve_format(settings: Settings) -> str:
    if settings.log_format:
        return settings.log_format.lower()
    return "console" if settings.app_env == "dev" else "json"


def setup_logging(settings: Settings | None = None, log_file: str | os.PathLike | None = None) -> None:
    """Configure structlog on top of stdlib logging.

    - JSON lines (console renderer in dev) with UTC timestamp, level, logger name
    - contextvars are merged so request_id / store_backend flow into every event
    - stdlib and uvicorn records go through the same formatter
    """
    settings = settings or get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format(settings) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(str(log_file)) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )
