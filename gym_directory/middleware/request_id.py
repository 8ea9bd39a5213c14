from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _store_backend(request: Request) -> str:
    store = getattr(request.app.state, "store", None)
    return getattr(store, "backend", "-")


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one ``http_request`` access log per request.

    ``request_id``, ``path``, ``method`` and ``store_backend`` are bound to
    structlog contextvars so every store/service event carries them.
    """
    logger = structlog.get_logger(__name__)

    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    backend = _store_backend(request)
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method, store_backend=backend
    )

    # No-op when Sentry is not initialised
    sentry_sdk.set_tag("request_id", rid)
    sentry_sdk.set_tag("store_backend", backend)

    client_ip = (request.client.host if request.client else None) or "-"
    start_ns = time.perf_counter_ns()

    def _elapsed_ms() -> float:
        return round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)

    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "http_request",
            status=500,
            duration_ms=_elapsed_ms(),
            client_ip=client_ip,
            exc_info=True,
        )
        structlog.contextvars.clear_contextvars()
        raise

    logger.info(
        "http_request",
        status=response.status_code,
        duration_ms=_elapsed_ms(),
        client_ip=client_ip,
    )
    response.headers[REQUEST_ID_HEADER] = rid

    # Per-request bindings must not leak into the next task
    structlog.contextvars.clear_contextvars()
    return response
