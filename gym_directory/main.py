from __future__ import annotations

from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from gym_directory.api import errors
from gym_directory.api.routers.gyms import router as gyms_router
from gym_directory.api.routers.health import router as health_router
from gym_directory.api.routers.users import router as users_router
from gym_directory.core.config import Settings, get_settings
from gym_directory.core.startup import select_store
from gym_directory.logging import setup_logging
from gym_directory.middleware.request_id import request_id_middleware
from gym_directory.repositories.interfaces import Store


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    traces_rate = max(0.0, min(0.2, settings.sentry_traces_rate))
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        integrations=[StarletteIntegration()],
        traces_sample_rate=traces_rate,
        send_default_pii=False,
    )


def create_app(store: Store | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    With ``store`` given (tests, scripts) the startup handshake is skipped;
    otherwise the lifespan probes the database once and keeps whatever store
    it picks until shutdown.
    """
    settings = settings or get_settings()

    # Initialize structured logging first
    setup_logging(settings)
    _init_sentry(settings)
    logger = structlog.get_logger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.store is None
        if owned:
            app.state.store = await select_store(settings)
        logger.info("app_startup", env=settings.app_env, store_backend=app.state.store.backend)
        try:
            yield
        finally:
            if owned:
                await app.state.store.close()
                app.state.store = None

    app = FastAPI(title="Gym Review Directory", lifespan=lifespan)
    app.state.store = store

    # Request-ID middleware (JSON access log)
    app.middleware("http")(request_id_middleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(gyms_router)
    app.include_router(users_router)
    app.include_router(health_router)
    return app


app = create_app()
