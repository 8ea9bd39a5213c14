# gym_directory/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str | None = None  # = DATABASE_URL, unset means in-memory only
    store_backend: Literal["auto", "sql", "memory"] = "auto"
    store_connect_timeout: float = 3.0
    auto_create_schema: bool = True

    app_env: str = "dev"
    log_level: str = "INFO"
    log_format: str | None = None
    sentry_dsn: str | None = None
    sentry_traces_rate: float = 0.0
    allow_origins: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
