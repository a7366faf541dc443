from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    database_url: str
    timezone: str
    log_level: str
    app_host: str
    app_port: int
    sqlite_busy_timeout_ms: int


def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./dreamtrack.db"),
        timezone=os.getenv("TZ", "America/Los_Angeles"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=int(os.getenv("APP_PORT", "8000")),
        sqlite_busy_timeout_ms=int(os.getenv("SQLITE_BUSY_TIMEOUT_MS", "5000")),
    )
