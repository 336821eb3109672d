from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_first_set(*env_names: str) -> str:
    for env_name in env_names:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return ""


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _normalize_database_url(raw_url: str) -> str:
    if not raw_url:
        return raw_url
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+psycopg2://", 1)
    if raw_url.startswith("postgresql://") and "+" not in raw_url.split("://", 1)[0]:
        return raw_url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return raw_url


def _build_database_url() -> str:
    explicit = _get_first_set("DATABASE_URL", "DATABASE_PUBLIC_URL")
    if explicit:
        return _normalize_database_url(explicit)

    # Local dev fallback when DATABASE_URL is not set.
    sqlite_file = Path(os.getenv("SQLITE_DB_PATH", "./wealthmanager.db")).as_posix()
    if sqlite_file.startswith("/"):
        return f"sqlite:///{sqlite_file}"
    return f"sqlite:///./{sqlite_file.lstrip('./')}"


def _build_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "wealthmanager")
    app_debug: bool = _env_flag("APP_DEBUG")
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(os.getenv("APP_PORT", "5000"))

    database_url: str = _build_database_url()
    cors_allow_origins: list[str] = field(default_factory=_build_cors_origins)
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA")

    # Empty base URL means the dashboard reads the API in-process.
    dashboard_api_base_url: str = os.getenv("DASHBOARD_API_BASE_URL", "").strip()
    dashboard_retry_attempts: int = int(os.getenv("DASHBOARD_RETRY_ATTEMPTS", "3"))
    dashboard_retry_delay_seconds: float = float(os.getenv("DASHBOARD_RETRY_DELAY_SECONDS", "1.0"))
    dashboard_timeout_seconds: float = float(os.getenv("DASHBOARD_TIMEOUT_SECONDS", "30"))


settings = Settings()


def get_settings() -> Settings:
    return settings
