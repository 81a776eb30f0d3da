"""Environment-driven settings for ContractPro.

Values come from the process environment (a local ``.env`` is loaded first)
and are validated once when the config is built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from contractpro.core.exceptions import ConfigurationError

load_dotenv()

SUPPORTED_DB_SCHEMES = frozenset({"sqlite", "postgresql", "postgresql+psycopg2"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _env(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer.") from exc


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    HOST: str
    PORT: int
    API_PREFIX: str

    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool

    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    JWT_REFRESH_TTL_DAYS: int
    JWT_PERMISSIONS_VERSION: int
    PASSWORD_PEPPER: str

    LOG_LEVEL: str
    LOG_FILE: str

    DEFAULT_PAGE_SIZE: int
    MAX_PAGE_SIZE: int
    DEADLINE_WINDOW_DAYS: int

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or _env("ENV", "development")).lower()
    production = resolved_env == "production"

    config = Config(
        APP_NAME="ContractPro",
        APP_VERSION=_env("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=False if production else _env_flag("DEBUG", True),
        HOST=_env("HOST", "127.0.0.1"),
        PORT=_env_int("PORT", 8000),
        API_PREFIX=_env("API_PREFIX", "/api/v1"),
        DATABASE_URL=_env("DATABASE_URL", "sqlite:///./contractpro.db"),
        DB_CONNECTIVITY_REQUIRED=_env_flag("DB_CONNECTIVITY_REQUIRED", production),
        JWT_SECRET=_env("JWT_SECRET", "change_me_jwt_secret"),
        JWT_ACCESS_TTL_MINUTES=_env_int("JWT_ACCESS_TTL_MINUTES", 60),
        JWT_REFRESH_TTL_DAYS=_env_int("JWT_REFRESH_TTL_DAYS", 7),
        JWT_PERMISSIONS_VERSION=_env_int("JWT_PERMISSIONS_VERSION", 1),
        PASSWORD_PEPPER=os.getenv("PASSWORD_PEPPER", ""),
        LOG_LEVEL=_env("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=_env("LOG_FILE", ""),
        DEFAULT_PAGE_SIZE=_env_int("DEFAULT_PAGE_SIZE", 10),
        MAX_PAGE_SIZE=_env_int("MAX_PAGE_SIZE", 100),
        DEADLINE_WINDOW_DAYS=_env_int("DEADLINE_WINDOW_DAYS", 30),
    )
    _validate_config(config)
    return config


def _validate_config(config: Config) -> None:
    parsed = urlparse(config.DATABASE_URL)
    if parsed.scheme not in SUPPORTED_DB_SCHEMES:
        raise ConfigurationError("DATABASE_URL must use a sqlite:// or postgresql:// URL.")
    if parsed.scheme != "sqlite" and not parsed.hostname:
        raise ConfigurationError("DATABASE_URL is missing a hostname.")

    minimums = {
        "PORT": config.PORT,
        "JWT_ACCESS_TTL_MINUTES": config.JWT_ACCESS_TTL_MINUTES,
        "JWT_REFRESH_TTL_DAYS": config.JWT_REFRESH_TTL_DAYS,
        "JWT_PERMISSIONS_VERSION": config.JWT_PERMISSIONS_VERSION,
        "DEADLINE_WINDOW_DAYS": config.DEADLINE_WINDOW_DAYS,
    }
    for name, value in minimums.items():
        if value < 1:
            raise ConfigurationError(f"{name} must be >= 1.")

    if config.LOG_LEVEL not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}.")
    if not 1 <= config.DEFAULT_PAGE_SIZE <= config.MAX_PAGE_SIZE:
        raise ConfigurationError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE.")
    if not config.API_PREFIX.startswith("/"):
        raise ConfigurationError("API_PREFIX must start with '/'.")

    if config.is_production:
        if "change_me" in config.JWT_SECRET:
            raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")
        if "change_me" in config.DATABASE_URL.lower():
            raise ConfigurationError("Production DATABASE_URL uses placeholder credentials.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Return the validated config for ``env`` (defaults to ``$ENV``)."""
    return _build_config(env)
