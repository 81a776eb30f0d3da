"""Process bootstrap: logging, configuration sanity checks and schema creation."""

from __future__ import annotations

import logging

from contractpro.core.config import Config, get_config
from contractpro.core.logging_config import configure_logging
from contractpro.database.db import get_active_database_url, init_db, verify_database_connection

logger = logging.getLogger(__name__)


def _insecure_defaults(config: Config) -> list[str]:
    findings = []
    if "change_me" in config.JWT_SECRET:
        findings.append("JWT_SECRET")
    if not config.PASSWORD_PEPPER:
        findings.append("PASSWORD_PEPPER")
    return findings


def validate_startup_config() -> None:
    """Fail fast when a required database is unreachable; warn on weak settings."""
    config = get_config()
    database_url = get_active_database_url()
    scheme = database_url.split("://", 1)[0]

    if not verify_database_connection():
        if config.DB_CONNECTIVITY_REQUIRED:
            raise RuntimeError("Database connectivity check failed.")
        logger.warning(
            "startup.database.unreachable",
            extra={"event": "startup.database.unreachable", "database_url_scheme": scheme},
        )

    if config.is_production and scheme == "sqlite":
        logger.warning("startup.production.sqlite", extra={"event": "startup.production.sqlite"})

    weak = _insecure_defaults(config)
    if weak:
        logger.warning(
            "startup.config.insecure_defaults",
            extra={"event": "startup.config.insecure_defaults", "keys": weak},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated", "env": config.ENV, "database_url_scheme": scheme},
    )


def bootstrap() -> None:
    """Run once per process before serving requests."""
    configure_logging()
    validate_startup_config()
    init_db()
