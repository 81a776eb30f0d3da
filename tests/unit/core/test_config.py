from __future__ import annotations

import pytest

from contractpro.core import config as config_module
from contractpro.core.exceptions import ConfigurationError


def test_defaults_are_valid(monkeypatch):
    for key in ("ENV", "DEBUG", "DATABASE_URL", "JWT_SECRET", "LOG_LEVEL", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"):
        monkeypatch.delenv(key, raising=False)
    cfg = config_module._build_config("development")

    assert cfg.APP_NAME == "ContractPro"
    assert cfg.API_PREFIX == "/api/v1"
    assert cfg.DEFAULT_PAGE_SIZE == 10
    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.DEBUG is True


def test_production_rejects_placeholder_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://app:pw@db.internal:5432/contractpro")
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        config_module._build_config("production")


def test_rejects_unsupported_database_scheme(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mysql://root@localhost/contractpro")
    with pytest.raises(ConfigurationError, match="DATABASE_URL"):
        config_module._build_config("development")


def test_rejects_page_size_above_maximum(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "500")
    monkeypatch.setenv("MAX_PAGE_SIZE", "100")
    with pytest.raises(ConfigurationError, match="DEFAULT_PAGE_SIZE"):
        config_module._build_config("development")
