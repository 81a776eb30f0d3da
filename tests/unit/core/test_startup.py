from __future__ import annotations

import pytest

import contractpro.core.startup as startup_module


class _Cfg:
    def __init__(self, required: bool) -> None:
        self.DB_CONNECTIVITY_REQUIRED = required
        self.ENV = "development"
        self.JWT_SECRET = "change_me_jwt_secret"
        self.PASSWORD_PEPPER = ""

    @property
    def is_production(self) -> bool:
        return False


def test_startup_skips_raise_when_db_optional_and_unreachable(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=False))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: False)

    startup_module.validate_startup_config()


def test_startup_raises_when_db_required_and_unreachable(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=True))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: False)

    with pytest.raises(RuntimeError, match="Database connectivity check failed"):
        startup_module.validate_startup_config()


def test_bootstrap_creates_tables_after_validation(monkeypatch):
    calls = []
    monkeypatch.setattr(startup_module, "configure_logging", lambda: calls.append("logging"))
    monkeypatch.setattr(startup_module, "validate_startup_config", lambda: calls.append("validate"))
    monkeypatch.setattr(startup_module, "init_db", lambda: calls.append("init_db"))

    startup_module.bootstrap()

    assert calls == ["logging", "validate", "init_db"]


def test_startup_warns_on_placeholder_secrets(monkeypatch, caplog):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=False))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: True)

    with caplog.at_level("WARNING", logger=startup_module.__name__):
        startup_module.validate_startup_config()

    warned = [record for record in caplog.records if record.getMessage() == "startup.config.insecure_defaults"]
    assert warned and warned[0].keys == ["JWT_SECRET", "PASSWORD_PEPPER"]
