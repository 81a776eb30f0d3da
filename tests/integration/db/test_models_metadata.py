from __future__ import annotations

from contractpro.models import Base, Contract, Invoice
import contractpro.models  # noqa: F401


def test_model_metadata_contains_target_tables():
    expected = {"users", "clients", "contracts", "invoices", "invoice_items", "payment_reminders"}
    assert expected.issubset(set(Base.metadata.tables.keys()))


def test_versioned_tables_carry_version_column():
    for model in (Contract, Invoice):
        assert "version" in model.__table__.columns
        assert model.__mapper__.version_id_col is model.__table__.c.version


def test_invoice_number_is_unique():
    assert Base.metadata.tables["invoices"].c.invoice_number.unique is True
