"""SQLAlchemy model package for ContractPro."""

from contractpro.models.base import Base
from contractpro.models.client import Client
from contractpro.models.contract import Contract
from contractpro.models.enums import (
    ContractStatus,
    Currency,
    InvoiceStatus,
    ReminderStatus,
    ReminderType,
    UserRole,
)
from contractpro.models.invoice import Invoice, InvoiceItem, PaymentReminder
from contractpro.models.user import User

__all__ = [
    "Base",
    "Client",
    "Contract",
    "ContractStatus",
    "Currency",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "PaymentReminder",
    "ReminderStatus",
    "ReminderType",
    "User",
    "UserRole",
]
