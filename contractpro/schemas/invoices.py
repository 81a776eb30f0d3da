"""Invoice request/response schemas.

Derived money fields (item amounts, subtotal, tax, total) appear only on
responses; requests cannot set them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from contractpro.models.enums import Currency, InvoiceStatus, ReminderStatus, ReminderType
from contractpro.schemas.clients import ClientSummary


class InvoiceItemRequest(BaseModel):
    description: str = Field(min_length=1, max_length=200)
    quantity: Decimal = Field(ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    rate: Decimal = Field(ge=0, max_digits=12, decimal_places=2)


class InvoiceCreateRequest(BaseModel):
    client_id: str = Field(min_length=1, max_length=32)
    items: list[InvoiceItemRequest] = Field(min_length=1)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)
    currency: Currency = Currency.USD
    issue_date: datetime | None = None
    due_date: datetime
    notes: str | None = Field(default=None, max_length=500)


class InvoiceUpdateRequest(BaseModel):
    client_id: str | None = Field(default=None, min_length=1, max_length=32)
    items: list[InvoiceItemRequest] | None = Field(default=None, min_length=1)
    tax_rate: Decimal | None = Field(default=None, ge=0, le=100, decimal_places=2)
    currency: Currency | None = None
    issue_date: datetime | None = None
    due_date: datetime | None = None
    notes: str | None = Field(default=None, max_length=500)


class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: ReminderType
    status: ReminderStatus
    date_sent: datetime


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    client_id: str
    client: ClientSummary | None = None
    invoice_number: str
    items: list[InvoiceItemResponse]
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    currency: Currency
    status: InvoiceStatus
    issue_date: datetime
    due_date: datetime
    paid_at: datetime | None = None
    notes: str | None = None
    reminders: list[ReminderResponse]
    is_overdue: bool = False
    is_active: bool
    created_at: datetime
    updated_at: datetime
