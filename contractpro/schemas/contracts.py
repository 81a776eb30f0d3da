"""Contract request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from contractpro.models.enums import ContractStatus, Currency
from contractpro.schemas.clients import ClientSummary


class ContractCreateRequest(BaseModel):
    client_id: str = Field(min_length=1, max_length=32)
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=10000)
    terms: str | None = Field(default=None, max_length=2000)
    amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    currency: Currency = Currency.USD
    expires_at: datetime


class ContractUpdateRequest(BaseModel):
    client_id: str | None = Field(default=None, min_length=1, max_length=32)
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1, max_length=10000)
    terms: str | None = Field(default=None, max_length=2000)
    amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    currency: Currency | None = None
    expires_at: datetime | None = None


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    client_id: str
    client: ClientSummary | None = None
    title: str
    content: str
    terms: str | None = None
    amount: Decimal
    currency: Currency
    status: ContractStatus
    signature_id: str | None = None
    sent_at: datetime | None = None
    signed_at: datetime | None = None
    expires_at: datetime
    is_expired: bool = False
    is_active: bool
    created_at: datetime
    updated_at: datetime
