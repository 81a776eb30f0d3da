"""Client request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contractpro.utils.validators import normalize_email, normalize_phone, sanitize_text


class _ClientFields(BaseModel):
    phone: str | None = None
    street: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("phone")
    @classmethod
    def phone_is_valid(cls, value: str | None) -> str | None:
        return normalize_phone(value)


class ClientCreateRequest(_ClientFields):
    name: str = Field(min_length=1, max_length=100)
    email: str
    company: str = Field(min_length=1, max_length=100)
    country: str | None = Field(default="United States", max_length=100)

    @field_validator("name", "company")
    @classmethod
    def strip_text(cls, value: str) -> str:
        cleaned = sanitize_text(value, max_len=100)
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str) -> str:
        return normalize_email(value)


class ClientUpdateRequest(_ClientFields):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = None
    company: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, value: str | None) -> str | None:
        return normalize_email(value) if value is not None else None


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    email: str
    company: str
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    notes: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ClientSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company: str
    email: str
