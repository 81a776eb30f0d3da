"""Common schema module."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class APIEnvelope(BaseModel):
    success: bool = True
    data: Any = None
    message: str | None = None
    pagination: PaginationMeta | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    details: list[str] | None = None
