"""Shared SQLAlchemy base and common mixins for the domain models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from contractpro.core.clock import utcnow_naive
from contractpro.utils.ids import new_id


class Base(DeclarativeBase):
    """Declarative base class for all ContractPro tables."""


class IdMixin:
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)


class AuditMixin:
    """Standard audit fields for all domain models."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, onupdate=utcnow_naive, nullable=False
    )


class SoftDeleteMixin:
    """Rows are deactivated rather than removed; reads filter on is_active."""

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class OwnedMixin:
    """Mixin tying business rows to the user that owns them."""

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
