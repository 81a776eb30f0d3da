"""User model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from contractpro.models.base import AuditMixin, Base, IdMixin, SoftDeleteMixin
from contractpro.models.enums import UserRole


class User(Base, IdMixin, AuditMixin, SoftDeleteMixin):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role_active", "role", "is_active"),)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.FREELANCER.value, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime)
