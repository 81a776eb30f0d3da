"""Client model module."""

from __future__ import annotations

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from contractpro.models.base import AuditMixin, Base, IdMixin, OwnedMixin, SoftDeleteMixin


class Client(Base, IdMixin, AuditMixin, SoftDeleteMixin, OwnedMixin):
    __tablename__ = "clients"
    __table_args__ = (
        UniqueConstraint("user_id", "email", name="uq_clients_user_email"),
        Index("idx_clients_user_company", "user_id", "company"),
        Index("idx_clients_user_created", "user_id", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    company: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(17))
    street: Mapped[str | None] = mapped_column(String(200))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(100), default="United States")
    notes: Mapped[str | None] = mapped_column(String(500))
