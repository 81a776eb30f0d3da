"""Contract model module."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contractpro.models.base import AuditMixin, Base, IdMixin, OwnedMixin, SoftDeleteMixin
from contractpro.models.enums import ContractStatus, Currency
from contractpro.models.types import ExactDecimal


class Contract(Base, IdMixin, AuditMixin, SoftDeleteMixin, OwnedMixin):
    __tablename__ = "contracts"
    __table_args__ = (
        Index("idx_contracts_user_status", "user_id", "status"),
        Index("idx_contracts_user_created", "user_id", "created_at"),
        Index("idx_contracts_expires_at", "expires_at"),
    )

    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    terms: Mapped[str | None] = mapped_column(String(2000))
    amount: Mapped[Decimal] = mapped_column(ExactDecimal(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default=Currency.USD.value, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=ContractStatus.DRAFT.value, nullable=False)
    signature_id: Mapped[str | None] = mapped_column(String(64))
    sent_at: Mapped[datetime | None] = mapped_column(DateTime)
    signed_at: Mapped[datetime | None] = mapped_column(DateTime)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    client = relationship("Client", lazy="joined")
    # Set from the service clock on every load and save; not a column.
    is_expired = False

    __mapper_args__ = {"version_id_col": version}
