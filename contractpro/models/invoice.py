"""Invoice, line item and payment reminder models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contractpro.core.clock import utcnow_naive
from contractpro.models.base import AuditMixin, Base, IdMixin, OwnedMixin, SoftDeleteMixin
from contractpro.models.enums import Currency, InvoiceStatus, ReminderStatus
from contractpro.models.types import ExactDecimal

# 18 integer digits; scale 8 holds 2dp quantity x 2dp rate x 2dp tax percent / 100.
MONEY = ExactDecimal(26, 8)
MONEY_MAX = Decimal(10) ** 18


class InvoiceItem(Base, IdMixin):
    __tablename__ = "invoice_items"

    invoice_id: Mapped[str] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(ExactDecimal(12, 2), nullable=False)
    rate: Mapped[Decimal] = mapped_column(ExactDecimal(12, 2), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))


class PaymentReminder(Base, IdMixin):
    __tablename__ = "payment_reminders"

    invoice_id: Mapped[str] = mapped_column(ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    date_sent: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(10), default=ReminderStatus.SENT.value, nullable=False)


class Invoice(Base, IdMixin, AuditMixin, SoftDeleteMixin, OwnedMixin):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_user_status", "user_id", "status"),
        Index("idx_invoices_user_created", "user_id", "created_at"),
        Index("idx_invoices_due_date", "due_date"),
    )

    invoice_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    tax_rate: Mapped[Decimal] = mapped_column(ExactDecimal(5, 2), nullable=False, default=Decimal("0"))
    tax_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    currency: Mapped[str] = mapped_column(String(3), default=Currency.USD.value, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=InvoiceStatus.DRAFT.value, nullable=False)
    issue_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime)
    notes: Mapped[str | None] = mapped_column(String(500))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    items = relationship(
        InvoiceItem,
        order_by=InvoiceItem.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    reminders = relationship(
        PaymentReminder,
        order_by=PaymentReminder.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    client = relationship("Client", lazy="joined")
    # Set from the service clock on every load and save; not a column.
    is_overdue = False

    __mapper_args__ = {"version_id_col": version}
