"""Invoice service for billing and reminder operations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, or_, select

from contractpro.core.clock import to_naive_utc
from contractpro.core.exceptions import NotFoundError, ValidationError
from contractpro.domain import invoicing
from contractpro.models import Currency, Invoice, InvoiceItem, InvoiceStatus
from contractpro.services.base_service import BaseService, Page
from contractpro.services.client_service import ClientService

logger = logging.getLogger(__name__)

INVOICE_NOT_FOUND = "Invoice not found"
DUE_BEFORE_ISSUE = "Due date must be after issue date"


def _build_items(items: Iterable[dict[str, Any]]) -> list[InvoiceItem]:
    return [
        InvoiceItem(
            description=item["description"],
            quantity=Decimal(str(item["quantity"])),
            rate=Decimal(str(item["rate"])),
        )
        for item in items
    ]


class InvoiceService(BaseService):
    """Service for invoice CRUD, sending, reminders and payment."""

    def _active(self, user_id: str):
        return select(Invoice).where(Invoice.user_id == user_id, Invoice.is_active.is_(True))

    def _apply_overdue(self, invoices: Iterable[Invoice]) -> None:
        """Lazily flag sent invoices past due on read and persist the correction."""
        now = self.clock()
        flagged = []
        for invoice in invoices:
            previous = invoice.status
            invoicing.mark_overdue(invoice, now)
            if invoice.status != previous:
                invoice.updated_at = now
                flagged.append(invoice.id)
            invoice.is_overdue = invoicing.is_overdue(invoice, now)
        if flagged:
            self.commit()
            logger.info("invoice.marked_overdue", extra={"event": "invoice.marked_overdue", "invoice_ids": flagged})

    def _persist(self, invoice: Invoice) -> Invoice:
        if invoice.due_date < invoice.issue_date:
            raise ValidationError(DUE_BEFORE_ISSUE)
        now = self.clock()
        invoicing.recompute(invoice, now)
        self.save(invoice)
        invoice.is_overdue = invoicing.is_overdue(invoice, now)
        return invoice

    def next_invoice_number(self) -> str:
        """Derive the next number from the row count; soft-deleted rows still count."""
        existing = self.db.scalar(select(func.count()).select_from(Invoice)) or 0
        return invoicing.generate_invoice_number(existing)

    def create_invoice(
        self,
        user_id: str,
        client_id: str,
        items: list[dict[str, Any]],
        due_date: datetime,
        tax_rate: Decimal | int | str = 0,
        currency: str = Currency.USD.value,
        issue_date: datetime | None = None,
        notes: str | None = None,
    ) -> Invoice:
        ClientService(db=self.db, clock=self.clock).get_client(user_id, client_id)
        if not items:
            raise ValidationError("At least one item is required")

        invoice = Invoice(
            user_id=user_id,
            client_id=client_id,
            invoice_number=self.next_invoice_number(),
            items=_build_items(items),
            tax_rate=Decimal(str(tax_rate)),
            currency=currency,
            status=InvoiceStatus.DRAFT.value,
            issue_date=to_naive_utc(issue_date) if issue_date else self.clock(),
            due_date=to_naive_utc(due_date),
            notes=notes,
        )
        self._persist(invoice)
        logger.info(
            "invoice.created",
            extra={"event": "invoice.created", "invoice_id": invoice.id, "invoice_number": invoice.invoice_number},
        )
        return invoice

    def get_invoice(self, user_id: str, invoice_id: str) -> Invoice:
        invoice = self.db.scalars(self._active(user_id).where(Invoice.id == invoice_id)).first()
        if invoice is None:
            raise NotFoundError(INVOICE_NOT_FOUND)
        self._apply_overdue([invoice])
        return invoice

    def list_invoices(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Page[Invoice]:
        stmt = self._active(user_id)
        if status:
            stmt = stmt.where(Invoice.status == status)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Invoice.invoice_number.ilike(pattern), Invoice.notes.ilike(pattern)))
        result = self.paginate(stmt.order_by(Invoice.created_at.desc()), page=page, limit=limit)
        self._apply_overdue(result.items)
        return result

    def list_for_client(self, user_id: str, client_id: str) -> list[Invoice]:
        stmt = self._active(user_id).where(Invoice.client_id == client_id).order_by(Invoice.created_at.desc())
        invoices = list(self.db.scalars(stmt).unique())
        self._apply_overdue(invoices)
        return invoices

    def update_invoice(self, user_id: str, invoice_id: str, **fields: Any) -> Invoice:
        invoice = self.get_invoice(user_id, invoice_id)
        if fields.get("client_id"):
            ClientService(db=self.db, clock=self.clock).get_client(user_id, fields["client_id"])
            invoice.client_id = fields["client_id"]
        if fields.get("items") is not None:
            if not fields["items"]:
                raise ValidationError("At least one item is required")
            invoice.items = _build_items(fields["items"])
        if fields.get("tax_rate") is not None:
            invoice.tax_rate = Decimal(str(fields["tax_rate"]))
        for key in ("issue_date", "due_date"):
            if fields.get(key) is not None:
                setattr(invoice, key, to_naive_utc(fields[key]))
        for key in ("currency", "notes"):
            if fields.get(key) is not None:
                setattr(invoice, key, fields[key])
        try:
            return self._persist(invoice)
        except ValidationError:
            self.rollback()
            raise

    def delete_invoice(self, user_id: str, invoice_id: str) -> None:
        invoice = self.get_invoice(user_id, invoice_id)
        invoice.is_active = False
        self.save(invoice)
        logger.info("invoice.deactivated", extra={"event": "invoice.deactivated", "invoice_id": invoice_id})

    def send(self, user_id: str, invoice_id: str) -> Invoice:
        invoice = self.get_invoice(user_id, invoice_id)
        invoicing.send(invoice)
        self._persist(invoice)
        logger.info("invoice.sent", extra={"event": "invoice.sent", "invoice_id": invoice.id})
        return invoice

    def remind(self, user_id: str, invoice_id: str) -> Invoice:
        invoice = self.get_invoice(user_id, invoice_id)
        reminder = invoicing.remind(invoice, self.clock())
        self._persist(invoice)
        logger.info(
            "invoice.reminder.sent",
            extra={
                "event": "invoice.reminder.sent",
                "invoice_id": invoice.id,
                "reminder_type": reminder.type,
                "reminder_count": len(invoice.reminders),
            },
        )
        return invoice

    def mark_paid(self, user_id: str, invoice_id: str) -> Invoice:
        invoice = self.get_invoice(user_id, invoice_id)
        invoicing.mark_paid(invoice, self.clock())
        self._persist(invoice)
        logger.info("invoice.paid", extra={"event": "invoice.paid", "invoice_id": invoice.id})
        return invoice

    def export_pdf(self, user_id: str, invoice_id: str) -> dict[str, Any]:
        """Return the download location; rendering is handled outside this service."""
        invoice = self.get_invoice(user_id, invoice_id)
        return {"download_url": f"/api/files/invoices/{invoice.id}.pdf", "invoice": invoice}
