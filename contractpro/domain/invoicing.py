"""Invoice computation and reminder engine.

Monetary fields are derived, never accepted from callers: every item amount
is ``quantity * rate``, the subtotal is their sum, tax is ``subtotal *
tax_rate / 100`` and the total is ``subtotal + tax``. Arithmetic is done in
``Decimal`` without rounding.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from contractpro.core.exceptions import AlreadyPaidError, InvalidTransitionError, NotYetSentError, ValidationError
from contractpro.domain.state_machine import INVOICE_STATES
from contractpro.models.enums import InvoiceStatus, ReminderStatus, ReminderType
from contractpro.models.invoice import MONEY_MAX, Invoice, PaymentReminder

INVOICE_NUMBER_PREFIX = "INV-"
HUNDRED = Decimal("100")

ALREADY_SENT = "Invoice has already been sent"
ALREADY_PAID = "Invoice has already been paid"
ALREADY_MARKED_PAID = "Invoice is already marked as paid"
NOT_YET_SENT = "Invoice must be sent before sending reminders"
TOTAL_TOO_LARGE = "Invoice total exceeds the supported maximum"

# Indexed by the number of reminders already on the invoice.
REMINDER_SEQUENCE = (ReminderType.FIRST, ReminderType.SECOND, ReminderType.FINAL)


def _to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays 0.1 instead of its binary expansion.
    return Decimal(str(value))


def generate_invoice_number(existing_count: int) -> str:
    return f"{INVOICE_NUMBER_PREFIX}{existing_count + 1:04d}"


def compute_totals(invoice: Invoice) -> Invoice:
    """Derive item amounts, subtotal, tax and total; nothing is assigned if the total is out of range."""
    amounts = [_to_decimal(item.quantity) * _to_decimal(item.rate) for item in invoice.items]
    subtotal = sum(amounts, Decimal("0"))
    tax_amount = subtotal * _to_decimal(invoice.tax_rate) / HUNDRED
    total = subtotal + tax_amount
    if total >= MONEY_MAX:
        raise ValidationError(TOTAL_TOO_LARGE)

    for item, amount in zip(invoice.items, amounts):
        item.amount = amount
    invoice.subtotal = subtotal
    invoice.tax_amount = tax_amount
    invoice.total = total
    return invoice


def mark_overdue(invoice: Invoice, now: datetime) -> Invoice:
    """Only a sent invoice past its due date becomes overdue."""
    if invoice.status == InvoiceStatus.SENT.value and invoice.due_date < now:
        invoice.status = InvoiceStatus.OVERDUE.value
    return invoice


def recompute(invoice: Invoice, now: datetime) -> Invoice:
    """Refresh derived money fields, then the overdue status. Idempotent."""
    compute_totals(invoice)
    return mark_overdue(invoice, now)


def is_overdue(invoice: Invoice, now: datetime) -> bool:
    return invoice.due_date < now and invoice.status != InvoiceStatus.PAID.value


def send(invoice: Invoice) -> Invoice:
    INVOICE_STATES.assert_transition(
        invoice.status,
        InvoiceStatus.SENT.value,
        error=InvalidTransitionError,
        reason=ALREADY_SENT,
    )
    invoice.status = InvoiceStatus.SENT.value
    return invoice


def next_reminder_type(reminder_count: int) -> ReminderType:
    return REMINDER_SEQUENCE[min(reminder_count, len(REMINDER_SEQUENCE) - 1)]


def remind(invoice: Invoice, now: datetime) -> PaymentReminder:
    """Append the next reminder in the escalation sequence and return it."""
    if invoice.status == InvoiceStatus.PAID.value:
        raise AlreadyPaidError(ALREADY_PAID)
    if invoice.status == InvoiceStatus.DRAFT.value:
        raise NotYetSentError(NOT_YET_SENT)

    reminder = PaymentReminder(
        type=next_reminder_type(len(invoice.reminders)).value,
        status=ReminderStatus.SENT.value,
        date_sent=now,
    )
    invoice.reminders.append(reminder)
    return reminder


def mark_paid(invoice: Invoice, now: datetime) -> Invoice:
    INVOICE_STATES.assert_transition(
        invoice.status,
        InvoiceStatus.PAID.value,
        error=AlreadyPaidError,
        reason=ALREADY_MARKED_PAID,
    )
    invoice.status = InvoiceStatus.PAID.value
    invoice.paid_at = now
    return invoice
