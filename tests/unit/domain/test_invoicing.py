from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from contractpro.core.exceptions import AlreadyPaidError, InvalidTransitionError, NotYetSentError, ValidationError
from contractpro.domain import invoicing
from contractpro.models import Invoice, InvoiceItem, InvoiceStatus

NOW = datetime(2024, 3, 15, 12, 0, 0)


def _invoice(status: str = InvoiceStatus.DRAFT.value, due_in_days: int = 14, tax_rate: str = "10") -> Invoice:
    return Invoice(
        invoice_number="INV-0001",
        status=status,
        tax_rate=Decimal(tax_rate),
        issue_date=NOW,
        due_date=NOW + timedelta(days=due_in_days),
        items=[
            InvoiceItem(description="Design", quantity=Decimal("2"), rate=Decimal("100")),
            InvoiceItem(description="Hosting", quantity=Decimal("1"), rate=Decimal("50")),
        ],
    )


def test_compute_totals_derives_every_money_field():
    invoice = invoicing.compute_totals(_invoice())

    assert [item.amount for item in invoice.items] == [Decimal("200"), Decimal("50")]
    assert invoice.subtotal == Decimal("250")
    assert invoice.tax_amount == Decimal("25")
    assert invoice.total == Decimal("275")


def test_compute_totals_overwrites_caller_supplied_values():
    invoice = _invoice(tax_rate="0")
    invoice.items[0].amount = Decimal("9999")
    invoice.total = Decimal("1")

    invoicing.compute_totals(invoice)

    assert invoice.items[0].amount == Decimal("200")
    assert invoice.total == Decimal("250")


def test_compute_totals_is_exact_for_fractional_inputs():
    invoice = Invoice(
        tax_rate=Decimal("7.25"),
        items=[InvoiceItem(description="x", quantity=Decimal("0.10"), rate=Decimal("0.20"))],
    )
    invoicing.compute_totals(invoice)

    assert invoice.subtotal == Decimal("0.02")
    assert invoice.tax_amount == Decimal("0.00145")
    assert invoice.total == Decimal("0.02145")


def test_recompute_is_idempotent():
    invoice = _invoice(status=InvoiceStatus.SENT.value, due_in_days=-1)
    invoicing.recompute(invoice, NOW)
    first = (invoice.subtotal, invoice.tax_amount, invoice.total, invoice.status)

    invoicing.recompute(invoice, NOW)

    assert (invoice.subtotal, invoice.tax_amount, invoice.total, invoice.status) == first
    assert invoice.status == InvoiceStatus.OVERDUE.value


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value),
        (InvoiceStatus.DRAFT.value, InvoiceStatus.DRAFT.value),
        (InvoiceStatus.PAID.value, InvoiceStatus.PAID.value),
        (InvoiceStatus.CANCELLED.value, InvoiceStatus.CANCELLED.value),
    ],
)
def test_only_sent_invoices_past_due_become_overdue(status, expected):
    invoice = invoicing.mark_overdue(_invoice(status=status, due_in_days=-3), NOW)
    assert invoice.status == expected


def test_sent_invoice_not_yet_due_stays_sent():
    invoice = invoicing.mark_overdue(_invoice(status=InvoiceStatus.SENT.value, due_in_days=1), NOW)
    assert invoice.status == InvoiceStatus.SENT.value


def test_is_overdue_ignores_paid_invoices():
    assert invoicing.is_overdue(_invoice(status=InvoiceStatus.SENT.value, due_in_days=-1), NOW)
    assert not invoicing.is_overdue(_invoice(status=InvoiceStatus.PAID.value, due_in_days=-1), NOW)


def test_generate_invoice_number_pads_to_four_digits():
    assert invoicing.generate_invoice_number(0) == "INV-0001"
    assert invoicing.generate_invoice_number(3) == "INV-0004"
    assert invoicing.generate_invoice_number(12344) == "INV-12345"


def test_send_moves_draft_to_sent():
    invoice = invoicing.send(_invoice())
    assert invoice.status == InvoiceStatus.SENT.value


@pytest.mark.parametrize("status", [InvoiceStatus.SENT.value, InvoiceStatus.PAID.value, InvoiceStatus.OVERDUE.value])
def test_send_rejects_non_draft(status):
    invoice = _invoice(status=status)
    with pytest.raises(InvalidTransitionError, match="Invoice has already been sent"):
        invoicing.send(invoice)
    assert invoice.status == status


def test_reminders_escalate_and_stay_final():
    invoice = _invoice(status=InvoiceStatus.SENT.value)
    kinds = [invoicing.remind(invoice, NOW + timedelta(days=day)).type for day in range(4)]

    assert kinds == ["first", "second", "final", "final"]
    assert [reminder.position for reminder in invoice.reminders] == [0, 1, 2, 3]
    assert all(reminder.status == "sent" for reminder in invoice.reminders)


def test_remind_rejects_draft_and_paid_without_appending():
    draft = _invoice()
    with pytest.raises(NotYetSentError, match="Invoice must be sent before sending reminders"):
        invoicing.remind(draft, NOW)
    assert list(draft.reminders) == []

    paid = _invoice(status=InvoiceStatus.PAID.value)
    with pytest.raises(AlreadyPaidError, match="Invoice has already been paid"):
        invoicing.remind(paid, NOW)
    assert list(paid.reminders) == []


def test_remind_allowed_on_overdue_invoice():
    invoice = _invoice(status=InvoiceStatus.OVERDUE.value, due_in_days=-5)
    assert invoicing.remind(invoice, NOW).type == "first"


@pytest.mark.parametrize(
    "status",
    [InvoiceStatus.DRAFT.value, InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value, InvoiceStatus.CANCELLED.value],
)
def test_mark_paid_from_any_unpaid_status(status):
    invoice = invoicing.mark_paid(_invoice(status=status), NOW)
    assert invoice.status == InvoiceStatus.PAID.value
    assert invoice.paid_at == NOW


def test_mark_paid_twice_is_rejected_and_keeps_first_timestamp():
    invoice = invoicing.mark_paid(_invoice(status=InvoiceStatus.SENT.value), NOW)
    with pytest.raises(AlreadyPaidError, match="Invoice is already marked as paid"):
        invoicing.mark_paid(invoice, NOW + timedelta(days=1))
    assert invoice.paid_at == NOW


def test_paid_invoice_never_becomes_overdue():
    invoice = invoicing.mark_paid(_invoice(status=InvoiceStatus.SENT.value, due_in_days=1), NOW)
    invoicing.recompute(invoice, NOW + timedelta(days=30))
    assert invoice.status == InvoiceStatus.PAID.value


def test_compute_totals_rejects_out_of_range_total_without_mutation():
    invoice = Invoice(
        tax_rate=Decimal("100"),
        items=[InvoiceItem(description="x", quantity=Decimal("9999999999.99"), rate=Decimal("9999999999.99"))],
    )
    invoice.total = Decimal("1")

    with pytest.raises(ValidationError, match="Invoice total exceeds the supported maximum"):
        invoicing.compute_totals(invoice)
    assert invoice.total == Decimal("1")
    assert invoice.items[0].amount is None
