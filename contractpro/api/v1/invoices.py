"""Invoice endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, Query, status

from contractpro.api.v1._authz import require_user as _authorize
from contractpro.api.v1._responses import domain_errors, dump, ok, paged, resolve_limit
from contractpro.database.db import get_db_session
from contractpro.models import InvoiceStatus
from contractpro.schemas.invoices import InvoiceCreateRequest, InvoiceResponse, InvoiceUpdateRequest
from contractpro.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("")
def list_invoices(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    status_filter: InvoiceStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=100),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["invoices.read"])
    with get_db_session() as session, domain_errors():
        result = InvoiceService(db=session).list_invoices(
            user.user_id,
            page=page,
            limit=resolve_limit(limit),
            status=status_filter.value if status_filter else None,
            search=search,
        )
        return paged(InvoiceResponse, result)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    with get_db_session() as session, domain_errors():
        invoice = InvoiceService(db=session).create_invoice(
            user.user_id,
            client_id=payload.client_id,
            items=[item.model_dump() for item in payload.items],
            due_date=payload.due_date,
            tax_rate=payload.tax_rate,
            currency=payload.currency.value,
            issue_date=payload.issue_date,
            notes=payload.notes,
        )
        return ok(dump(InvoiceResponse, invoice), message="Invoice created successfully")


@router.get("/{invoice_id}")
def get_invoice(invoice_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["invoices.read"])
    with get_db_session() as session, domain_errors():
        return ok(dump(InvoiceResponse, InvoiceService(db=session).get_invoice(user.user_id, invoice_id)))


@router.put("/{invoice_id}")
def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    fields = payload.model_dump(exclude_none=True)
    if payload.currency is not None:
        fields["currency"] = payload.currency.value
    with get_db_session() as session, domain_errors():
        invoice = InvoiceService(db=session).update_invoice(user.user_id, invoice_id, **fields)
        return ok(dump(InvoiceResponse, invoice), message="Invoice updated successfully")


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    with get_db_session() as session, domain_errors():
        InvoiceService(db=session).delete_invoice(user.user_id, invoice_id)
        return ok(message="Invoice deleted successfully")


@router.post("/{invoice_id}/send")
def send_invoice(invoice_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    with get_db_session() as session, domain_errors():
        invoice = InvoiceService(db=session).send(user.user_id, invoice_id)
        return ok(dump(InvoiceResponse, invoice), message="Invoice sent successfully")


@router.post("/{invoice_id}/remind")
def send_reminder(invoice_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    with get_db_session() as session, domain_errors():
        invoice = InvoiceService(db=session).remind(user.user_id, invoice_id)
        return ok(dump(InvoiceResponse, invoice), message="Payment reminder sent successfully")


@router.post("/{invoice_id}/mark-paid")
def mark_paid(invoice_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["invoices.write"])
    with get_db_session() as session, domain_errors():
        invoice = InvoiceService(db=session).mark_paid(user.user_id, invoice_id)
        return ok(dump(InvoiceResponse, invoice), message="Invoice marked as paid")


@router.get("/{invoice_id}/export-pdf")
def export_invoice_pdf(
    invoice_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["invoices.read"])
    with get_db_session() as session, domain_errors():
        export = InvoiceService(db=session).export_pdf(user.user_id, invoice_id)
        return ok(
            {"download_url": export["download_url"], "invoice": dump(InvoiceResponse, export["invoice"])},
            message="PDF export initiated",
        )
