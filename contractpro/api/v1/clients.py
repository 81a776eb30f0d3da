"""Client endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, Query, status

from contractpro.api.v1._authz import require_user as _authorize
from contractpro.api.v1._responses import domain_errors, dump, ok, paged, resolve_limit
from contractpro.database.db import get_db_session
from contractpro.schemas.clients import ClientCreateRequest, ClientResponse, ClientUpdateRequest
from contractpro.schemas.contracts import ContractResponse
from contractpro.schemas.invoices import InvoiceResponse
from contractpro.services.client_service import ClientService
from contractpro.services.contract_service import ContractService
from contractpro.services.invoice_service import InvoiceService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("")
def list_clients(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    search: str | None = Query(default=None, max_length=100),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["clients.read"])
    with get_db_session() as session, domain_errors():
        result = ClientService(db=session).list_clients(
            user.user_id, page=page, limit=resolve_limit(limit), search=search
        )
        return paged(ClientResponse, result)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["clients.write"])
    with get_db_session() as session, domain_errors():
        client = ClientService(db=session).create_client(user.user_id, **payload.model_dump(exclude_none=True))
        return ok(dump(ClientResponse, client), message="Client created successfully")


@router.get("/{client_id}")
def get_client(client_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["clients.read"])
    with get_db_session() as session, domain_errors():
        return ok(dump(ClientResponse, ClientService(db=session).get_client(user.user_id, client_id)))


@router.put("/{client_id}")
def update_client(
    client_id: str,
    payload: ClientUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["clients.write"])
    with get_db_session() as session, domain_errors():
        client = ClientService(db=session).update_client(
            user.user_id, client_id, **payload.model_dump(exclude_none=True)
        )
        return ok(dump(ClientResponse, client), message="Client updated successfully")


@router.delete("/{client_id}")
def delete_client(client_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["clients.write"])
    with get_db_session() as session, domain_errors():
        ClientService(db=session).delete_client(user.user_id, client_id)
        return ok(message="Client deleted successfully")


@router.get("/{client_id}/contracts")
def list_client_contracts(
    client_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.read"])
    with get_db_session() as session, domain_errors():
        ClientService(db=session).get_client(user.user_id, client_id)
        contracts = ContractService(db=session).list_for_client(user.user_id, client_id)
        return ok([dump(ContractResponse, contract) for contract in contracts])


@router.get("/{client_id}/invoices")
def list_client_invoices(
    client_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["invoices.read"])
    with get_db_session() as session, domain_errors():
        ClientService(db=session).get_client(user.user_id, client_id)
        invoices = InvoiceService(db=session).list_for_client(user.user_id, client_id)
        return ok([dump(InvoiceResponse, invoice) for invoice in invoices])
