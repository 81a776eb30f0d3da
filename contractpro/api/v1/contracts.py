"""Contract endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, Query, status

from contractpro.api.v1._authz import require_user as _authorize
from contractpro.api.v1._responses import domain_errors, dump, ok, paged, resolve_limit
from contractpro.database.db import get_db_session
from contractpro.models import ContractStatus
from contractpro.schemas.contracts import ContractCreateRequest, ContractResponse, ContractUpdateRequest
from contractpro.services.contract_service import ContractService

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("")
def list_contracts(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    status_filter: ContractStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=100),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.read"])
    with get_db_session() as session, domain_errors():
        result = ContractService(db=session).list_contracts(
            user.user_id,
            page=page,
            limit=resolve_limit(limit),
            status=status_filter.value if status_filter else None,
            search=search,
        )
        return paged(ContractResponse, result)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.write"])
    with get_db_session() as session, domain_errors():
        contract = ContractService(db=session).create_contract(
            user.user_id,
            client_id=payload.client_id,
            title=payload.title,
            content=payload.content,
            amount=payload.amount,
            expires_at=payload.expires_at,
            currency=payload.currency.value,
            terms=payload.terms,
        )
        return ok(dump(ContractResponse, contract), message="Contract created successfully")


@router.get("/{contract_id}")
def get_contract(contract_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["contracts.read"])
    with get_db_session() as session, domain_errors():
        return ok(dump(ContractResponse, ContractService(db=session).get_contract(user.user_id, contract_id)))


@router.put("/{contract_id}")
def update_contract(
    contract_id: str,
    payload: ContractUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.write"])
    fields = payload.model_dump(exclude_none=True, mode="python")
    if "currency" in fields:
        fields["currency"] = payload.currency.value
    with get_db_session() as session, domain_errors():
        contract = ContractService(db=session).update_contract(user.user_id, contract_id, **fields)
        return ok(dump(ContractResponse, contract), message="Contract updated successfully")


@router.delete("/{contract_id}")
def delete_contract(contract_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["contracts.write"])
    with get_db_session() as session, domain_errors():
        ContractService(db=session).delete_contract(user.user_id, contract_id)
        return ok(message="Contract deleted successfully")


@router.post("/{contract_id}/send-signature")
def send_for_signature(
    contract_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.write"])
    with get_db_session() as session, domain_errors():
        contract = ContractService(db=session).send_for_signature(user.user_id, contract_id)
        return ok(
            {"signature_id": contract.signature_id, "contract": dump(ContractResponse, contract)},
            message="Contract sent for signature successfully",
        )


@router.post("/{contract_id}/sign")
def sign_contract(contract_id: str, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["contracts.write"])
    with get_db_session() as session, domain_errors():
        contract = ContractService(db=session).sign(user.user_id, contract_id)
        return ok(dump(ContractResponse, contract), message="Contract signed successfully")


@router.get("/{contract_id}/export-pdf")
def export_contract_pdf(
    contract_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["contracts.read"])
    with get_db_session() as session, domain_errors():
        export = ContractService(db=session).export_pdf(user.user_id, contract_id)
        return ok(
            {"download_url": export["download_url"], "contract": dump(ContractResponse, export["contract"])},
            message="PDF export initiated",
        )
