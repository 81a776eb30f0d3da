"""Contract service for contract workflow operations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import or_, select

from contractpro.core.clock import to_naive_utc
from contractpro.core.exceptions import NotFoundError
from contractpro.domain import contracts as lifecycle
from contractpro.models import Contract, ContractStatus, Currency
from contractpro.services.base_service import BaseService, Page
from contractpro.services.client_service import ClientService

logger = logging.getLogger(__name__)

CONTRACT_NOT_FOUND = "Contract not found"

UPDATABLE_FIELDS = ("title", "content", "terms", "amount", "currency", "expires_at", "client_id")


class ContractService(BaseService):
    """Service for contract CRUD and signature transitions."""

    def _active(self, user_id: str):
        return select(Contract).where(Contract.user_id == user_id, Contract.is_active.is_(True))

    def _apply_expiry(self, contracts: Iterable[Contract]) -> None:
        """Lazily expire stale contracts on read and persist the correction."""
        now = self.clock()
        expired = []
        for contract in contracts:
            previous = contract.status
            lifecycle.auto_expire(contract, now)
            if contract.status != previous:
                contract.updated_at = now
                expired.append(contract.id)
            contract.is_expired = lifecycle.is_expired(contract, now)
        if expired:
            self.commit()
            logger.info("contract.auto_expired", extra={"event": "contract.auto_expired", "contract_ids": expired})

    def _persist(self, contract: Contract) -> Contract:
        now = self.clock()
        lifecycle.auto_expire(contract, now)
        self.save(contract)
        contract.is_expired = lifecycle.is_expired(contract, now)
        return contract

    def create_contract(
        self,
        user_id: str,
        client_id: str,
        title: str,
        content: str,
        amount: Decimal | int | str,
        expires_at: datetime,
        currency: str = Currency.USD.value,
        terms: str | None = None,
    ) -> Contract:
        ClientService(db=self.db, clock=self.clock).get_client(user_id, client_id)
        expires_at = to_naive_utc(expires_at)
        lifecycle.validate_expiry(expires_at, self.clock())

        contract = Contract(
            user_id=user_id,
            client_id=client_id,
            title=title,
            content=content,
            terms=terms,
            amount=Decimal(str(amount)),
            currency=currency,
            status=ContractStatus.DRAFT.value,
            expires_at=expires_at,
        )
        self._persist(contract)
        logger.info("contract.created", extra={"event": "contract.created", "contract_id": contract.id})
        return contract

    def get_contract(self, user_id: str, contract_id: str) -> Contract:
        contract = self.db.scalars(self._active(user_id).where(Contract.id == contract_id)).first()
        if contract is None:
            raise NotFoundError(CONTRACT_NOT_FOUND)
        self._apply_expiry([contract])
        return contract

    def list_contracts(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Page[Contract]:
        stmt = self._active(user_id)
        if status:
            stmt = stmt.where(Contract.status == status)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Contract.title.ilike(pattern), Contract.content.ilike(pattern)))
        result = self.paginate(stmt.order_by(Contract.created_at.desc()), page=page, limit=limit)
        self._apply_expiry(result.items)
        return result

    def list_for_client(self, user_id: str, client_id: str) -> list[Contract]:
        stmt = self._active(user_id).where(Contract.client_id == client_id).order_by(Contract.created_at.desc())
        contracts = list(self.db.scalars(stmt).unique())
        self._apply_expiry(contracts)
        return contracts

    def update_contract(self, user_id: str, contract_id: str, **fields: Any) -> Contract:
        """Apply field changes. The expiry is not re-checked against the clock here."""
        contract = self.get_contract(user_id, contract_id)
        if fields.get("client_id"):
            ClientService(db=self.db, clock=self.clock).get_client(user_id, fields["client_id"])
        for key in UPDATABLE_FIELDS:
            if fields.get(key) is None:
                continue
            value = fields[key]
            if key == "amount":
                value = Decimal(str(value))
            elif key == "expires_at":
                value = to_naive_utc(value)
            setattr(contract, key, value)
        return self._persist(contract)

    def delete_contract(self, user_id: str, contract_id: str) -> None:
        contract = self.get_contract(user_id, contract_id)
        contract.is_active = False
        self.save(contract)
        logger.info("contract.deactivated", extra={"event": "contract.deactivated", "contract_id": contract_id})

    def send_for_signature(self, user_id: str, contract_id: str) -> Contract:
        contract = self.get_contract(user_id, contract_id)
        lifecycle.send_for_signature(contract, self.clock())
        self._persist(contract)
        logger.info(
            "contract.sent_for_signature",
            extra={
                "event": "contract.sent_for_signature",
                "contract_id": contract.id,
                "signature_id": contract.signature_id,
            },
        )
        return contract

    def sign(self, user_id: str, contract_id: str) -> Contract:
        contract = self.get_contract(user_id, contract_id)
        lifecycle.sign(contract, self.clock())
        self._persist(contract)
        logger.info("contract.signed", extra={"event": "contract.signed", "contract_id": contract.id})
        return contract

    def export_pdf(self, user_id: str, contract_id: str) -> dict[str, Any]:
        """Return the download location; rendering is handled outside this service."""
        contract = self.get_contract(user_id, contract_id)
        return {"download_url": f"/api/files/contracts/{contract.id}.pdf", "contract": contract}
