from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from contractpro.core.clock import fixed_clock
from contractpro.core.exceptions import AlreadySentOrSignedError, MustBeSentFirstError, NotFoundError, ValidationError
from contractpro.models import Contract, ContractStatus
from contractpro.services.contract_service import ContractService


def _create(service: ContractService, owner, client_record, expires_in_days: int = 10) -> Contract:
    return service.create_contract(
        owner.id,
        client_id=client_record.id,
        title="Website build",
        content="Scope",
        amount="1500.00",
        expires_at=service.clock() + timedelta(days=expires_in_days),
    )


def test_create_contract_starts_as_draft(db, owner, client_record, clock):
    contract = _create(ContractService(db=db, clock=clock), owner, client_record)

    assert contract.status == ContractStatus.DRAFT.value
    assert contract.amount == Decimal("1500.00")
    assert contract.version == 1
    assert contract.client.name == "Ada"


def test_create_contract_rejects_past_expiry(db, owner, client_record, clock):
    with pytest.raises(ValidationError, match="Expiration date must be in the future"):
        _create(ContractService(db=db, clock=clock), owner, client_record, expires_in_days=-1)
    assert db.query(Contract).count() == 0


def test_create_contract_requires_owned_client(db, owner, clock):
    service = ContractService(db=db, clock=clock)
    with pytest.raises(NotFoundError, match="Client not found"):
        service.create_contract(
            owner.id,
            client_id="missing",
            title="t",
            content="c",
            amount=1,
            expires_at=clock() + timedelta(days=1),
        )


def test_send_then_sign(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)

    service.send_for_signature(owner.id, contract.id)
    with pytest.raises(AlreadySentOrSignedError):
        service.send_for_signature(owner.id, contract.id)
    signed = service.sign(owner.id, contract.id)

    assert signed.status == ContractStatus.SIGNED.value
    assert signed.sent_at == clock()
    assert signed.signed_at == clock()
    assert signed.signature_id.startswith("sig-")


def test_sign_draft_is_rejected_and_not_persisted(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)

    with pytest.raises(MustBeSentFirstError):
        service.sign(owner.id, contract.id)
    assert service.get_contract(owner.id, contract.id).status == ContractStatus.DRAFT.value


def test_sent_contract_expires_lazily_on_read(db, owner, client_record, clock):
    contract = _create(ContractService(db=db, clock=clock), owner, client_record, expires_in_days=2)
    ContractService(db=db, clock=clock).send_for_signature(owner.id, contract.id)

    later = ContractService(db=db, clock=fixed_clock(clock() + timedelta(days=3)))
    assert later.get_contract(owner.id, contract.id).status == ContractStatus.EXPIRED.value
    with pytest.raises(MustBeSentFirstError):
        later.sign(owner.id, contract.id)

    # The correction was persisted, so even a reader with the old clock sees it.
    fresh = db.get(Contract, contract.id, populate_existing=True)
    assert fresh.status == ContractStatus.EXPIRED.value


def test_list_contracts_filters_by_status(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    first = _create(service, owner, client_record)
    _create(service, owner, client_record)
    service.send_for_signature(owner.id, first.id)

    sent = service.list_contracts(owner.id, status=ContractStatus.SENT.value)
    assert [item.id for item in sent.items] == [first.id]
    assert service.list_contracts(owner.id).total == 2


def test_update_does_not_recheck_expiry(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)

    updated = service.update_contract(owner.id, contract.id, expires_at=clock() - timedelta(days=1), amount="99.50")

    assert updated.expires_at == clock() - timedelta(days=1)
    assert updated.amount == Decimal("99.50")
    assert updated.status == ContractStatus.DRAFT.value


def test_delete_contract_hides_it(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)
    service.delete_contract(owner.id, contract.id)

    with pytest.raises(NotFoundError, match="Contract not found"):
        service.get_contract(owner.id, contract.id)
    assert service.list_for_client(owner.id, client_record.id) == []


def test_export_pdf_returns_download_url(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)

    export = service.export_pdf(owner.id, contract.id)
    assert export["download_url"] == f"/api/files/contracts/{contract.id}.pdf"


def test_reads_report_expired_flag(db, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record, expires_in_days=2)
    assert contract.is_expired is False

    later = ContractService(db=db, clock=fixed_clock(clock() + timedelta(days=3)))
    assert later.get_contract(owner.id, contract.id).is_expired is True


def test_amount_reloads_exactly(db, session_factory, owner, client_record, clock):
    service = ContractService(db=db, clock=clock)
    contract = _create(service, owner, client_record)
    service.update_contract(owner.id, contract.id, amount="9999999999.99")

    reader = session_factory()
    assert reader.get(Contract, contract.id).amount == Decimal("9999999999.99")
    reader.close()
