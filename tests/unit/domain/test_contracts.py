from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from contractpro.core.exceptions import AlreadySentOrSignedError, MustBeSentFirstError, ValidationError
from contractpro.domain import contracts as lifecycle
from contractpro.models import Contract, ContractStatus

NOW = datetime(2024, 3, 15, 12, 0, 0)


def _contract(status: str = ContractStatus.DRAFT.value, expires_in_days: int = 30) -> Contract:
    return Contract(
        title="Website build",
        content="Scope of work",
        amount=Decimal("1500.00"),
        status=status,
        expires_at=NOW + timedelta(days=expires_in_days),
    )


def test_send_for_signature_sets_status_timestamp_and_signature():
    contract = lifecycle.send_for_signature(_contract(), NOW)

    assert contract.status == ContractStatus.SENT.value
    assert contract.sent_at == NOW
    assert contract.signature_id.startswith("sig-")


def test_send_for_signature_accepts_explicit_signature_id():
    contract = lifecycle.send_for_signature(_contract(), NOW, signature_id="env-42")
    assert contract.signature_id == "env-42"


@pytest.mark.parametrize(
    "status",
    [ContractStatus.SENT.value, ContractStatus.SIGNED.value, ContractStatus.EXPIRED.value, ContractStatus.CANCELLED.value],
)
def test_send_for_signature_only_from_draft(status):
    contract = _contract(status=status)
    with pytest.raises(AlreadySentOrSignedError, match="Contract has already been sent or signed"):
        lifecycle.send_for_signature(contract, NOW)
    assert contract.status == status
    assert contract.sent_at is None


def test_sign_requires_sent():
    contract = _contract()
    with pytest.raises(MustBeSentFirstError, match="Contract must be sent before it can be signed"):
        lifecycle.sign(contract, NOW)
    assert contract.status == ContractStatus.DRAFT.value
    assert contract.signed_at is None


def test_sign_after_send():
    contract = lifecycle.send_for_signature(_contract(), NOW)
    lifecycle.sign(contract, NOW + timedelta(hours=1))

    assert contract.status == ContractStatus.SIGNED.value
    assert contract.signed_at == NOW + timedelta(hours=1)


def test_signing_twice_is_rejected():
    contract = lifecycle.sign(lifecycle.send_for_signature(_contract(), NOW), NOW)
    with pytest.raises(MustBeSentFirstError):
        lifecycle.sign(contract, NOW)


def test_auto_expire_flips_stale_sent_contract():
    contract = _contract(status=ContractStatus.SENT.value, expires_in_days=-1)
    assert lifecycle.auto_expire(contract, NOW).status == ContractStatus.EXPIRED.value


@pytest.mark.parametrize("status", [ContractStatus.DRAFT.value, ContractStatus.SIGNED.value])
def test_auto_expire_leaves_draft_and_signed_alone(status):
    contract = _contract(status=status, expires_in_days=-1)
    assert lifecycle.auto_expire(contract, NOW).status == status


def test_auto_expire_is_idempotent():
    contract = _contract(status=ContractStatus.SENT.value, expires_in_days=-1)
    lifecycle.auto_expire(contract, NOW)
    lifecycle.auto_expire(contract, NOW)
    assert contract.status == ContractStatus.EXPIRED.value


def test_expired_contract_cannot_be_signed():
    contract = lifecycle.auto_expire(_contract(status=ContractStatus.SENT.value, expires_in_days=-1), NOW)
    with pytest.raises(MustBeSentFirstError):
        lifecycle.sign(contract, NOW)


def test_is_expired_excludes_signed():
    assert lifecycle.is_expired(_contract(status=ContractStatus.SENT.value, expires_in_days=-1), NOW)
    assert not lifecycle.is_expired(_contract(status=ContractStatus.SIGNED.value, expires_in_days=-1), NOW)


def test_validate_expiry_rejects_past_and_present():
    with pytest.raises(ValidationError, match="Expiration date must be in the future"):
        lifecycle.validate_expiry(NOW, NOW)
    lifecycle.validate_expiry(NOW + timedelta(seconds=1), NOW)
