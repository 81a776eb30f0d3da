"""Contract lifecycle: send for signature, sign, and lazy expiry.

Functions mutate the contract passed in and return it. They never touch the
session; the caller persists the result. Every precondition is checked before
any field changes, so a raised error leaves the contract untouched.
"""

from __future__ import annotations

from datetime import datetime

from contractpro.core.exceptions import (
    AlreadySentOrSignedError,
    MustBeSentFirstError,
    ValidationError,
)
from contractpro.domain.state_machine import CONTRACT_STATES
from contractpro.models.contract import Contract
from contractpro.models.enums import ContractStatus
from contractpro.utils.ids import new_signature_id

ALREADY_SENT_OR_SIGNED = "Contract has already been sent or signed"
MUST_BE_SENT_FIRST = "Contract must be sent before it can be signed"
EXPIRY_IN_PAST = "Expiration date must be in the future"


def validate_expiry(expires_at: datetime, now: datetime) -> None:
    """Creation-time check; updates deliberately skip it."""
    if expires_at <= now:
        raise ValidationError(EXPIRY_IN_PAST)


def auto_expire(contract: Contract, now: datetime) -> Contract:
    """Flip a sent contract past its expiry to expired. Signed contracts are left alone."""
    if contract.status == ContractStatus.SENT.value and contract.expires_at < now:
        contract.status = ContractStatus.EXPIRED.value
    return contract


def is_expired(contract: Contract, now: datetime) -> bool:
    return contract.expires_at < now and contract.status != ContractStatus.SIGNED.value


def send_for_signature(contract: Contract, now: datetime, signature_id: str | None = None) -> Contract:
    CONTRACT_STATES.assert_transition(
        contract.status,
        ContractStatus.SENT.value,
        error=AlreadySentOrSignedError,
        reason=ALREADY_SENT_OR_SIGNED,
    )
    contract.status = ContractStatus.SENT.value
    contract.sent_at = now
    contract.signature_id = signature_id or new_signature_id()
    return contract


def sign(contract: Contract, now: datetime) -> Contract:
    CONTRACT_STATES.assert_transition(
        contract.status,
        ContractStatus.SIGNED.value,
        error=MustBeSentFirstError,
        reason=MUST_BE_SENT_FIRST,
    )
    contract.status = ContractStatus.SIGNED.value
    contract.signed_at = now
    return contract
