"""Transition tables for contract and invoice status."""

from __future__ import annotations

from contractpro.core.exceptions import InvalidTransitionError
from contractpro.models.enums import ContractStatus, InvoiceStatus


class StateMachine:
    """Small table-driven state machine shared by the lifecycle modules."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(
        self,
        current: str,
        target: str,
        error: type[InvalidTransitionError] = InvalidTransitionError,
        reason: str | None = None,
    ) -> None:
        if not self.can_transition(current=current, target=target):
            raise error(reason or f"Transition not allowed: {current} -> {target}")

    def is_terminal(self, state: str) -> bool:
        return not self._transitions.get(state)


CONTRACT_STATES = StateMachine(
    {
        ContractStatus.DRAFT.value: {ContractStatus.SENT.value, ContractStatus.CANCELLED.value},
        ContractStatus.SENT.value: {
            ContractStatus.SIGNED.value,
            ContractStatus.EXPIRED.value,
            ContractStatus.CANCELLED.value,
        },
        ContractStatus.SIGNED.value: set(),
        ContractStatus.EXPIRED.value: set(),
        ContractStatus.CANCELLED.value: set(),
    }
)

# Payment is accepted from any unpaid status, drafts included.
INVOICE_STATES = StateMachine(
    {
        InvoiceStatus.DRAFT.value: {
            InvoiceStatus.SENT.value,
            InvoiceStatus.PAID.value,
            InvoiceStatus.CANCELLED.value,
        },
        InvoiceStatus.SENT.value: {
            InvoiceStatus.PAID.value,
            InvoiceStatus.OVERDUE.value,
            InvoiceStatus.CANCELLED.value,
        },
        InvoiceStatus.OVERDUE.value: {InvoiceStatus.PAID.value, InvoiceStatus.CANCELLED.value},
        InvoiceStatus.CANCELLED.value: {InvoiceStatus.PAID.value},
        InvoiceStatus.PAID.value: set(),
    }
)
