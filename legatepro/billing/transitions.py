"""Invoice lifecycle transitions."""

from __future__ import annotations

from legatepro.core.exceptions import InvalidTransitionError
from legatepro.models.enums import InvoiceStatus


class StateMachine:
    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def allowed_targets(self, current: str) -> set[str]:
        return set(self._transitions.get(current, set()))

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")


INVOICE_TRANSITIONS: dict[str, set[str]] = {
    InvoiceStatus.DRAFT.value: {InvoiceStatus.SENT.value, InvoiceStatus.VOID.value},
    InvoiceStatus.SENT.value: {
        InvoiceStatus.UNPAID.value,
        InvoiceStatus.PARTIAL.value,
        InvoiceStatus.PAID.value,
        InvoiceStatus.VOID.value,
    },
    InvoiceStatus.UNPAID.value: {
        InvoiceStatus.PARTIAL.value,
        InvoiceStatus.PAID.value,
        InvoiceStatus.VOID.value,
    },
    InvoiceStatus.PARTIAL.value: {InvoiceStatus.PAID.value, InvoiceStatus.VOID.value},
    InvoiceStatus.PAID.value: set(),
    InvoiceStatus.VOID.value: set(),
}

invoice_state_machine = StateMachine(INVOICE_TRANSITIONS)
