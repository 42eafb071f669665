from __future__ import annotations

import pytest

from legatepro.billing.transitions import invoice_state_machine
from legatepro.core.exceptions import InvalidTransitionError, ValidationError


def test_invoice_lifecycle_allows_forward_moves():
    assert invoice_state_machine.can_transition("DRAFT", "SENT")
    assert invoice_state_machine.can_transition("SENT", "PARTIAL")
    assert invoice_state_machine.can_transition("PARTIAL", "PAID")
    assert invoice_state_machine.allowed_targets("UNPAID") == {"PARTIAL", "PAID", "VOID"}


def test_terminal_states_have_no_targets():
    assert invoice_state_machine.allowed_targets("PAID") == set()
    assert invoice_state_machine.allowed_targets("VOID") == set()


def test_disallowed_transition_raises_validation_error():
    with pytest.raises(InvalidTransitionError, match="PAID -> SENT"):
        invoice_state_machine.assert_transition("PAID", "SENT")
    with pytest.raises(ValidationError):
        invoice_state_machine.assert_transition("DRAFT", "PAID")
