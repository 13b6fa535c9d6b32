"""Canonical state transition helpers for lead sub-states."""

from __future__ import annotations

from leadflow.core.exceptions import ValidationError


class InvalidTransitionError(ValidationError):
    """Raised when a disallowed state transition is attempted."""

    default_code = "InvalidTransition"


class StateMachine:
    """Simple table-driven state machine."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")
