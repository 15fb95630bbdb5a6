"""Escrow Ledger State Machine Guard.

Uses python-statemachine to enforce legal lifecycle transitions. Every
mutating ledger operation asks this guard for its target status before
touching any table, so an operation on a SETTLED ledger is rejected with
TransitionNotAllowed before it can write.

Transition table:
    LISTED -> LISTED   (list_asset)
    FUNDED -> FUNDED   (list_asset)
    LISTED -> FUNDED   (deposit)
    FUNDED -> FUNDED   (deposit)
    FUNDED -> SETTLED  (settle)
"""

from __future__ import annotations

from statemachine import State, StateMachine


class LedgerStateMachine(StateMachine):
    """State machine that guards escrow ledger lifecycle transitions.

    Usage:
        sm = LedgerStateMachine(current_status="FUNDED")
        sm.settle()          # transitions to SETTLED
        sm.current_state     # State('SETTLED', ...)
    """

    # --- States ---
    LISTED = State("LISTED", initial=True)
    FUNDED = State("FUNDED")
    SETTLED = State("SETTLED", final=True)

    # --- Events / Transitions ---
    list_asset = LISTED.to(LISTED) | FUNDED.to(FUNDED)
    deposit = LISTED.to(FUNDED) | FUNDED.to(FUNDED)
    settle = FUNDED.to(SETTLED)

    def __init__(self, current_status: str = "LISTED") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current LedgerStatus value (e.g., "FUNDED").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches LedgerStatus)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return a list of event ids that can fire from the current state."""
        return [event.id for event in self.allowed_events]


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a state transition and return the new status.

    Creates a temporary state machine, fires the named event, and returns
    the resulting status string. Nothing outside the temporary machine is
    touched, so callers can validate before mutating.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = LedgerStateMachine(current_status=current_status)

    event_method = getattr(sm, event_name, None)
    if event_method is None or not callable(event_method):
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )

    event_method()
    return sm.status
