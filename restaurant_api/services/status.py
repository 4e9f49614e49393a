"""Reservation status state machine

Only legality is decided here; persisting a transition is the job of
the seating service.
"""

from typing import Any, Optional

from restaurant_api.errors import ValidationError
from restaurant_api.models.reservation import ReservationStatus

KNOWN_STATUSES = frozenset(status.value for status in ReservationStatus)
TERMINAL_STATUSES = frozenset({ReservationStatus.FINISHED.value, ReservationStatus.CANCELLED.value})


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def check_transition(current: str, requested: Any) -> Optional[ValidationError]:
    """Return the error for an illegal ``current -> requested`` move, else None"""
    if is_terminal(current):
        return ValidationError(f"A {current} reservation cannot be updated.")
    if requested == ReservationStatus.CANCELLED.value:
        return None
    if not isinstance(requested, str) or requested not in KNOWN_STATUSES:
        return ValidationError("unknown status.")
    return None
