"""
Quote lifecycle rules.

    pending -> accepted | rejected
    accepted -> completed

rejected and completed are terminal. Expiry is stamped at creation and
reported, never enforced.
"""

from datetime import datetime, timedelta

from models.quote import QuoteStatus
from services.exceptions import InvalidTransitionError

ALLOWED_TRANSITIONS: dict[QuoteStatus, frozenset[QuoteStatus]] = {
    QuoteStatus.PENDING: frozenset({QuoteStatus.ACCEPTED, QuoteStatus.REJECTED}),
    QuoteStatus.ACCEPTED: frozenset({QuoteStatus.COMPLETED}),
    QuoteStatus.REJECTED: frozenset(),
    QuoteStatus.COMPLETED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


def compute_expiry(created_at: datetime, validity_days: int) -> datetime:
    return created_at + timedelta(days=validity_days)


def can_transition(current: QuoteStatus, target: QuoteStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(
    current: QuoteStatus,
    target: QuoteStatus,
    enforce: bool = True,
) -> None:
    """
    Check a status change.

    Args:
        current: Status the quote is in
        target: Requested status
        enforce: When False any enumerated status is accepted

    Raises:
        InvalidTransitionError: If enforced and the graph has no such edge
    """
    if not enforce:
        return
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Quote is {current.value}; no further status changes are allowed"
        )
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot change quote status from {current.value} to {target.value}"
        )
