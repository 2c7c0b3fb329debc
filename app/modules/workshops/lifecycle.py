"""Workshop lifecycle state machine.

States: draft → live → completed
completed is terminal; there is no way back to an earlier state.
"""
from typing import Dict, List, Optional

DRAFT = "draft"
LIVE = "live"
COMPLETED = "completed"

STATUSES = (DRAFT, LIVE, COMPLETED)


class WorkshopStateError(ValueError):
    """Raised when an invalid workshop state transition is attempted."""


VALID_TRANSITIONS: Dict[str, List[str]] = {
    DRAFT: [LIVE],
    LIVE: [COMPLETED],
    COMPLETED: [],  # terminal
}


def normalize_status(status: Optional[str]) -> str:
    """Rows created before the status column existed carry NULL; they are drafts."""
    return status or DRAFT


def can_transition(current: Optional[str], target: str) -> bool:
    """Check if a workshop state transition is valid."""
    return target in VALID_TRANSITIONS.get(normalize_status(current), [])


def validate_transition(current: Optional[str], target: str) -> None:
    """Validate a workshop state transition, raising WorkshopStateError if invalid."""
    current = normalize_status(current)
    if not can_transition(current, target):
        allowed = VALID_TRANSITIONS.get(current, [])
        raise WorkshopStateError(
            f"Cannot transition workshop from '{current}' to '{target}'. "
            f"Allowed from '{current}': {allowed}"
        )
