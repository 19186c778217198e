import logging
import re
from typing import Optional

from planning_copilot.domain.models import PlanStatus

logger = logging.getLogger(__name__)


# pending_review -> draft (revise) is the only backward edge.
ALLOWED_TRANSITIONS: dict[PlanStatus, frozenset[PlanStatus]] = {
    PlanStatus.DRAFT: frozenset({PlanStatus.PENDING_REVIEW}),
    PlanStatus.PENDING_REVIEW: frozenset(
        {PlanStatus.APPROVED, PlanStatus.REJECTED, PlanStatus.DRAFT}
    ),
    PlanStatus.APPROVED: frozenset({PlanStatus.IN_PROGRESS}),
    PlanStatus.IN_PROGRESS: frozenset({PlanStatus.COMPLETED}),
    PlanStatus.COMPLETED: frozenset({PlanStatus.ARCHIVED}),
    PlanStatus.ARCHIVED: frozenset(),
    PlanStatus.REJECTED: frozenset(),
}


class InvalidTransitionError(ValueError):
    """Raised when a plan status change is not an edge of the lifecycle."""

    def __init__(self, plan_id: str, current: PlanStatus, requested: PlanStatus):
        self.plan_id = plan_id
        self.current = current
        self.requested = requested
        allowed = sorted(s.value for s in ALLOWED_TRANSITIONS[current])
        allowed_text = ", ".join(allowed) if allowed else "none (terminal status)"
        super().__init__(
            f"Plan '{plan_id}' cannot move from '{current.value}' to "
            f"'{requested.value}'. Allowed: {allowed_text}"
        )


def allowed_targets(current: PlanStatus) -> list[PlanStatus]:
    """Return the statuses reachable from `current` in one step, in enum order."""
    targets = ALLOWED_TRANSITIONS[current]
    return [s for s in PlanStatus if s in targets]


def validate_transition(plan_id: str, current: PlanStatus, requested: PlanStatus) -> None:
    """Validate a single status change.

    Raises:
        InvalidTransitionError: If `requested` is not reachable from `current`,
            including a no-op change to the same status.
    """
    if requested not in ALLOWED_TRANSITIONS[current]:
        logger.debug(
            "Rejected transition for %s: %s -> %s", plan_id, current.value, requested.value
        )
        raise InvalidTransitionError(plan_id, current, requested)


# --- Input validation for records created from the command line ---

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000

# No control characters except newlines/tabs
SAFE_TEXT_PATTERN = re.compile(r"^[^\x00-\x08\x0B\x0C\x0E-\x1F\x7F]*$")
# Titles are single-line: no control characters at all
TITLE_PATTERN = re.compile(r"^[^\x00-\x1F\x7F]*$")


def validate_title(title: str) -> str:
    """Validate and strip a plan title.

    Raises:
        ValueError: If the title is empty, too long or contains control characters
    """
    title = (title or "").strip()
    if not title:
        raise ValueError("Title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValueError(f"Title too long (max {MAX_TITLE_LENGTH} characters)")
    if not TITLE_PATTERN.match(title):
        raise ValueError("Title contains invalid characters")
    return title


def validate_description(description: Optional[str]) -> Optional[str]:
    """Validate a plan description; None and blank text both mean no description."""
    if description is None or not description.strip():
        return None
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(
            f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)"
        )
    if not SAFE_TEXT_PATTERN.match(description):
        raise ValueError("Description contains invalid characters")
    return description.strip()
