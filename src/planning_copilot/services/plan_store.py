import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from planning_copilot.domain.models import (
    PlanRecord,
    PlansState,
    PlanStatus,
    parse_plan_status,
)
from planning_copilot.domain.validation import (
    validate_description,
    validate_title,
    validate_transition,
)
from planning_copilot.io.files import atomic_write, dump_yaml_document, read_yaml_mapping, utc_timestamp
from planning_copilot.io.paths import plans_state_path, resolve_root
from planning_copilot.services.state_templates import StateKind, render_state, state_header

logger = logging.getLogger(__name__)

PLAN_ID_PATTERN = re.compile(r"^PLAN-(\d+)$")
_OPTIONAL_PLAN_FIELDS = ("description", "file")


def _state_file(root: Optional[str | Path]) -> Path:
    return plans_state_path(resolve_root(root))


def load_state(root: Optional[str | Path] = None) -> PlansState:
    """Load and validate plans/state.yaml.

    Raises:
        FileNotFoundError: If the state file does not exist (run the installer first)
        ValueError: If the file is not a valid plans state document
    """
    path = _state_file(root)
    if not path.exists():
        raise FileNotFoundError(
            f"Plans state file not found at {path}. Run planning-copilot-install first."
        )
    data = read_yaml_mapping(path)
    try:
        return PlansState.model_validate(data)
    except ValidationError as e:
        logger.exception(f"Invalid plans state in {path}")
        raise ValueError(f"Invalid plans state in {path}: {e}") from e


def save_state(state: PlansState, root: Optional[str | Path] = None) -> None:
    """Recount the summary, stamp last_updated and write the file atomically."""
    path = _state_file(root)
    state.recount()
    state.last_updated = utc_timestamp()
    data = state.model_dump(mode="json")
    for record in data["plans"].values():
        # Optional fields are omitted when unset; unknown keys are written as-is.
        for key in _OPTIONAL_PLAN_FIELDS:
            if record.get(key) is None:
                record.pop(key, None)
    atomic_write(path, dump_yaml_document(data, header=state_header(StateKind.PLANS)))
    logger.info(f"Wrote plans state: {path}")


def ensure_state(root: Optional[str | Path] = None) -> PlansState:
    """Load the plans state, writing an empty one first if none exists."""
    path = _state_file(root)
    if not path.exists():
        atomic_write(path, render_state(StateKind.PLANS))
        logger.info(f"Initialized empty plans state: {path}")
    return load_state(root)


def next_plan_id(state: PlansState) -> str:
    """Next id after the highest existing PLAN-NNN (ids are never reused)."""
    highest = 0
    for plan_id in state.plans:
        match = PLAN_ID_PATTERN.match(plan_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"PLAN-{highest + 1:03d}"


def create_plan(
    title: str,
    description: Optional[str] = None,
    root: Optional[str | Path] = None,
) -> PlanRecord:
    title = validate_title(title)
    description = validate_description(description)

    state = ensure_state(root)
    plan_id = next_plan_id(state)
    now = utc_timestamp()
    record = PlanRecord(
        id=plan_id,
        title=title,
        status=PlanStatus.DRAFT,
        created=now,
        updated=now,
        description=description,
    )
    state.plans[plan_id] = record
    logger.info({"event": "create_plan", "id": plan_id, "title": title})
    save_state(state, root)
    return record


def set_plan_status(
    plan_id: str,
    new_status: PlanStatus | str,
    root: Optional[str | Path] = None,
) -> PlanRecord:
    """Move a plan to `new_status` along an allowed lifecycle edge.

    Raises:
        KeyError: If no plan has `plan_id`
        ValueError: If `new_status` is not a known status
        InvalidTransitionError: If the lifecycle does not allow the change
    """
    status = parse_status(new_status)
    state = load_state(root)
    record = state.plans.get(plan_id)
    if record is None:
        raise KeyError(f"Plan '{plan_id}' not found")

    validate_transition(plan_id, record.status, status)
    old = record.status
    record.status = status
    record.updated = utc_timestamp()
    logger.info(
        {"event": "set_plan_status", "id": plan_id, "from": old.value, "to": status.value}
    )
    save_state(state, root)
    return record


def list_plans(
    statuses: Optional[Iterable[PlanStatus | str]] = None,
    root: Optional[str | Path] = None,
) -> list[PlanRecord]:
    """Plans sorted by id, optionally restricted to the given statuses."""
    state = load_state(root)
    wanted = {parse_status(s) for s in statuses} if statuses else None
    records = sorted(state.plans.values(), key=lambda r: _sort_key(r.id))
    if wanted is not None:
        records = [r for r in records if r.status in wanted]
    return records


def parse_status(value: PlanStatus | str) -> PlanStatus:
    """Parse a status token given on the command line or by a caller."""
    return parse_plan_status(value)


def _sort_key(plan_id: str) -> tuple[int, str]:
    match = PLAN_ID_PATTERN.match(plan_id)
    return (int(match.group(1)) if match else 10**9, plan_id)
