import logging
import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from planning_copilot.config import STATE_VERSION, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _to_text(value: Any) -> Any:
    """Render datetimes parsed from unquoted YAML scalars back to strings."""
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _check_timestamp(value: Optional[str], allow_date: bool = False) -> Optional[str]:
    if value is None:
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp {value!r}. Expected a string.")
    if TIMESTAMP_PATTERN.match(value):
        return value
    if allow_date and DATE_PATTERN.match(value):
        return value
    raise ValueError(
        f"Invalid timestamp '{value}'. Expected YYYY-MM-DDTHH:MM:SSZ (UTC)."
    )


class PlanStatus(str, Enum):
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    REJECTED = "rejected"


def parse_plan_status(value: PlanStatus | str) -> PlanStatus:
    """Parse a status token (case-insensitive, '-' or '_' separators).

    Raises:
        ValueError: If the token is not a known status
    """
    if isinstance(value, PlanStatus):
        return value
    token = str(value).strip().lower().replace("-", "_")
    try:
        return PlanStatus(token)
    except ValueError as e:
        allowed = ", ".join(s.value for s in PlanStatus)
        raise ValueError(f"Invalid status '{value}'. Allowed: {allowed}") from e


class DecisionStatus(str, Enum):
    PROPOSED = "proposed"
    ACCEPTED = "accepted"
    DEPRECATED = "deprecated"
    SUPERSEDED = "superseded"


class DecisionCategory(str, Enum):
    ARCHITECTURE = "architecture"
    API = "api"
    SECURITY = "security"
    TESTING = "testing"
    INFRASTRUCTURE = "infrastructure"
    DEPENDENCIES = "dependencies"
    PATTERNS = "patterns"
    OTHER = "other"


class MemoryStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


# --- Records ---


class PlanRecord(BaseModel):
    """One entry of the `plans` mapping in plans/state.yaml.

    The id is the mapping key on disk and is excluded when the record is dumped
    back into the mapping.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(exclude=True)
    title: str
    status: PlanStatus = Field(default=PlanStatus.DRAFT)
    created: str
    updated: str
    description: Optional[str] = None
    file: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def status_must_be_allowed(cls, value: PlanStatus | str) -> PlanStatus:
        return parse_plan_status(value)

    @field_validator("created", "updated", mode="before")
    @classmethod
    def timestamps_must_be_utc(cls, value: Any) -> str:
        # Hand-edited records may carry a plain date.
        return _check_timestamp(_to_text(value), allow_date=True)


class DecisionRecord(BaseModel):
    title: str
    status: DecisionStatus = Field(default=DecisionStatus.PROPOSED)
    category: DecisionCategory = Field(default=DecisionCategory.OTHER)
    date: str
    file: Optional[str] = None
    related_plans: list[str] = Field(default_factory=list)
    superseded_by: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, value: Any) -> str:
        return _to_text(value)


class MemoryRecord(BaseModel):
    title: str
    status: MemoryStatus = Field(default=MemoryStatus.ACTIVE)
    category: Optional[str] = None
    created: str
    updated: str
    related_plans: list[str] = Field(default_factory=list)

    @field_validator("created", "updated", mode="before")
    @classmethod
    def timestamps_as_text(cls, value: Any) -> str:
        return _to_text(value)


# --- State documents ---


class StateDocument(BaseModel):
    """Fields shared by every tracking document.

    Unknown keys written by hand or by the agent are kept and dumped back.
    """

    model_config = ConfigDict(extra="allow")

    version: int = Field(default=STATE_VERSION)
    last_updated: str

    @field_validator("last_updated", mode="before")
    @classmethod
    def last_updated_must_be_utc(cls, value: Any) -> str:
        return _check_timestamp(_to_text(value))


class PlansSummary(BaseModel):
    draft: int = 0
    pending_review: int = 0
    approved: int = 0
    in_progress: int = 0
    completed: int = 0
    archived: int = 0
    rejected: int = 0


class PlansState(StateDocument):
    plans: dict[str, PlanRecord] = Field(default_factory=dict)
    summary: PlansSummary = Field(default_factory=PlansSummary)

    @model_validator(mode="before")
    @classmethod
    def inject_plan_ids(cls, data):
        # On disk the id is only the mapping key; copy it into each record.
        if isinstance(data, dict) and "plans" in data and data["plans"] is None:
            # A bare `plans:` key is an empty mapping.
            data = {**data, "plans": {}}
        if isinstance(data, dict) and isinstance(data.get("plans"), dict):
            plans = {}
            for plan_id, record in data["plans"].items():
                if isinstance(record, dict):
                    record = {**record, "id": str(plan_id)}
                plans[str(plan_id)] = record
            data = {**data, "plans": plans}
        return data

    def recount(self) -> PlansSummary:
        counts = {status.value: 0 for status in PlanStatus}
        for record in self.plans.values():
            counts[record.status.value] += 1
        self.summary = PlansSummary(**counts)
        return self.summary


class ProjectInfo(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    primary_language: Optional[str] = None
    framework: Optional[str] = None
    stage: str = "development"


class DocumentEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    file: str
    title: str
    summary: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    last_updated: Optional[str] = None


class RecentDecisions(BaseModel):
    count: int = 0
    recent: list[str] = Field(default_factory=list)


class QuickCommands(BaseModel):
    dev: Optional[str] = None
    build: Optional[str] = None
    test: Optional[str] = None
    lint: Optional[str] = None


class DocsIndex(StateDocument):
    project: ProjectInfo = Field(default_factory=ProjectInfo)
    documents: dict[str, DocumentEntry] = Field(default_factory=dict)
    decisions: RecentDecisions = Field(default_factory=RecentDecisions)
    cross_references: dict[str, list[str]] = Field(default_factory=dict)
    quick_commands: QuickCommands = Field(default_factory=QuickCommands)


class DecisionsSummary(BaseModel):
    total: int = 0
    proposed: int = 0
    accepted: int = 0
    deprecated: int = 0
    superseded: int = 0


class DecisionsIndex(StateDocument):
    next_id: int = 1
    decisions: dict[str, DecisionRecord] = Field(default_factory=dict)
    by_category: dict[DecisionCategory, list[str]] = Field(
        default_factory=lambda: {c: [] for c in DecisionCategory}
    )
    by_status: dict[DecisionStatus, list[str]] = Field(
        default_factory=lambda: {s: [] for s in DecisionStatus}
    )
    summary: DecisionsSummary = Field(default_factory=DecisionsSummary)


class MemorySummary(BaseModel):
    total: int = 0
    active: int = 0
    archived: int = 0


class MemoryIndex(StateDocument):
    next_id: int = 1
    memories: dict[str, MemoryRecord] = Field(default_factory=dict)
    by_category: dict[str, list[str]] = Field(default_factory=dict)
    summary: MemorySummary = Field(default_factory=MemorySummary)


class VerificationCommands(BaseModel):
    unit: Optional[str] = None
    integration: Optional[str] = None
    coverage: Optional[str] = None


class VerificationSummary(BaseModel):
    total_runs: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0


class VerificationState(StateDocument):
    framework: Optional[str] = None
    commands: VerificationCommands = Field(default_factory=VerificationCommands)
    runs: dict[str, dict] = Field(default_factory=dict)
    summary: VerificationSummary = Field(default_factory=VerificationSummary)


class ContextState(StateDocument):
    active_plan: Optional[str] = None
    focus: Optional[str] = None
    recent_files: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
