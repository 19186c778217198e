"""Empty instances of the tracking documents written at install time.

Every document carries `version` and `last_updated`, zeroed counters and empty
maps. Documents are built through their pydantic models so the emitted shape
always matches the schema the plan store later loads.
"""

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from planning_copilot.domain.models import (
    ContextState,
    DecisionsIndex,
    DocsIndex,
    DocumentEntry,
    MemoryIndex,
    PlansState,
    StateDocument,
    VerificationState,
)
from planning_copilot.io.files import dump_yaml_document, utc_timestamp
from planning_copilot.io.paths import copilot_path

logger = logging.getLogger(__name__)


class StateKind(str, Enum):
    PLANS = "plans"
    DOCS_INDEX = "docs_index"
    DECISIONS = "decisions"
    MEMORY = "memory"
    TESTING = "testing"
    CONTEXT = "context"


# Path parts under .copilot/
_STATE_PATHS: dict[StateKind, tuple[str, ...]] = {
    StateKind.PLANS: ("plans", "state.yaml"),
    StateKind.DOCS_INDEX: ("docs", "index.yaml"),
    StateKind.DECISIONS: ("docs", "decisions", "index.yaml"),
    StateKind.MEMORY: ("memory", "index.yaml"),
    StateKind.TESTING: ("testing", "state.yaml"),
    StateKind.CONTEXT: ("context", "state.yaml"),
}

_STATE_MODELS: dict[StateKind, type[StateDocument]] = {
    StateKind.PLANS: PlansState,
    StateKind.DOCS_INDEX: DocsIndex,
    StateKind.DECISIONS: DecisionsIndex,
    StateKind.MEMORY: MemoryIndex,
    StateKind.TESTING: VerificationState,
    StateKind.CONTEXT: ContextState,
}

_STATE_HEADERS: dict[StateKind, str] = {
    StateKind.PLANS: "Smart Agent - Plans State File\nThis file tracks all plans and their statuses",
    StateKind.DOCS_INDEX: (
        "Smart Agent - Documentation Search Index\n"
        "ALWAYS read this file first - it's your navigation map!"
    ),
    StateKind.DECISIONS: "Smart Agent - Decision Index",
    StateKind.MEMORY: "Smart Agent - Memory Index\nLong-lived facts and lessons worth remembering",
    StateKind.TESTING: "Smart Agent - Testing State\nTest commands and recorded test runs",
    StateKind.CONTEXT: "Smart Agent - Session Context\nWhat the agent is currently focused on",
}

# Kinds written even by a minimal install
CORE_KINDS: tuple[StateKind, ...] = (
    StateKind.PLANS,
    StateKind.DOCS_INDEX,
    StateKind.DECISIONS,
)
EXTRA_KINDS: tuple[StateKind, ...] = (
    StateKind.MEMORY,
    StateKind.TESTING,
    StateKind.CONTEXT,
)

# (key, file, title, keywords)
_DEFAULT_DOCUMENTS: list[tuple[str, str, str, list[str]]] = [
    ("overview", "overview.md", "Project Overview",
     ["purpose", "quick-start", "getting-started", "about", "features"]),
    ("architecture", "architecture.md", "System Architecture",
     ["layers", "structure", "modules", "data-flow", "directories", "components"]),
    ("tech-stack", "tech-stack.md", "Technology Stack",
     ["dependencies", "frameworks", "libraries", "versions", "runtime", "database"]),
    ("api", "api.md", "API Documentation",
     ["endpoints", "routes", "rest", "http", "requests"]),
    ("testing", "testing.md", "Testing Strategy",
     ["tests", "coverage", "unit", "integration", "commands"]),
    ("development", "development.md", "Development Guide",
     ["setup", "install", "scripts", "env", "commands", "run", "build"]),
    ("conventions", "conventions.md", "Code Conventions",
     ["style", "naming", "patterns", "linting", "formatting", "git"]),
]


def _default_documents() -> dict[str, DocumentEntry]:
    documents: dict[str, DocumentEntry] = {}
    for key, file, title, keywords in _DEFAULT_DOCUMENTS:
        extra: dict[str, Any] = {}
        if key == "api":
            # API docs only apply once the project exposes one.
            extra["has_api"] = False
        documents[key] = DocumentEntry(file=file, title=title, keywords=keywords, **extra)
    return documents


def state_path(kind: StateKind, root: Path) -> Path:
    """Absolute path of the state document of `kind` under `root`."""
    return copilot_path(root, *_STATE_PATHS[kind])


def write_initial_state(kind: StateKind, now: Optional[datetime] = None) -> dict[str, Any]:
    """Build the empty document for `kind`.

    Args:
        kind: Which tracking document to build
        now: Moment used for `last_updated` (defaults to the current UTC time)

    Returns:
        dict: The document, ready to be dumped as YAML

    Raises:
        ValueError: If the template does not satisfy its schema
    """
    kind = StateKind(kind)
    fields: dict[str, Any] = {"last_updated": utc_timestamp(now)}
    if kind is StateKind.DOCS_INDEX:
        fields["documents"] = _default_documents()
    try:
        document = _STATE_MODELS[kind](**fields)
    except ValidationError as e:
        logger.exception("Initial %s state failed validation", kind.value)
        raise ValueError(f"Invalid initial state for '{kind.value}': {e}") from e
    return document.model_dump(mode="json")


def state_header(kind: StateKind) -> str:
    return _STATE_HEADERS[StateKind(kind)]


def render_state(kind: StateKind, now: Optional[datetime] = None) -> str:
    """Render the empty document for `kind` as commented YAML text."""
    kind = StateKind(kind)
    return dump_yaml_document(write_initial_state(kind, now), header=state_header(kind))
