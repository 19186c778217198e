import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from planning_copilot.config import TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format a moment as an ISO-8601 UTC timestamp (YYYY-MM-DDTHH:MM:SSZ).

    Args:
        now: The moment to format. Naive datetimes are taken as UTC.
             Defaults to the current time.

    Returns:
        str: The formatted timestamp
    """
    dt = now or datetime.now(timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically to prevent corruption on failure.

    The content goes to a sibling temp file first and is then renamed over the
    target, so readers see either the old or the new file, never a partial one.

    Args:
        path: The path to write to
        content: The text content to write (UTF-8)
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_path, path)
    finally:
        # Only left behind when the write or the rename failed.
        if tmp_path.exists():
            tmp_path.unlink()


def dump_yaml_document(data: dict[str, Any], header: Optional[str] = None) -> str:
    """Render a mapping as a YAML document with an optional comment header.

    Keys keep their insertion order and nested blocks use 2-space indentation.

    Args:
        data: The mapping to serialize
        header: Comment lines (without the leading '#') placed above the document

    Returns:
        str: The YAML text, ending with a newline
    """
    body = yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        indent=2,
    )
    if not header:
        return body
    comment = "\n".join(f"# {line}".rstrip() for line in header.splitlines())
    return f"{comment}\n\n{body}"


def read_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML file that must contain a mapping.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or its top level is not a mapping
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")
    return data


def is_yaml_mapping(path: Path) -> bool:
    """Return True if `path` exists and parses as a YAML mapping."""
    try:
        read_yaml_mapping(path)
    except (OSError, ValueError):
        return False
    return True
