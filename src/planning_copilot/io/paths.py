import os
from pathlib import Path
from typing import Optional

from planning_copilot.config import COPILOT_DIR, GITHUB_DIR


def resolve_root(root: Optional[str | os.PathLike] = None) -> Path:
    """Resolve the project root the files are installed into.

    Args:
        root: Optional target directory. If not provided, uses the current
              working directory at call time.

    Returns:
        Path: The absolute project root
    """
    return Path(root or os.getcwd()).resolve()


def copilot_path(root: Path, *parts: str) -> Path:
    """Path under `<root>/.copilot/`."""
    return Path(root, COPILOT_DIR, *parts)


def github_path(root: Path, *parts: str) -> Path:
    """Path under `<root>/.github/`."""
    return Path(root, GITHUB_DIR, *parts)


def plans_state_path(root: Path) -> Path:
    return copilot_path(root, "plans", "state.yaml")


def relative_to_root(root: Path, path: Path) -> str:
    """Render `path` relative to `root` with forward slashes, for display."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return str(path)
