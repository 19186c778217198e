import os

# --- Helpers for parsing env vars ---


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable.

    Accepts common boolean string representations: '1', 'true', 'yes', 'on'
    (case-insensitive).

    Args:
        name: Environment variable name
        default: Default value if variable is not set

    Returns:
        bool: The parsed boolean value
    """
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float = 1.0) -> float:
    """Parse a float environment variable.

    Args:
        name: Environment variable name
        default: Default value if variable is not set or parsing fails

    Returns:
        float: The parsed float value, or default if parsing fails
    """
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# --- Layout ---
COPILOT_DIR = ".copilot"
GITHUB_DIR = ".github"

# --- State documents ---
STATE_VERSION = 1
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# --- Remote assets ---
# Raw-content base URL the companion documents are fetched from.
REPO_URL = os.getenv(
    "PLANNING_COPILOT_REPO_URL",
    "https://raw.githubusercontent.com/neyrojasj/planning-copilot/main",
).rstrip("/")
FETCH_TIMEOUT = _env_float("PLANNING_COPILOT_FETCH_TIMEOUT", 10.0)
OFFLINE = _env_bool("PLANNING_COPILOT_OFFLINE")

# --- Logging Configuration ---
# Console output is handled by planning_copilot.console; logging is diagnostics only.
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.getcwd(), "logs"))
LOG_FILE_PATH = os.path.join(LOG_DIR, "planning_copilot.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
ENABLE_FILE_LOG = _env_bool("PLANNING_COPILOT_ENABLE_FILE_LOG")
