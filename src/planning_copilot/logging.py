"""Centralized logging configuration for planning-copilot.

This module should be imported once, as early as possible, by the command-line
entry points. It sets up the root logger with handlers and formatting based on
the configuration settings. User-facing progress lines are printed through
planning_copilot.console; log records are diagnostics.
"""

import logging
import sys
from pathlib import Path

from planning_copilot import config

logger = logging.getLogger(__name__)


level = getattr(logging, config.LOG_LEVEL, logging.WARNING)

# Diagnostics go to stderr so they never interleave with the installer report.
# If PLANNING_COPILOT_ENABLE_FILE_LOG is set, also log to a file.
handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
if config.ENABLE_FILE_LOG:
    Path(config.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    handlers.append(logging.FileHandler(config.LOG_FILE_PATH, encoding="utf-8"))

logging.basicConfig(
    level=level,
    format="%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - %(message)s",
    handlers=handlers,
)

logger.debug(
    "Logging configured. Level: %s, File logging enabled: %s",
    config.LOG_LEVEL,
    config.ENABLE_FILE_LOG,
)
