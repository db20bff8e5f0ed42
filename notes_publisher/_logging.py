"""Logging configuration for notes_publisher.

Modules log through ``logging.getLogger(__name__)``. The CLI calls
``configure_logging`` once at startup.

The log level can be configured via the NOTES_PUBLISHER_LOG_LEVEL
environment variable (DEBUG, INFO, WARNING, ERROR; default INFO).
"""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV_VAR = "NOTES_PUBLISHER_LOG_LEVEL"


def configure_logging(level: Optional[int] = None) -> None:
    """Configure logging for the notes_publisher package.

    Args:
        level: Explicit level; overrides the environment variable

    Subsequent calls only update the level.
    """
    root_logger = logging.getLogger("notes_publisher")

    if level is None:
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))
        root_logger.addHandler(handler)
        # Avoid duplicate messages through the root logger
        root_logger.propagate = False

    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
