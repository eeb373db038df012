"""Structured logging setup for mdpaste."""

import structlog
from pathlib import Path
from typing import Any, Optional
import os

LOG_LEVEL_ENV = "MDPASTE_LOG_LEVEL"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_log_file() -> Path:
    """~/.cache/mdpaste/logs/mdpaste.log (resolved at call time)."""
    return Path.home() / ".cache" / "mdpaste" / "logs" / "mdpaste.log"


def resolve_log_level(level: Optional[str] = None) -> str:
    """Pick the log level: explicit argument, then $MDPASTE_LOG_LEVEL, then INFO.

    Unknown names fall back to INFO rather than failing the command.
    """
    requested = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    return requested if requested in VALID_LEVELS else "INFO"


def configure_logging(log_file: Optional[Path] = None, level: Optional[str] = None) -> Path:
    """
    Configure structlog to append JSON lines to the mdpaste log file.

    Args:
        log_file: Where to log (default: ~/.cache/mdpaste/logs/mdpaste.log)
        level: Minimum level; overrides $MDPASTE_LOG_LEVEL

    Returns:
        Path of the log file in use

    What ends up where:
    - DEBUG: Dropped line items, per-pass build statistics, page loads
    - INFO: Command start/finish, sections imported, pages written
    - WARNING: Skipped sections, unterminated code blocks
    - ERROR: Paste failures, page write failures

    Example:
        MDPASTE_LOG_LEVEL=DEBUG mdpaste paste --file notes.md

        # View logs with jq for readability:
        tail -f ~/.cache/mdpaste/logs/mdpaste.log | jq .
    """
    log_file = log_file or default_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=open(log_file, "a")),
        cache_logger_on_first_use=True,
    )
    return log_file


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("section_imported", title="Meeting notes", created=12)
    """
    return structlog.get_logger(name)
