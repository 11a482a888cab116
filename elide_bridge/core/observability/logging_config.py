"""
Logging configuration — one setup call for the CLI.

Every module logs through ``logging.getLogger(__name__)``; this
decides where those records go. Library callers that embed the
bridge in their own build driver can skip it and configure logging
however their host does.

Level precedence:
    CLI flag  >  ELIDE_BRIDGE_LOG_LEVEL  >  WARNING

``ELIDE_BRIDGE_LOG_FILE`` adds a full-detail file handler, at
``ELIDE_BRIDGE_LOG_FILE_LEVEL`` (default: the console level).
"""

from __future__ import annotations

import logging
import sys

# (format, datefmt) per console verbosity
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [elide] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(message)s", None),
}

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path for a detailed log file.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = parse_level(level)
    bucket = max(k for k in _CONSOLE_FORMATS if k <= max(console_level, logging.DEBUG))
    fmt, datefmt = _CONSOLE_FORMATS[bucket]

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        effective = min(effective, file_level)

    root.setLevel(effective)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
