"""ElasticQuery logging utilities.

One package logger, ``log``, shared by the builder, the HTTP client and the
CLI. Records are prefixed with a timestamp and a four-letter level tag.
Console output goes to stderr so documents printed on stdout stay parseable.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
import sys
from typing import Final


_LEVEL_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "CRIT",
}

_FORMAT: Final[str] = "%(asctime)s [%(leveltag)s] %(message)s"
_DATEFMT: Final[str] = "%m-%d %H:%M:%S"


class _LevelTagFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib name
        record.leveltag = _LEVEL_TAGS.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("ElasticQuery")


def resolve_level(level: str | None) -> int:
    """Map a level name such as ``"debug"`` to its logging constant.

    Unknown names fall back to ``INFO``.
    """
    value = getattr(logging, (level or "INFO").upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Configure the ElasticQuery logger.

    Format: ``mm-dd HH:MM:SS [TAG] message``.

    Args:
        level: Console logging level name.
        action: CLI action name; used for the log file name.
        log_to_file: Mirror all records (DEBUG and up) to a file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when no file handler was added.
    """
    formatter = _LevelTagFormatter(fmt=_FORMAT, datefmt=_DATEFMT)
    console_level = resolve_level(level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(formatter)

    log.handlers.clear()
    log.addHandler(stream_handler)

    log_path: Path | None = None
    if log_to_file and action:
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        log_path = action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(logging.DEBUG if log_path else console_level)
    log.propagate = False
    return log_path
