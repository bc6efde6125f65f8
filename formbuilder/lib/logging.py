"""Log output for the formbuilder command line.

Library modules only create loggers (``logging.getLogger(__name__)``);
handlers are attached here, once, by the CLI. JSON output is available for
runs whose logs are shipped to an aggregator.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

__all__ = [
    "JSONFormatter",
    "get_log_level_from_env",
    "setup_logging",
]

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are chatty at INFO and below
QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3")

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Example output:
        {"timestamp": "2025-01-15T10:30:00.123Z", "level": "INFO",
         "logger": "formbuilder.utils.codec", "message": "Saved 3 fields to local key 'formConfig'"}

    Values passed with ``extra=`` are collected under ``"extra"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, default=str, ensure_ascii=False)


def get_log_level_from_env(default: int = logging.INFO) -> int:
    """Level named by FORMBUILDER_LOG_LEVEL (or LOG_LEVEL), else ``default``."""
    name = os.environ.get("FORMBUILDER_LOG_LEVEL") or os.environ.get("LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Send log records to stderr, and optionally a file.

    Args:
        verbose: Log at DEBUG regardless of the environment
        json_format: Emit JSONFormatter lines instead of plain text
        log_file: Also append records to this file
    """
    level = logging.DEBUG if verbose else get_log_level_from_env(logging.WARNING)
    formatter = JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
