# src/qna/core/logging/formatters.py
"""
Log formatters selected by `LOG_FORMAT`.

JsonFormatter
    One JSON object per line for log collectors. Fixed fields (timestamp, level, logger,
    message, source location, request_id, service, env, version) plus every attribute
    passed through `extra=`. Values json cannot encode are written as `str(value)`.

ColorFormatter
    `TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE` with an ANSI-colored level, for a
    developer terminal.

Formatters print extras as given; RedactFilter runs on every handler before them.
"""

import json
import logging
from logging import LogRecord
from typing import Any, Iterator

from qna.utils.logging import DISTRIBUTION_NAME, get_project_version

PROJECT_VERSION = get_project_version()

# attributes of a bare LogRecord; anything else on a record came from `extra=`
_RESERVED_ATTRS = frozenset(vars(LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "request_id",
}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):

    def __init__(self, *, env: str | None = None, service: str = DISTRIBUTION_NAME, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def _extras(self, record: LogRecord, taken: dict) -> Iterator[tuple[str, Any]]:
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in taken or key.startswith("_"):
                continue
            yield key, _json_safe(value)

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        entry.update(dict(self._extras(record, entry)))
        return json.dumps(entry, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",       # cyan
        logging.INFO: "\033[32m",        # green
        logging.WARNING: "\033[33m",     # yellow
        logging.ERROR: "\033[31m",       # red
        logging.CRITICAL: "\033[1;41m",  # bold, red background
    }
    RESET = "\033[0m"

    def format(self, record: LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        parts = [
            self.formatTime(record, self.datefmt),
            f"{color}{record.levelname:<8}{self.RESET}",
            f"{record.name:<30}",
            f"{getattr(record, 'request_id', '-'):<10}",
            record.getMessage(),
        ]
        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
