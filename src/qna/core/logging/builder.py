# src/qna/core/logging/builder.py
"""
Turns `Settings` into a `logging.config.dictConfig` mapping and applies it.

    setup_logging(settings)

runs once in `qna.main.run()` (and once per test session); modules only ever call
`logging.getLogger(__name__)`. The builder reads LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT,
LOG_DIR, LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENABLE_SQL_LOGGING and ENV, so any object with
those attributes works (tests pass a SimpleNamespace).
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from qna.config.settings import Settings
from qna.utils.logging import DISTRIBUTION_NAME, get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _library_logger(level: str, handlers: list[str]) -> dict:
    return {"level": level, "handlers": handlers, "propagate": False}


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping.

    Root and `uvicorn.error` go to every active handler. `uvicorn.access` is held at
    WARNING because RequestTimerMiddleware already writes one line per request, and
    `sqlalchemy.engine` is only raised to INFO by ENABLE_SQL_LOGGING (statements can carry
    parameter values).
    """
    handlers = _handlers(settings)
    everywhere = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
                "format": TEXT_FORMAT,
            },
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name() or DISTRIBUTION_NAME,
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            "": {"level": settings.LOG_LEVEL, "handlers": everywhere, "propagate": True},
            "uvicorn.error": _library_logger(settings.LOG_LEVEL, everywhere),
            "uvicorn.access": _library_logger("WARNING", ["console"]),
            "sqlalchemy.engine": _library_logger(
                "INFO" if settings.ENABLE_SQL_LOGGING else "WARNING", ["console"]
            ),
        },
    }


def setup_logging(settings: Settings) -> None:
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # records reaching handlers added later (pytest's caplog) still get `request_id`
    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
