"""
Handler entries for the dictConfig mapping.

| Name            | Destination          | Level        | Formatter        | Used when                  |
| --------------- | -------------------- | ------------ | ---------------- | -------------------------- |
| `console`       | stderr               | LOG_LEVEL    | LOG_FORMAT       | always                     |
| `file`          | `LOG_DIR/app.log`    | LOG_LEVEL    | LOG_FORMAT       | file logging               |
| `error_file`    | `LOG_DIR/errors.log` | ERROR        | json             | file logging               |
| `error_console` | stderr               | ERROR        | json             | stdout-only logging        |

"File logging" means LOG_TO_STDOUT is false and LOG_DIR is set. Error-level entries are
always JSON so they stay machine-readable whatever the console shows.
"""

from pathlib import Path

from qna.config.settings import Settings

# filter names registered by the builder
HANDLER_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def _stream(level: str, formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "level": level,
        "formatter": formatter,
        "filters": list(HANDLER_FILTERS),
    }


def _rotating_file(settings: Settings, filename: str, level: str, formatter: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(HANDLER_FILTERS),
    }


def get_console_handler(settings: Settings) -> dict:
    return _stream(settings.LOG_LEVEL, _formatter_name(settings))


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "app.log", settings.LOG_LEVEL, _formatter_name(settings))


def get_error_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "errors.log", "ERROR", "json")


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("ERROR", "json")
