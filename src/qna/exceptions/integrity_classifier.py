"""
Classification of SQL-level integrity errors.

SQLAlchemy raises a single `IntegrityError` type for every constraint the engine enforces.
This module looks at the engine-specific payload (`exc.orig`) and tells the caller which kind
of constraint failed. It never raises app-level errors itself; `mapper.py` decides what each
kind means for a given operation.

Postgres drivers expose the SQLSTATE code (`pgcode` on psycopg2 and SQLAlchemy's asyncpg
adapter, `sqlstate` on psycopg 3). SQLite exposes none, so a message heuristic is the fallback.
"""
import logging
from enum import Enum
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_KIND_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: ConstraintKind.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION: ConstraintKind.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ConstraintKind.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION: ConstraintKind.CHECK,
}


# =================================================================================================================
# Integrity Error Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _sqlstate(orig) -> str | None:
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _classify_from_postgres_diag(orig) -> tuple[ConstraintKind | None, str | None]:
    """
    Classify a Postgres integrity error from its SQLSTATE and diagnostics.
    Returns (None, None) when the driver error carries no SQLSTATE.
    """
    code = _sqlstate(orig)
    if not code:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    kind = PGCODE_KIND_MAP.get(code)
    if kind:
        logger.debug("Postgres integrity diagnostic", extra={"pgcode": code, "constraint_name": constraint_name})
        return kind, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": code, "constraint_name": constraint_name},
    )
    return ConstraintKind.UNKNOWN, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[ConstraintKind, None]:
    """
    Classify an integrity error from its message text (SQLite, MySQL, ...).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return ConstraintKind.UNIQUE, None

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return ConstraintKind.NOT_NULL, None

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ConstraintKind.FOREIGN_KEY, None

    if _match_any(normalized, ["check constraint", "check failed"]):
        return ConstraintKind.CHECK, None

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    return ConstraintKind.UNKNOWN, None


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Classify a SQLAlchemy IntegrityError.

    Returns:
        A tuple of (ConstraintKind, constraint_name if the engine reported one)
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is not None:
        return kind, constraint_name

    return _classify_from_generic_message(str(orig))


def is_foreign_key_violation(exc: BaseException) -> bool:
    return isinstance(exc, IntegrityError) and classify_integrity_error(exc)[0] is ConstraintKind.FOREIGN_KEY
