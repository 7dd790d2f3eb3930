import logging
from contextlib import asynccontextmanager
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_integrity_error, ConstraintKind
from .base import RepositoryError, StorageError

logger = logging.getLogger(__name__)


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(
    exc: IntegrityError,
    entity: str,
    on_foreign_key_violation: Callable[[], RepositoryError] | None = None,
) -> RepositoryError:
    """
    Map a SQLAlchemy IntegrityError to the app-level exception the caller should raise.

    Only a foreign-key violation can be rerouted, and only when the operation supplies
    `on_foreign_key_violation`. Every other constraint failure is an opaque StorageError.
    """
    kind, constraint_name = classify_integrity_error(exc)

    if kind is ConstraintKind.FOREIGN_KEY and on_foreign_key_violation is not None:
        # Expected client-level scenario (unknown parent id) -> INFO, no stack trace.
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": entity, "constraint": constraint_name},
        )
        return on_foreign_key_violation()

    logger.warning(
        "mapper.unhandled_integrity_error",
        extra={"model": entity, "constraint_kind": kind.value, "constraint": constraint_name},
    )
    # raw DB text only at DEBUG
    logger.debug("mapper.unhandled_integrity_raw", extra={"model": entity, "raw": str(exc.orig)})
    return StorageError(f"{entity} database integrity error")


async def _rollback_quietly(db: AsyncSession, entity: str) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": entity})


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(
    db: AsyncSession,
    entity: str,
    *,
    on_foreign_key_violation: Callable[[], RepositoryError] | None = None,
):
    """
    Usage:
        async with db_error_handler(session, "Answer", on_foreign_key_violation=lambda: ...):
            ... one statement + commit ...

    Rolls the session back on any error and raises an app-level exception:
      - RepositoryError raised inside the block passes through unchanged
      - IntegrityError goes through `map_integrity_error`
      - anything else becomes StorageError, chained to the original
    """
    try:
        yield
    except RepositoryError:
        await _rollback_quietly(db, entity)
        raise
    except IntegrityError as exc:
        await _rollback_quietly(db, entity)
        raise map_integrity_error(exc, entity, on_foreign_key_violation) from exc
    except Exception as exc:
        await _rollback_quietly(db, entity)
        logger.exception("Unexpected DB error for %s", entity, extra={"model": entity})
        raise StorageError(f"Failed to operate on {entity}") from exc
