"""
Base repository class providing the statement shapes shared by the SQL repositories.

Each public repository operation is one unit of work:
  - open a short-lived AsyncSession from the shared session factory
  - run exactly one statement (plus commit for writes)
  - on failure roll back and translate the error through `db_error_handler`
  - convert ORM rows into pydantic records before the session closes

The session factory wraps the process-wide engine and its connection pool. Repositories
borrow it; they never create or dispose it.
"""
import logging
import time
from typing import Any, Callable, Generic, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, delete, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from qna.database.base import Base
from qna.exceptions.base import RepositoryError
from qna.exceptions.mapper import db_error_handler
from .protocols import check_page, is_paged

# Type variables for the model class and the record it is exposed as
ModelType = TypeVar("ModelType", bound=Base)
RecordType = TypeVar("RecordType", bound=BaseModel)

# Setup logging
logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType, RecordType]):
    """
    Generic base for the SQL repositories.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
        RecordType: The pydantic record returned to callers.
    """

    def __init__(
        self,
        model: Type[ModelType],
        record: Type[RecordType],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        """
        Args:
            model: The SQLAlchemy model class (not an instance)
            record: The pydantic model rows are converted to
            session_factory: shared factory bound to the application's engine
        """
        self.model = model
        self.record = record
        self.session_factory = session_factory

    @property
    def entity(self) -> str:
        return self.model.__name__

    @property
    def event_entity(self) -> str:
        # log event prefix: repo.<entity>.<op>.<outcome>
        return self.entity.lower()

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def _insert_returning(
        self,
        values: dict[str, Any],
        *,
        on_foreign_key_violation: Callable[[], RepositoryError] | None = None,
    ) -> RecordType:
        """
        INSERT ... RETURNING the full row, so server-generated identifier and timestamp
        come back from the same statement.
        """
        logger.debug(
            f"repo.{self.event_entity}.create.start",
            extra={"model": self.entity, "operation": "create", "provided_keys": sorted(values)},
        )
        start = time.perf_counter()

        async with self.session_factory() as session:
            async with db_error_handler(
                session, self.entity, on_foreign_key_violation=on_foreign_key_violation
            ):
                result = await session.execute(
                    insert(self.model).values(**values).returning(self.model)
                )
                record = self.record.model_validate(result.scalar_one())
                await session.commit()

        logger.info(
            f"repo.{self.event_entity}.create.success",
            extra={
                "model": self.entity,
                "operation": "create",
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return record

    # =================================================================================================================
    # Read (Multiple Entities)
    # =================================================================================================================

    async def _fetch_all(
        self,
        query: Select,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: tuple[InstrumentedAttribute, ...] = (),
    ) -> list[RecordType]:
        """
        Materialize every row of `query` as records.

        Without paging arguments no ORDER BY is added and ordering is whatever the
        engine returns. With `offset`/`limit` the rows are ordered by `order_by` first
        so consecutive pages do not overlap.
        """
        check_page(offset, limit)
        if is_paged(offset, limit):
            query = query.order_by(*order_by)
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)

        async with self.session_factory() as session:
            async with db_error_handler(session, self.entity):
                result = await session.execute(query)
                records = [self.record.model_validate(row) for row in result.scalars().all()]

        logger.debug(
            f"repo.{self.event_entity}.list.success",
            extra={"model": self.entity, "operation": "list", "count": len(records)},
        )
        return records

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def _delete_where(self, column: InstrumentedAttribute, value: Any) -> int:
        """
        DELETE rows where `column == value` and return how many went away.

        Zero rows is a normal outcome (the row never existed or was already deleted);
        callers decide whether it matters. The public delete operations ignore it.
        """
        async with self.session_factory() as session:
            async with db_error_handler(session, self.entity):
                result = await session.execute(
                    delete(self.model)
                    .where(column == value)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()

        deleted = result.rowcount or 0
        if deleted:
            logger.info(f"repo.{self.event_entity}.delete.success", extra={"model": self.entity, "id": str(value)})
        else:
            logger.info(f"repo.{self.event_entity}.delete.no_match", extra={"model": self.entity, "id": str(value)})
        return deleted
