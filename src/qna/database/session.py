"""
Engine and session factory construction.

The AsyncEngine owns the process-wide connection pool. It is created once at bootstrap,
wrapped in an `async_sessionmaker`, and that factory is handed to every repository.
Repositories open short-lived sessions from it but never create or dispose the engine.
"""
import logging

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from qna.config.settings import Settings
from qna.database.base import Base

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    SQLite only enforces REFERENCES clauses when `PRAGMA foreign_keys=ON` is issued on
    each new connection. No-op for other engines.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine with a bounded pool.

    `pool_size=DB_MAX_CONNECTIONS` and `max_overflow=0` give a fixed upper bound on
    simultaneously open connections; callers past that bound wait up to
    `DB_POOL_TIMEOUT` seconds and then fail (surfacing as StorageError).
    """
    url = settings.SQLALCHEMY_DATABASE_URL
    options = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,   # Enables connection health checks
    }
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_MAX_CONNECTIONS,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    engine = create_async_engine(url, **options)
    enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows returned by a statement stay readable after commit
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def verify_connection(engine: AsyncEngine) -> None:
    """
    Open one pooled connection and run `SELECT 1`.

    Used at startup so a misconfigured database stops the process immediately instead
    of failing on the first request. Errors propagate unchanged.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("database.connection_verified", extra={"dialect": engine.dialect.name})


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create the questions/answers tables if they do not exist.

    This is a convenience for local runs and tests (`DB_CREATE_TABLES=true`), not a
    migration tool: existing tables are never altered.
    """
    # registers the models on Base.metadata
    import qna.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    import qna.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
