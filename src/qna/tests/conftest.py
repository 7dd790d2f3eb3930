"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities shared by ALL
kinds of tests (repositories, API, logging).

Domain-specific fixtures live in:
- tests/test_fixtures/repository_fixtures.py

Database selection:
- `TEST_DATABASE_URL` set (CI with a Postgres service): every test gets fresh tables there
- otherwise: a throwaway SQLite file per test under pytest's tmp_path
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import sys
import asyncio
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing modules that
# might initialize them. Keep this block above the qna.* imports.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from qna.config import get_settings
from qna.core.logging.builder import setup_logging
from qna.database.session import create_engine, create_session_factory, create_tables, drop_tables

# -------------------------------
# Load settings
# -------------------------------
settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install application logging for the entire test session.

    dictConfig replaces the root handlers, which can drop pytest's capture handler; it is
    re-attached so `caplog.records` keeps working.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials, for logging.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path: Path) -> str:
    """
    1. `TEST_DATABASE_URL` environment variable (CI/CD override)
    2. SQLite file in the test's tmp_path, so no database server is needed locally
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test_database.db'}"


# ------------------------------------------------------------------------------------------------
# ENVIRONMENT / PLATFORM FIXES
# ------------------------------------------------------------------------------------------------

# On Windows, psycopg async needs the SelectorEventLoop (not the default ProactorEventLoop).
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine built exactly like the application's (bounded pool, SQLite foreign keys on),
    with the tables created before the test and dropped after it.

    Function scope: repositories commit, so every test starts from empty tables.
    """
    url = get_test_database_url(tmp_path)
    logger.debug("Using test DB: %s", safe_log_db_url(url))

    engine = create_engine(settings.model_copy(update={"DATABASE_URL": url, "SQLALCHEMY_ECHO": False}))
    await create_tables(engine)

    yield engine

    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture()
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


# Repository test fixtures
from qna.tests.test_fixtures.repository_fixtures import (  # noqa: E402
    backend,
    memory_store,
    questions_repository,
    answers_repository,
    sample_question,
    sample_answer_content,
    created_question,
    create_question,
)
