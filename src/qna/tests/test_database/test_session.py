import uuid

import pytest
from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from qna.config.settings import Settings
from qna.database.functions import gen_random_uuid
from qna.database.session import create_engine, verify_connection


def sqlite_settings(path) -> Settings:
    return Settings(_env_file=None, DATABASE_URL=f"sqlite+aiosqlite:///{path}")


class TestGenRandomUuid:

    def test_postgres_uses_builtin(self):
        assert str(gen_random_uuid().compile(dialect=postgresql.dialect())) == "gen_random_uuid()"

    def test_sqlite_uses_randomblob(self):
        assert "randomblob" in str(gen_random_uuid().compile(dialect=sqlite.dialect()))


@pytest.mark.asyncio
class TestEngine:

    async def test_sqlite_expression_yields_version_4_identifiers(self, tmp_path):
        engine = create_engine(sqlite_settings(tmp_path / "ids.db"))
        try:
            async with engine.connect() as conn:
                sql = str(gen_random_uuid().compile(dialect=engine.dialect))
                values = [(await conn.execute(text(f"SELECT {sql}"))).scalar_one() for _ in range(20)]
        finally:
            await engine.dispose()

        assert len(set(values)) == 20
        for value in values:
            assert len(value) == 32
            parsed = uuid.UUID(value)
            assert parsed.version == 4
            assert parsed.variant == uuid.RFC_4122

    async def test_sqlite_foreign_keys_enabled(self, tmp_path):
        engine = create_engine(sqlite_settings(tmp_path / "fk.db"))
        try:
            async with engine.connect() as conn:
                assert (await conn.execute(text("PRAGMA foreign_keys"))).scalar_one() == 1
        finally:
            await engine.dispose()

    async def test_verify_connection_succeeds(self, async_engine: AsyncEngine):
        await verify_connection(async_engine)

    async def test_verify_connection_propagates_failure(self, tmp_path):
        engine = create_engine(sqlite_settings(tmp_path / "missing" / "db.sqlite"))
        try:
            with pytest.raises(OperationalError):
                await verify_connection(engine)
        finally:
            await engine.dispose()
