"""
Server-side identifier generation.

Identifiers are owned by the database: rows are inserted without a primary key and the
engine fills it in through the column's server default. Postgres (13+) has
`gen_random_uuid()` built in; SQLite has no UUID function, so it gets an expression that
assembles a random version-4 UUID from `randomblob()`.

SQLAlchemy's `Uuid` type stores values on SQLite as 32 lowercase hex characters without
hyphens, so the SQLite expression produces exactly that shape.
"""
from sqlalchemy import Uuid
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class gen_random_uuid(FunctionElement):
    type = Uuid()
    name = "gen_random_uuid"
    inherit_cache = True


@compiles(gen_random_uuid)
def _gen_random_uuid_default(element, compiler, **kw):
    return "gen_random_uuid()"


@compiles(gen_random_uuid, "sqlite")
def _gen_random_uuid_sqlite(element, compiler, **kw):
    # 8 hex | 4 hex | '4' + 3 hex (version) | one of 8,9,a,b + 3 hex (variant) | 12 hex
    return (
        "lower(hex(randomblob(4)) || hex(randomblob(2)) || '4' || "
        "substr(hex(randomblob(2)), 2) || "
        "substr('89ab', 1 + (abs(random()) % 4), 1) || "
        "substr(hex(randomblob(2)), 2) || hex(randomblob(6)))"
    )
