from .base import Base
from .session import (
    create_engine,
    create_session_factory,
    create_tables,
    drop_tables,
    enable_sqlite_foreign_keys,
    verify_connection,
)

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "create_tables",
    "drop_tables",
    "enable_sqlite_foreign_keys",
    "verify_connection",
]
