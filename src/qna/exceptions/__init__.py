# qna/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError, InvalidIdentifierError, StorageError)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   └── mapper.py                  # Map SQL-level errors to app-level errors

from .base import RepositoryError, InvalidIdentifierError, StorageError
from .integrity_classifier import ConstraintKind, classify_integrity_error
from .mapper import db_error_handler, map_integrity_error

__all__ = [
    "RepositoryError",
    "InvalidIdentifierError",
    "StorageError",
    "ConstraintKind",
    "classify_integrity_error",
    "db_error_handler",
    "map_integrity_error",
]
