"""
Centralized access to the ORM models.

    from qna.models import Question, Answer

Importing this package also registers both tables on `Base.metadata`, which
`create_tables()` and the test fixtures rely on.
"""

from .question import Question
from .answer import Answer

__all__ = [
    "Question",
    "Answer",
]
