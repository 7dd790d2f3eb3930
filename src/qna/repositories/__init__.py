"""
Repository layer.

    from qna.repositories import SqlQuestionsRepository, SqlAnswersRepository

Callers should type against the `QuestionsRepository` / `AnswersRepository` protocols so the
SQL implementations and the in-memory doubles stay interchangeable.
"""

from .protocols import QuestionsRepository, AnswersRepository
from .base_repository import BaseRepository
from .questions_repository import SqlQuestionsRepository
from .answers_repository import SqlAnswersRepository
from .in_memory import InMemoryStore, InMemoryQuestionsRepository, InMemoryAnswersRepository

__all__ = [
    "QuestionsRepository",
    "AnswersRepository",
    "BaseRepository",
    "SqlQuestionsRepository",
    "SqlAnswersRepository",
    "InMemoryStore",
    "InMemoryQuestionsRepository",
    "InMemoryAnswersRepository",
]
