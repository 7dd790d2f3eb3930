"""Fixtures for repository tests.

Every repository test runs twice: once against the SQL repositories (on the database chosen
in conftest.py) and once against the in-memory doubles. Both must honour the same contract.
"""

import pytest
from pytest import FixtureRequest

from qna.repositories import (
    AnswersRepository,
    InMemoryAnswersRepository,
    InMemoryQuestionsRepository,
    InMemoryStore,
    QuestionsRepository,
    SqlAnswersRepository,
    SqlQuestionsRepository,
)
from qna.schemas import Question, QuestionDetail


@pytest.fixture(params=["sql", "memory"])
def backend(request: FixtureRequest) -> str:
    """Which implementation the repository fixtures build."""
    return request.param


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def questions_repository(backend: str, request: FixtureRequest) -> QuestionsRepository:
    """
    QuestionsRepository for the current backend.

    The SQL variant pulls `session_factory` lazily so in-memory runs never touch a database.
    """
    if backend == "memory":
        return InMemoryQuestionsRepository(request.getfixturevalue("memory_store"))
    return SqlQuestionsRepository(request.getfixturevalue("session_factory"))


@pytest.fixture
def answers_repository(backend: str, request: FixtureRequest) -> AnswersRepository:
    """
    AnswersRepository sharing storage with `questions_repository`.
    """
    if backend == "memory":
        return InMemoryAnswersRepository(request.getfixturevalue("memory_store"))
    return SqlAnswersRepository(request.getfixturevalue("session_factory"))


@pytest.fixture
def sample_question() -> Question:
    """
    Simple, deterministic question payload. Kept synchronous because it does not touch storage.
    """
    return Question(title="How do I rotate logs?", description="RotatingFileHandler or logrotate?")


@pytest.fixture
def sample_answer_content() -> str:
    return "Use RotatingFileHandler with maxBytes and backupCount."


@pytest.fixture
def create_question(questions_repository: QuestionsRepository):
    """
    Factory helper that creates questions with optional overrides.

    Usage:
        question = await create_question(title="Other")
    """
    counter = 0

    async def _create(**overrides) -> QuestionDetail:
        nonlocal counter
        counter += 1
        data = {"title": f"Question {counter}", "description": f"Description {counter}"}
        data.update(overrides)
        return await questions_repository.create_question(Question(**data))

    return _create


@pytest.fixture
async def created_question(questions_repository: QuestionsRepository, sample_question: Question) -> QuestionDetail:
    """A single persisted question."""
    return await questions_repository.create_question(sample_question)
