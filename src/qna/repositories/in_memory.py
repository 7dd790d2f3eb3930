"""In-memory repository implementations for testing.

Both repositories share one `InMemoryStore`, which plays the database's role: it generates
identifiers and timestamps, enforces the answers -> questions reference, and cascades
question deletes to their answers.
"""

import uuid
from datetime import datetime, timezone

from qna.exceptions.base import InvalidIdentifierError
from qna.schemas import Answer, AnswerDetail, Question, QuestionDetail
from qna.validators.identifier_validators import parse_or_invalid
from .protocols import check_page, is_paged


class InMemoryStore:
    """Shared state for the in-memory repositories. Dicts keep insertion order."""

    def __init__(self):
        self.questions: dict[uuid.UUID, QuestionDetail] = {}
        self.answers: dict[uuid.UUID, AnswerDetail] = {}

    def clear(self) -> None:
        """Clear all rows (for testing)."""
        self.questions.clear()
        self.answers.clear()


def _page(records: list, offset: int, limit: int | None, key) -> list:
    check_page(offset, limit)
    if not is_paged(offset, limit):
        return records
    ordered = sorted(records, key=key)
    end = None if limit is None else offset + limit
    return ordered[offset:end]


class InMemoryQuestionsRepository:
    """In-memory question repository for testing."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create_question(self, question: Question) -> QuestionDetail:
        record = QuestionDetail(
            question_uuid=uuid.uuid4(),
            title=question.title,
            description=question.description,
            created_at=datetime.now(timezone.utc),
        )
        self.store.questions[record.question_uuid] = record
        return record

    async def get_questions(self, offset: int = 0, limit: int | None = None) -> list[QuestionDetail]:
        return _page(
            list(self.store.questions.values()),
            offset,
            limit,
            key=lambda q: (q.created_at, q.question_uuid),
        )

    async def delete_question(self, question_uuid: str) -> None:
        """Delete a question and, like ON DELETE CASCADE, its answers."""
        key = parse_or_invalid(question_uuid)
        if self.store.questions.pop(key, None) is None:
            return
        for answer_uuid in [a.answer_uuid for a in self.store.answers.values() if a.question_uuid == key]:
            del self.store.answers[answer_uuid]


class InMemoryAnswersRepository:
    """In-memory answer repository for testing."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        question_uuid = parse_or_invalid(answer.question_uuid)
        if question_uuid not in self.store.questions:
            raise InvalidIdentifierError(f"Invalid question UUID: {answer.question_uuid}")

        record = AnswerDetail(
            answer_uuid=uuid.uuid4(),
            question_uuid=question_uuid,
            content=answer.content,
            created_at=datetime.now(timezone.utc),
        )
        self.store.answers[record.answer_uuid] = record
        return record

    async def get_answers(
        self, question_uuid: str, offset: int = 0, limit: int | None = None
    ) -> list[AnswerDetail]:
        key = parse_or_invalid(question_uuid)
        return _page(
            [a for a in self.store.answers.values() if a.question_uuid == key],
            offset,
            limit,
            key=lambda a: (a.created_at, a.answer_uuid),
        )

    async def delete_answer(self, answer_uuid: str) -> None:
        self.store.answers.pop(parse_or_invalid(answer_uuid), None)
