"""Repository capability interfaces.

Handlers depend on these protocols, not on a concrete class, so the SQL implementations and
the in-memory doubles are interchangeable. Every implementation must honour the same
contract:

  - identifiers are validated before any lookup; malformed ones raise InvalidIdentifierError
  - creating an answer under a non-existent question raises InvalidIdentifierError
  - deleting an unknown identifier succeeds silently
  - list operations never fail because nothing matched; they return an empty list
  - any other storage failure raises StorageError
"""

from typing import Protocol, runtime_checkable

from qna.schemas import Answer, AnswerDetail, Question, QuestionDetail


@runtime_checkable
class QuestionsRepository(Protocol):
    """Create/list/delete over questions."""

    async def create_question(self, question: Question) -> QuestionDetail:
        """Insert a question; identifier and timestamp come from the store."""
        ...

    async def get_questions(self, offset: int = 0, limit: int | None = None) -> list[QuestionDetail]:
        """All questions. Paging arguments switch to (created_at, id) ordering."""
        ...

    async def delete_question(self, question_uuid: str) -> None:
        """Delete by identifier. Unknown identifiers are not an error."""
        ...


@runtime_checkable
class AnswersRepository(Protocol):
    """Create/list-by-question/delete over answers."""

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        """Insert an answer under an existing question."""
        ...

    async def get_answers(
        self, question_uuid: str, offset: int = 0, limit: int | None = None
    ) -> list[AnswerDetail]:
        """Answers of one question; empty when the question has none or does not exist."""
        ...

    async def delete_answer(self, answer_uuid: str) -> None:
        """Delete by identifier. Unknown identifiers are not an error."""
        ...


def check_page(offset: int, limit: int | None) -> None:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


def is_paged(offset: int, limit: int | None) -> bool:
    return offset > 0 or limit is not None
