"""
Answer repository backed by SQLAlchemy.

Answer creation is the one write that can violate referential integrity. The foreign-key
violation reported by the engine is turned into InvalidIdentifierError naming the question
identifier, the same error kind a malformed identifier produces. Callers therefore cannot
tell "malformed" from "well-formed but unknown" apart, and do not need to.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qna.exceptions.base import InvalidIdentifierError
from qna.models.answer import Answer as AnswerModel
from qna.schemas import Answer, AnswerDetail
from qna.validators.identifier_validators import parse_or_invalid
from .base_repository import BaseRepository


class SqlAnswersRepository(BaseRepository[AnswerModel, AnswerDetail]):
    """
    SQL implementation of `AnswersRepository`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(AnswerModel, AnswerDetail, session_factory)

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        """
        Insert an answer under an existing question.

        Raises:
            InvalidIdentifierError: if `answer.question_uuid` is malformed or no question
                with that identifier exists
            StorageError: on any other storage failure
        """
        question_uuid = parse_or_invalid(answer.question_uuid)

        def unknown_question() -> InvalidIdentifierError:
            return InvalidIdentifierError(f"Invalid question UUID: {answer.question_uuid}")

        return await self._insert_returning(
            {"question_uuid": question_uuid, "content": answer.content},
            on_foreign_key_violation=unknown_question,
        )

    async def get_answers(
        self, question_uuid: str, offset: int = 0, limit: int | None = None
    ) -> list[AnswerDetail]:
        """
        Return the answers of one question.

        Question existence is not checked: an unknown question simply has no answers.

        Raises:
            InvalidIdentifierError: if `question_uuid` is malformed
            StorageError: on any storage failure
        """
        uuid = parse_or_invalid(question_uuid)
        return await self._fetch_all(
            select(AnswerModel).where(AnswerModel.question_uuid == uuid),
            offset=offset,
            limit=limit,
            order_by=(AnswerModel.created_at, AnswerModel.answer_uuid),
        )

    async def delete_answer(self, answer_uuid: str) -> None:
        """
        Delete an answer by identifier; unknown identifiers are not an error.

        Raises:
            InvalidIdentifierError: if `answer_uuid` is malformed
            StorageError: on any storage failure
        """
        uuid = parse_or_invalid(answer_uuid)
        await self._delete_where(AnswerModel.answer_uuid, uuid)
