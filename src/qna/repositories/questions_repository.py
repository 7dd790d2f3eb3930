"""
Question repository backed by SQLAlchemy.

Questions are inserted with only title/description, listed in bulk and deleted by
identifier. There is no update operation.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qna.models.question import Question as QuestionModel
from qna.schemas import Question, QuestionDetail
from qna.validators.identifier_validators import parse_or_invalid
from .base_repository import BaseRepository


class SqlQuestionsRepository(BaseRepository[QuestionModel, QuestionDetail]):
    """
    SQL implementation of `QuestionsRepository`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(QuestionModel, QuestionDetail, session_factory)

    async def create_question(self, question: Question) -> QuestionDetail:
        """
        Insert a question and return the persisted record.

        Raises:
            StorageError: on any storage failure
        """
        return await self._insert_returning(
            {"title": question.title, "description": question.description}
        )

    async def get_questions(self, offset: int = 0, limit: int | None = None) -> list[QuestionDetail]:
        """
        Return every question, eagerly materialized.

        Ordering is storage-defined unless `offset`/`limit` is given, in which case rows
        are ordered by (created_at, question_uuid).
        """
        return await self._fetch_all(
            select(QuestionModel),
            offset=offset,
            limit=limit,
            order_by=(QuestionModel.created_at, QuestionModel.question_uuid),
        )

    async def delete_question(self, question_uuid: str) -> None:
        """
        Delete a question by identifier. Its answers go with it (ON DELETE CASCADE).

        Raises:
            InvalidIdentifierError: if `question_uuid` is malformed
            StorageError: on any storage failure
        """
        uuid = parse_or_invalid(question_uuid)
        await self._delete_where(QuestionModel.question_uuid, uuid)
