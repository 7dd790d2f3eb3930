"""
SQL repositories log `repo.<entity>.<op>.<outcome>` events from qna.repositories.base_repository.
"""
import logging
import uuid

import pytest

from qna.repositories import SqlAnswersRepository, SqlQuestionsRepository
from qna.schemas import Answer, Question

REPO_LOGGER = "qna.repositories.base_repository"


def events(caplog) -> list[str]:
    return [r.getMessage() for r in caplog.records if r.name == REPO_LOGGER]


@pytest.mark.asyncio
class TestRepositoryEvents:

    async def test_question_create_and_delete_events(self, session_factory, caplog):
        caplog.set_level(logging.INFO, logger=REPO_LOGGER)
        repo = SqlQuestionsRepository(session_factory)

        question = await repo.create_question(Question(title="Events?", description="Named per entity"))
        await repo.delete_question(str(question.question_uuid))
        await repo.delete_question(str(question.question_uuid))

        assert events(caplog) == [
            "repo.question.create.success",
            "repo.question.delete.success",
            "repo.question.delete.no_match",
        ]

    async def test_answer_events(self, session_factory, caplog):
        questions = SqlQuestionsRepository(session_factory)
        answers = SqlAnswersRepository(session_factory)
        question = await questions.create_question(Question(title="Q", description="D"))

        caplog.set_level(logging.INFO, logger=REPO_LOGGER)
        caplog.clear()
        answer = await answers.create_answer(Answer(question_uuid=str(question.question_uuid), content="A"))
        await answers.delete_answer(str(answer.answer_uuid))
        await answers.delete_answer(str(uuid.uuid4()))

        assert events(caplog) == [
            "repo.answer.create.success",
            "repo.answer.delete.success",
            "repo.answer.delete.no_match",
        ]

    async def test_create_success_carries_duration(self, session_factory, caplog):
        caplog.set_level(logging.INFO, logger=REPO_LOGGER)
        repo = SqlQuestionsRepository(session_factory)

        await repo.create_question(Question(title="Timed", description=""))

        record = next(r for r in caplog.records if r.getMessage() == "repo.question.create.success")
        assert record.model == "Question"
        assert record.duration_ms >= 0
