"""
HTTP routes for questions and answers.

Handlers only marshal requests and responses; validation of identifiers and every
storage concern live in the repositories. Errors raised by a repository are turned into
responses by the handlers in `error_handlers.py`.
"""
from fastapi import APIRouter, Depends, Query, Response, status

from qna.api.dependencies import get_answers_repository, get_questions_repository
from qna.repositories.protocols import AnswersRepository, QuestionsRepository
from qna.schemas import Answer, AnswerDetail, AnswerId, Question, QuestionDetail, QuestionId

router = APIRouter()


# =================================================================================================================
# Questions
# =================================================================================================================

@router.post("/question", response_model=QuestionDetail)
async def create_question(
    question: Question,
    repo: QuestionsRepository = Depends(get_questions_repository),
) -> QuestionDetail:
    return await repo.create_question(question)


@router.get("/questions", response_model=list[QuestionDetail])
async def read_questions(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
    repo: QuestionsRepository = Depends(get_questions_repository),
) -> list[QuestionDetail]:
    return await repo.get_questions(offset=offset, limit=limit)


@router.delete("/question")
async def delete_question(
    question_id: QuestionId,
    repo: QuestionsRepository = Depends(get_questions_repository),
) -> Response:
    await repo.delete_question(question_id.question_uuid)
    return Response(status_code=status.HTTP_200_OK)


# =================================================================================================================
# Answers
# =================================================================================================================

@router.post("/answer", response_model=AnswerDetail)
async def create_answer(
    answer: Answer,
    repo: AnswersRepository = Depends(get_answers_repository),
) -> AnswerDetail:
    return await repo.create_answer(answer)


@router.get("/answers", response_model=list[AnswerDetail])
async def read_answers(
    question_uuid: str,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
    repo: AnswersRepository = Depends(get_answers_repository),
) -> list[AnswerDetail]:
    return await repo.get_answers(question_uuid, offset=offset, limit=limit)


@router.delete("/answer")
async def delete_answer(
    answer_id: AnswerId,
    repo: AnswersRepository = Depends(get_answers_repository),
) -> Response:
    await repo.delete_answer(answer_id.answer_uuid)
    return Response(status_code=status.HTTP_200_OK)
