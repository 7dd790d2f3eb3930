from fastapi import Request

from qna.repositories.protocols import AnswersRepository, QuestionsRepository


# Repositories are built once per process (app factory / lifespan) and stored on app.state.

def get_questions_repository(request: Request) -> QuestionsRepository:
    return request.app.state.questions_repository


def get_answers_repository(request: Request) -> AnswersRepository:
    return request.app.state.answers_repository
