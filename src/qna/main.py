"""
Application factory and process entry point.

    qna-server                # console script -> run()

Startup order: logging, engine (connection pool), `SELECT 1` health check, optional table
creation, repositories. A database that cannot be reached at startup stops the process.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
import uvicorn

from qna.api.v1 import register_exception_handlers, router
from qna.config.settings import Settings, get_settings
from qna.core.logging import RequestIDMiddleware, RequestTimerMiddleware, setup_logging
from qna.database.session import (
    create_engine,
    create_session_factory,
    create_tables,
    verify_connection,
)
from qna.repositories import AnswersRepository, QuestionsRepository, SqlAnswersRepository, SqlQuestionsRepository
from qna.utils.logging import get_project_version

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    questions_repository: QuestionsRepository | None = None,
    answers_repository: AnswersRepository | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Repositories passed in are used as-is and no engine is created (tests pass the
    in-memory doubles). Otherwise the lifespan builds the engine and the SQL repositories
    and disposes the engine on shutdown.
    """
    settings = settings or get_settings()
    injected = questions_repository is not None and answers_repository is not None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if injected:
            yield
            return

        engine = create_engine(settings)
        try:
            await verify_connection(engine)
            if settings.DB_CREATE_TABLES:
                await create_tables(engine)
        except Exception:
            logger.critical(
                "Failed to create database connection pool",
                exc_info=True,
                extra={"database_url": settings.SQLALCHEMY_DATABASE_URL},
            )
            await engine.dispose()
            raise

        session_factory = create_session_factory(engine)
        app.state.questions_repository = SqlQuestionsRepository(session_factory)
        app.state.answers_repository = SqlAnswersRepository(session_factory)
        logger.info("app.startup", extra={"env": settings.ENV})

        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")

    app = FastAPI(
        title="Q&A Service",
        version=get_project_version(),
        lifespan=lifespan,
    )

    if injected:
        app.state.questions_repository = questions_repository
        app.state.answers_repository = answers_repository

    # added last = runs first, so the timing line carries the request id
    app.add_middleware(RequestTimerMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(router)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings)
    # log_config=None keeps uvicorn from replacing the dictConfig installed above
    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
