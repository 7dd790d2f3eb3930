# qna/api/v1/error_handlers.py
"""
FastAPI exception handlers that map repository-level exceptions to HTTP responses.

Repositories raise qna.exceptions.base.* exceptions; these handlers turn them into stable
JSON payloads (via .to_payload()) with the status the exception declares (.http_status()):

| Exception                | Status | Log level |
| ------------------------ | ------ | --------- |
| InvalidIdentifierError   | 400    | INFO      |
| StorageError             | 500    | ERROR     |
| RepositoryError (other)  | 500    | WARNING   |
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from qna.exceptions.base import (
    RepositoryError,
    InvalidIdentifierError,
    StorageError,
)

logger = logging.getLogger(__name__)


# Most specific first. Mapping lives in the exception classes; handlers stay tiny.

async def invalid_identifier_handler(request: Request, exc: InvalidIdentifierError) -> JSONResponse:
    logger.info("InvalidIdentifierError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    # the cause carries driver details; it goes to the log, never to the client
    logger.error(
        "StorageError for %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc.__cause__ or exc,
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


# Helper to register all handlers on an app (called from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidIdentifierError, invalid_identifier_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
