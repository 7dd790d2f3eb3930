# src/qna/core/logging/middleware.py
"""
Request-scoped logging middleware for FastAPI / Starlette.

RequestIDMiddleware
    Uses the incoming `X-Request-ID` header or generates a UUID4, stores it in the
    request-id contextvar for the duration of the request (RequestIdFilter reads it) and
    echoes it on the response.

RequestTimerMiddleware
    Emits one INFO line per request on the `qna.request_timer` logger with method, path,
    duration and status code. Register it inside RequestIDMiddleware so the timing line
    carries the request id:

        app.add_middleware(RequestTimerMiddleware)
        app.add_middleware(RequestIDMiddleware)   # added last = runs first
"""

import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

timer_logger = logging.getLogger("qna.request_timer")

# upper bound for client-supplied ids, keeps log lines sane
_MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Sets a request id for each incoming request and returns it as `X-Request-ID`.
    """

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get("X-Request-ID")
        if incoming and len(incoming) <= _MAX_REQUEST_ID_LENGTH and incoming.isprintable():
            rid = incoming
        else:
            rid = str(uuid.uuid4())

        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = rid
            return response
        finally:
            reset_request_id(token)


class RequestTimerMiddleware(BaseHTTPMiddleware):
    """
    Logs "Request completed" with method, path, duration_ms and status for every request.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        method = request.method
        path = request.url.path

        # an exception escaping the app is reported as 500 by ServerErrorMiddleware
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            timer_logger.info(
                "Request completed - Method: %s, Path: %s, Duration: %.2fms, Status: %s",
                method,
                path,
                duration_ms,
                status_code,
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": round(duration_ms, 2),
                    "status_code": status_code,
                },
            )
