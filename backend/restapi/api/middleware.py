"""Request pipeline middleware: request context, error recovery and classification.

Invariants:
    - Every failure, raised anywhere below, leaves the service as a JSON
      ``ErrorResponse`` written here; routes and services never write errors.
    - Unhandled exceptions and 500s are logged with the original cause;
      4xx responses are not logged as errors.
    - A request is always resolved: nothing is re-raised to the server.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from restapi.core.errors import AppError, classify
from restapi.core.logging import RequestLogger, request_logger

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


def request_log(request: Request) -> logging.Logger | RequestLogger:
    """Return the logger bound to *request*, or the module logger outside a request context."""
    return getattr(request.state, "logger", None) or logger


# ── Error handling ────────────────────────────────────────────────────────────


def error_response(request: Request, exc: BaseException) -> JSONResponse:
    """Classify *exc* and render it as the JSON error body."""
    res = classify(exc)
    if res.status >= 500:
        request_log(request).error("Encountered internal server error: %r", exc)
    headers = {"WWW-Authenticate": "Bearer"} if res.status == 401 else None
    return JSONResponse(status_code=res.status, content=res.to_body(), headers=headers)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Recovers from any exception escaping the route layer."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            request_log(request).error(
                "Recovered from unhandled %s: %s", type(exc).__name__, exc, exc_info=exc
            )
            response = error_response(request, exc)
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                response.headers[REQUEST_ID_HEADER] = request_id
            return response


def register_error_handlers(app: FastAPI) -> None:
    """Route the failures FastAPI catches itself through :func:`error_response`.

    Every expected 4xx signal is listed here so it never reaches
    :class:`ErrorHandlerMiddleware`, which logs what it catches as a crash.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(request, exc)

    @app.exception_handler(PydanticValidationError)
    async def body_validation_error_handler(request: Request, exc: PydanticValidationError):
        return error_response(request, exc)

    @app.exception_handler(NoResultFound)
    async def no_result_handler(request: Request, exc: NoResultFound):
        return error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc)


# ── Request context ───────────────────────────────────────────────────────────


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request metadata to a per-request logger and writes the access log."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)
        request.state.request_id = request_id
        request.state.correlation_id = correlation_id
        request.state.logger = request_logger("restapi.request", request_id, correlation_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Rendered by ErrorHandlerMiddleware, which wraps this one
            _log_access(request, 500, start)
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        _log_access(request, response.status_code, start)
        return response


def _log_access(request: Request, status_code: int, start: float) -> None:
    elapsed_ms = (time.perf_counter() - start) * 1000
    request_log(request).info(
        "%s %s %d %.3fms", request.method, request.url.path, status_code, elapsed_ms
    )
