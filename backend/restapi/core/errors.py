"""Error taxonomy and classification of failures into HTTP error responses.

Services and repositories raise :class:`AppError` (or let third-party
failures such as ``NoResultFound`` propagate untouched).  Nothing below the
API layer writes a response; :func:`classify` is the only place where a
failure becomes an :class:`ErrorResponse`.
"""

import enum
from http import HTTPStatus

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from restapi.schemas.common import ErrorResponse


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return int(_STATUS[self])

    @property
    def default_message(self) -> str:
        return _MESSAGES[self]


_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}

_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.VALIDATION: "There is some problem with the data you submitted.",
    ErrorKind.BAD_REQUEST: "Your request is in a bad format.",
    ErrorKind.UNAUTHORIZED: "You are not authenticated to perform the requested action.",
    ErrorKind.FORBIDDEN: "You are not authorized to perform the requested action.",
    ErrorKind.NOT_FOUND: "The requested resource was not found.",
    ErrorKind.INTERNAL: "We encountered an error while processing your request.",
}


class AppError(Exception):
    """A failure whose client-visible category is already known."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        details: dict[str, list[str]] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or kind.default_message
        self.details = details or None
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value!r}, message={self.message!r})"


# ── Constructors ──────────────────────────────────────────────────────────────


def validation_error(details: dict[str, list[str]], message: str = "") -> AppError:
    return AppError(ErrorKind.VALIDATION, message, details)


def bad_request(message: str = "") -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, message)


def unauthorized(message: str = "") -> AppError:
    return AppError(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str = "") -> AppError:
    return AppError(ErrorKind.FORBIDDEN, message)


def not_found(message: str = "") -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def internal_error(message: str = "") -> AppError:
    return AppError(ErrorKind.INTERNAL, message)


# ── Classification ────────────────────────────────────────────────────────────


def classify(failure: BaseException | ErrorResponse) -> ErrorResponse:
    """Map any failure onto an :class:`ErrorResponse`.

    Order matters: already-classified failures first, then validation,
    then not-found signals, then authorization; everything else is a 500.
    The original diagnostic never ends up in the response body.
    """
    if isinstance(failure, ErrorResponse):
        return failure

    if isinstance(failure, AppError):
        return _from_kind(failure.kind, failure.message, failure.details)

    if isinstance(failure, (RequestValidationError, PydanticValidationError)):
        return _from_kind(ErrorKind.VALIDATION, details=field_errors(failure.errors()))

    if isinstance(failure, NoResultFound):
        return _from_kind(ErrorKind.NOT_FOUND)

    if isinstance(failure, StarletteHTTPException):
        return _from_http_exception(failure)

    return _from_kind(ErrorKind.INTERNAL)


def _from_kind(
    kind: ErrorKind,
    message: str = "",
    details: dict[str, list[str]] | None = None,
) -> ErrorResponse:
    if kind in (ErrorKind.NOT_FOUND, ErrorKind.INTERNAL):
        # Identifiers of missing rows and internal diagnostics stay server side
        return ErrorResponse(status=kind.status_code, message=kind.default_message)
    return ErrorResponse(
        status=kind.status_code,
        message=message or kind.default_message,
        details=details or None,
    )


def _from_http_exception(exc: StarletteHTTPException) -> ErrorResponse:
    if exc.status_code == HTTPStatus.NOT_FOUND:
        return _from_kind(ErrorKind.NOT_FOUND)
    if exc.status_code == HTTPStatus.UNAUTHORIZED:
        return _from_kind(ErrorKind.UNAUTHORIZED)
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return _from_kind(ErrorKind.INTERNAL)
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return ErrorResponse(status=exc.status_code, message=message)


def field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Group pydantic error dicts by field name.

    Request-level prefixes (``body``, ``query``, ``path``) are dropped, and a
    body that is not valid JSON is reported against ``body`` itself.
    """
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if err.get("type") == "json_invalid":
            field = "body"
        elif len(loc) > 1 and loc[0] in ("body", "query", "path", "header"):
            field = ".".join(loc[1:])
        else:
            field = ".".join(loc) or "body"
        grouped.setdefault(field, []).append(err.get("msg", "is invalid"))
    return grouped
