"""
Maps domain exceptions onto HTTP responses.

Every error body carries an error_code (e.g. INSUFFICIENT_STOCK), the
exception message, a recovery hint and the request path.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ItemNotFoundError,
    RemoteFailureError,
    StockroomError,
    StorageError,
    StoreUnavailableError,
    SubmissionInProgressError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; subclasses precede their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    RemoteFailureError: status.HTTP_502_BAD_GATEWAY,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Recovery hints keyed by error code
HINT_MAP: dict[str, str] = {
    "ITEM_NOT_FOUND": "Check the item name with GET /api/inventory; names are case-sensitive.",
    "INSUFFICIENT_STOCK": "Issue at most the available quantity or receive stock first.",
    "INVALID_QUANTITY": "Quantity must be a positive number.",
    "INVALID_LOCATION": "Pick a floor location; Vendor is only valid for receipts.",
    "SUBMISSION_IN_PROGRESS": "Wait for the previous submission to finish, then retry.",
    "WOULD_GO_NEGATIVE": "Refresh with POST /api/inventory/refresh and retry.",
    "REMOTE_FAILURE": "The store rejected the write or could not be reached. Check the connection.",
    "STORE_UNAVAILABLE": "The store could not be read. Check the endpoint and retry.",
    "AUTHENTICATION_FAILED": "Check the username and password.",
    "DATABASE_ERROR": "The local stock database rejected the write. See the server log.",
    "ConfigurationError": "Configure the store endpoint with PUT /api/settings/store.",
    "VALIDATION_ERROR": "Fix the highlighted field and submit again.",
    "ValueError": "A filter or body value could not be parsed.",
}

# Fallbacks when no code-specific hint exists
STATUS_HINTS: dict[int, str] = {
    400: "The request was rejected before reaching the store.",
    401: "Log in with valid credentials.",
    404: "The requested resource was not found.",
    409: "The request conflicts with one in progress.",
    422: "The request body or query did not match the expected types.",
    500: "Unexpected server error. See the server log.",
    502: "The upstream store failed. Retry later.",
    503: "The inventory store is not reachable right now.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Code-specific hint, else the status fallback."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log the error and build its JSON body."""
    status_code = _status_for(exc)

    # Prefer StockroomError.code, fall back to class name
    if isinstance(exc, StockroomError):
        error_code = exc.code
        message = exc.message
        details = exc.details
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        details = None

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=message,
        details=details,
        traceback=traceback.format_exc() if status_code == 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for exceptions that escape the routers and the
    registered exception handlers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return _error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, request-validation and HTTP errors."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(StockroomError)
    async def stockroom_exception_handler(
        request: Request,
        exc: StockroomError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed body or query parameters."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request did not match the schema",
                hint="Fix the listed fields and resend.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Routing errors such as 404 and 405."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
