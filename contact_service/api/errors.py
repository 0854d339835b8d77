"""HTTP Error Mapping.

Maps the service error taxonomy onto HTTP responses. Endpoints never build
error responses themselves; they let domain and storage errors propagate here.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.constants import ErrorMessages, HttpHeaders
from ..core.exceptions import (
    ConflictError,
    ContactServiceError,
    InternalError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..core.logging import get_logger, get_request_id
from ..schemas.contact import ErrorResponse

logger = get_logger(__name__)

# Checked in order; the first matching class wins.
ERROR_STATUS_CODES: tuple[tuple[type[ContactServiceError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_code_for(error: ContactServiceError) -> int:
    """Return the HTTP status code for a service error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: ContactServiceError) -> JSONResponse:
    """Build the JSON error body for a service error.

    Internal and storage failures never expose their message to the client.
    """
    status_code = status_code_for(error)
    request_id = get_request_id()

    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        detail = ErrorMessages.STORAGE_UNAVAILABLE
    elif status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        detail = ErrorMessages.INTERNAL_SERVER_ERROR
    else:
        detail = error.message

    body = ErrorResponse(
        detail=detail,
        error_type=type(error).__name__,
        field=getattr(error, "field", None),
        request_id=request_id
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers={HttpHeaders.REQUEST_ID: request_id}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the service error handlers on a FastAPI app."""

    @app.exception_handler(ContactServiceError)
    async def _service_error_handler(request: Request, exc: ContactServiceError) -> JSONResponse:
        response = error_response(exc)

        log_extra = {
            'error_type': type(exc).__name__,
            'status_code': response.status_code,
            'path': request.url.path,
            **{key: value for key, value in exc.context.items() if value is not None}
        }
        if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(exc.message, extra=log_extra, exc_info=exc)
        else:
            logger.info(exc.message, extra=log_extra)

        return response
