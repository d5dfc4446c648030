"""Translation of domain exceptions into JSON error responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tubeaudio.exceptions import (
    CatalogIOError,
    ConversionError,
    NotFoundError,
    RangeNotSatisfiableError,
    TubeAudioError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: list[tuple[type[TubeAudioError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (RangeNotSatisfiableError, status.HTTP_416_RANGE_NOT_SATISFIABLE),
    (ConversionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (CatalogIOError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: TubeAudioError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def handle_tubeaudio_error(request: Request, exc: TubeAudioError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = None
    if isinstance(exc, RangeNotSatisfiableError):
        headers = {"Content-Range": f"bytes */{exc.total_size}"}
    return error_response(status_code, exc.message, headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(details) or "Invalid request")


async def handle_os_error(request: Request, exc: OSError) -> JSONResponse:
    logger.error("%s %s failed with an I/O error: %s", request.method, request.url.path, exc)
    detail = exc.strerror or str(exc) or type(exc).__name__
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"I/O failure: {detail}")


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TubeAudioError, handle_tubeaudio_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, handle_request_validation_error  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        StarletteHTTPException, handle_http_exception  # type: ignore[arg-type]
    )
    app.add_exception_handler(OSError, handle_os_error)  # type: ignore[arg-type]
