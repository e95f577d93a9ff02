"""Translation of domain errors into HTTP responses.

Routes catch ``DomainError`` and raise the result of ``to_http_exception``
so every bounded context reports failures with the same status classes.
Malformed request input is reported as 400, the status class of
``ValidationError``, instead of FastAPI's default 422.
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared_kernel.errors import DomainError, Unauthenticated


def to_http_exception(error: DomainError) -> HTTPException:
    """Build the HTTPException for a domain error.

    401 responses carry ``WWW-Authenticate: Bearer`` as RFC 6750 requires.
    """
    headers = (
        {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    )
    return HTTPException(
        status_code=error.status_code,
        detail=error.message,
        headers=headers,
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first input error as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_validation_error(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the shared exception handlers on an application."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
