from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException


class CountyFinderError(Exception):
    """Base class for every failure a lookup can surface."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        error: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def user_message(self) -> str:
        return self.message or self.error


class BadRequest(CountyFinderError):
    """A required query parameter is missing or unusable."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigError(CountyFinderError):
    """The server-side Google credential is not configured."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(CountyFinderError):
    """Google answered with a non-OK status, or could not be reached at all.

    ``provider_status`` is set when the provider did answer (e.g. ``ZERO_RESULTS``
    or ``REQUEST_DENIED``); it is ``None`` for transport and parse failures.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        error: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        provider_status: str | None = None,
    ) -> None:
        super().__init__(error, message, status_code=status_code)
        self.provider_status = provider_status


class NoCountyData(CountyFinderError):
    """Geocoding succeeded but no county-level component came back."""

    status_code = status.HTTP_404_NOT_FOUND


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        error: str,
        message: str | None = None,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"error": error}
        if message is not None:
            payload["message"] = message
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


async def county_finder_exception_handler(request: Request, exc: CountyFinderError):
    return ErrorEnvelope(status_code=exc.status_code, error=exc.error, message=exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    error = detail if isinstance(detail, str) else "HTTP error"
    details = detail if isinstance(detail, dict) else None
    return ErrorEnvelope(
        status_code=exc.status_code, error=error, details=details, headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorEnvelope(
        status_code=status.HTTP_400_BAD_REQUEST,
        error="Invalid request",
        details={"errors": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CountyFinderError, county_finder_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
