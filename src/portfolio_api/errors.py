"""Exceptions raised by the Portfolio API and the handlers that render them."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PortfolioAPIError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldsError(PortfolioAPIError):
    """Required fields were absent or empty."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, fields, message: str = "All fields required"):
        super().__init__(message)
        self.fields = list(fields)


class InvalidPayloadError(PortfolioAPIError):
    status_code = status.HTTP_400_BAD_REQUEST


class RecordNotFoundError(PortfolioAPIError):
    """No record with the given ID exists in the collection."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, label: str, record_id: str):
        super().__init__(f"{label} not found")
        self.record_id = record_id


class UploadError(PortfolioAPIError):
    """The media store rejected or failed an upload."""


async def handle_portfolio_errors(request: Request, exc: PortfolioAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Field values that could not be coerced to their declared types."""
    errors = exc.errors(include_url=False, include_context=False)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Invalid field values",
            "details": [
                {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                for error in errors
            ],
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Surface any unhandled failure (store outage, driver error) as a 500 with its message."""
    try:
        return await call_next(request)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
