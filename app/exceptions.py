"""Typed failures raised by services and translated to JSON by main.py."""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """A required field is missing or a value is not acceptable."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthorizedError(AppError):
    """The access gate rejected the bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidCredentialsError(AppError):
    """Password does not match the stored hash."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class NotFoundError(AppError):
    """Entity absent by id, username or email."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UploadError(AppError):
    """Object storage rejected or failed the upload."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upload failed"


class StoreUnavailableError(AppError):
    """Connection or backend failure on a store operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Backing store unavailable"
