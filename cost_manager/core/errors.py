"""
Error taxonomy
Domain exceptions raised by the store and the cost operations. Routers map
them to HTTP responses through ``status_code``.
"""
from fastapi import status


class CostManagerError(Exception):
    """Base class for every error the cost operations raise on purpose."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CostManagerError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingParametersError(ValidationError):
    pass


class InvalidParametersError(ValidationError):
    pass


class DocumentValidationError(ValidationError):
    """A document does not match its collection schema; nothing was written."""


class UserNotFoundError(CostManagerError):
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(CostManagerError):
    """Unexpected failure. The message is safe to show to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageError(CostManagerError):
    """The backing store rejected or failed an operation."""


class DuplicateKeyError(StorageError):
    """A unique key already exists in the collection."""
