from typing import Optional


class AppError(Exception):
    """Base class for failures that map onto an API error envelope."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class AuthError(AppError):
    status_code = 401
    message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = 403
    message = "Only admins have access"


class NotFoundError(AppError):
    status_code = 404
    message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    message = "Resource already exists"


class StoreError(AppError):
    """A query or write against the relational store failed.

    ``detail`` keeps the driver message for the logs; ``message`` is the
    only text that reaches a client.
    """

    status_code = 500
    message = "Database operation failed"

    def __init__(
        self, message: Optional[str] = None, detail: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.detail = detail


class BlobStoreError(AppError):
    """The image host rejected or failed an upload/delete."""

    status_code = 502
    message = "File storage operation failed"

    def __init__(
        self, message: Optional[str] = None, detail: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.detail = detail
