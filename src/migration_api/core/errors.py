"""
Service Errors

Exceptions raised inside service helpers. Public service operations catch
them and translate them into a ServiceResult envelope.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for service-layer errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class BadRequestError(ServiceError):
    """Raised for missing or invalid input."""

    def __init__(self, message: str, error_code: str = "BAD_REQUEST"):
        super().__init__(message=message, error_code=error_code, status_code=400)


class NotFoundError(ServiceError):
    """Raised when a requested record does not exist."""

    def __init__(self, message: str, error_code: str = "NOT_FOUND"):
        super().__init__(message=message, error_code=error_code, status_code=404)


class PreconditionFailedError(ServiceError):
    """
    Raised when a user-fixable precondition is not met.

    Carries a structured ``details`` payload (title, items, note, help) so
    clients can render a checklist.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        *,
        title: str,
        items: list[str],
        note: str | None = None,
        help: str | None = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=400,
            details={"title": title, "items": items, "note": note, "help": help},
        )


class InvalidApplicationTypeError(BadRequestError):
    """Raised when an application type is neither direct nor agent."""

    def __init__(self):
        super().__init__("Invalid application type", "INVALID_APPLICATION_TYPE")


class InvalidProgramCategoryError(BadRequestError):
    """Raised when a program category has no document checklist."""

    def __init__(self, category: str | None = None):
        self.category = category
        super().__init__("Invalid program category", "INVALID_PROGRAM_CATEGORY")
