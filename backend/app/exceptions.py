"""Domain exceptions for the catalog API.

Services raise these; ``app.exception_handlers`` maps them to HTTP responses.
"""
from typing import Any


class CatalogError(Exception):
    """Base class for catalog errors.

    Attributes:
        message: Human-readable description.
        error_code: Machine-readable code, defaults to the class name.
        details: Extra context (field errors, resource ids).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: Any = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details if details is not None else {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(CatalogError):
    """Invalid pagination, filter or payload input."""

    def __init__(self, message: str = "Invalid request", details: Any = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)


class Unauthorized(CatalogError):
    """Missing credentials or access to another customer's rows."""

    def __init__(self, message: str = "You are not allowed to access this resource") -> None:
        super().__init__(message, "UNAUTHORIZED")


class Forbidden(CatalogError):
    """Caller's role is below what the operation requires."""

    def __init__(self, message: str = "You are not allowed to access") -> None:
        super().__init__(message, "FORBIDDEN")


class NotFound(CatalogError):
    """Requested entity does not exist."""

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class PreconditionViolation(CatalogError):
    """Server-side invariant breach, e.g. a company admin with no customer."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "PRECONDITION_VIOLATION")
