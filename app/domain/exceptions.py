"""Domain exceptions for the Recipes application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RecipesException(Exception):
    """Base exception for all Recipes application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Response body for this error: {"error": message}."""
        return {"error": self.message}


class ValidationException(RecipesException):
    """Raised when input validation fails (e.g. malformed payload)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class BadRequestException(RecipesException):
    """Raised when a well-formed request is not allowed in the current state."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "BAD_REQUEST")


class AuthenticationException(RecipesException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(RecipesException):
    """Raised when a protected route is called without a logged-in session."""

    def __init__(self, message: str = "Not logged in") -> None:
        super().__init__(message, "AUTHORIZATION_ERROR")


class ResourceNotFoundException(RecipesException):
    """Raised when a requested resource is not found."""

    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'recipe').
            resource_id: The ID that was not found.
            message: Optional message; defaults to "<Type> not found".
        """
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class UserAlreadyExistsException(RecipesException):
    """Raised when creating a user whose username is already registered."""

    def __init__(self, username: str) -> None:
        super().__init__(
            "Username already registered",
            "USER_ALREADY_EXISTS",
            {"username": username},
        )
