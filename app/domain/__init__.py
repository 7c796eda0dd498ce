"""Domain layer: exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
    RecipesException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "BadRequestException",
    "RecipesException",
    "ResourceNotFoundException",
    "UserAlreadyExistsException",
    "ValidationException",
]
