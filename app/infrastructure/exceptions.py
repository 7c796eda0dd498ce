"""Infrastructure exceptions for storage operations.

Storage errors extend RecipesException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import RecipesException


class StorageException(RecipesException):
    """Database or session store operation failed."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(
            message,
            "STORAGE_ERROR",
            {"reason": reason} if reason else {},
        )


class SqlNotConfiguredException(StorageException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            "This operation requires a SQL database that is not configured."
        )
