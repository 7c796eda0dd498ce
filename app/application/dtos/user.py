"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of create_user). No password."""

    id: str
    username: str


@dataclass(frozen=True)
class CredentialRecord:
    """Stored credential used for sign-in checks. Never leaves the application layer."""

    username: str
    hashed_password: str
