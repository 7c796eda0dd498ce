"""User repository (SQLAlchemy). Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import CredentialRecord, UserResult
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash_async


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(id=u.id, username=u.username)


class UserRepository(BaseRepository[User]):
    """Credential lookups and user creation."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        try:
            result = await self.db.execute(select(User).where(User.username == username))
        except SQLAlchemyError as e:
            raise StorageException("Database read failed", reason=str(e)) from e
        return result.scalar_one_or_none()

    async def get_credential(self, username: str) -> CredentialRecord | None:
        user = await self.get_by_username(username)
        if user is None:
            return None
        return CredentialRecord(username=user.username, hashed_password=user.hashed_password)

    async def create_user(self, username: str, password: str) -> UserResult:
        """Create and commit a user; raise UserAlreadyExistsException on unique violation."""
        hashed = await get_password_hash_async(password)
        user = User(username=username, hashed_password=hashed)
        try:
            created = await self.add(user)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise UserAlreadyExistsException(username)
        return _user_to_result(created)
