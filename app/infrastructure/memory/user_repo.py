"""In-memory user repository. Same contract as the SQLAlchemy UserRepository."""

from __future__ import annotations

from app.application.dtos.user import CredentialRecord, UserResult
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.memory.store import MemoryStore, StoredUser
from app.infrastructure.security.password import get_password_hash_async
from app.shared.utils.generators import generate_cuid


class MemoryUserRepository:
    """Credentials held in a MemoryStore."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_credential(self, username: str) -> CredentialRecord | None:
        async with self._store.lock:
            user = self._store.users.get(username)
        if user is None:
            return None
        return CredentialRecord(username=user.username, hashed_password=user.hashed_password)

    async def create_user(self, username: str, password: str) -> UserResult:
        # Hash outside the lock; bcrypt is slow
        hashed = await get_password_hash_async(password)
        async with self._store.lock:
            if username in self._store.users:
                raise UserAlreadyExistsException(username)
            user = StoredUser(id=generate_cuid(), username=username, hashed_password=hashed)
            self._store.users[username] = user
        return UserResult(id=user.id, username=user.username)
