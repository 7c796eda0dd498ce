"""Base repository: generic get/add/remove and error translation."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_model, add, remove and commit.

    Writes only flush; the caller decides when to commit. Driver errors
    surface as StorageException.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        try:
            result = await self.db.execute(
                select(self.model).where(model.id == entity_id)
            )
        except SQLAlchemyError as e:
            raise StorageException("Database read failed", reason=str(e)) from e
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Add a new row and flush so constraint errors surface here."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def remove(self, obj: ModelType) -> None:
        """Delete the row and flush."""
        try:
            await self.db.delete(obj)
            await self.db.flush()
        except SQLAlchemyError as e:
            raise StorageException("Database delete failed", reason=str(e)) from e

    async def commit(self) -> None:
        """Commit the session; roll back and raise StorageException on failure."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageException("Database commit failed", reason=str(e)) from e
