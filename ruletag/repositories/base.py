"""Base repository with generic CRUD operations."""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Add a new record and flush it so it gets an ID."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update_one(self, id: int, fields: dict[str, Any]) -> bool:
        """Update one record and commit it on its own.

        Returns False when no row has this ID. On a store error the session
        is rolled back and the error propagates.
        """
        try:
            result = await self.db.execute(
                update(self.model).where(self.model.id == id).values(**fields)
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return result.rowcount == 1

    async def delete(self, obj: T) -> None:
        await self.db.delete(obj)
        await self.db.flush()
