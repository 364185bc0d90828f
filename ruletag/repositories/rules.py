"""Category rule repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.models.rule import CategoryRule
from ruletag.repositories.base import BaseRepository


class RuleRepository(BaseRepository[CategoryRule]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, CategoryRule)

    async def find_many(self) -> list[CategoryRule]:
        """All rules, in insertion (ID) order."""
        result = await self.db.execute(select(CategoryRule).order_by(CategoryRule.id))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> CategoryRule | None:
        result = await self.db.execute(select(CategoryRule).where(CategoryRule.name == name))
        return result.scalar_one_or_none()
