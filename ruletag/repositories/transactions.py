"""Transaction repository."""

from datetime import date

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.engine.classifier import UNCATEGORIZED
from ruletag.models.transaction import Transaction
from ruletag.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    def _query(
        self,
        owner_id: str | None = None,
        account_id: str | None = None,
        description: str | None = None,
        category: str | None = None,
        uncategorized: bool = False,
        search: str | None = None,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        query = select(Transaction)
        if owner_id is not None:
            query = query.where(Transaction.owner_id == owner_id)
        if account_id is not None:
            query = query.where(Transaction.account_id == account_id)
        if description is not None:
            query = query.where(Transaction.description == description)
        if category is not None:
            query = query.where(Transaction.category == category)
        if uncategorized:
            query = query.where(
                or_(
                    Transaction.category.is_(None),
                    Transaction.category == "",
                    Transaction.category == UNCATEGORIZED,
                )
            )
        if search:
            query = query.where(Transaction.description.ilike(f"%{search}%"))
        if type is not None:
            query = query.where(Transaction.type == type)
        if date_from:
            query = query.where(Transaction.date >= date_from)
        if date_to:
            query = query.where(Transaction.date <= date_to)
        return query

    async def find_many(
        self,
        owner_id: str | None = None,
        *,
        recent_first: bool = False,
        offset: int = 0,
        limit: int | None = None,
        **filters,
    ) -> list[Transaction]:
        """Fetch transactions matching the filters.

        Default order is by ID (scan order); ``recent_first`` orders by date
        then ID, newest first.
        """
        query = self._query(owner_id, **filters)
        if recent_first:
            query = query.order_by(Transaction.date.desc(), Transaction.id.desc())
        else:
            query = query.order_by(Transaction.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_matching(self, owner_id: str | None = None, **filters) -> int:
        sub = self._query(owner_id, **filters).subquery()
        result = await self.db.execute(select(func.count()).select_from(sub))
        return result.scalar() or 0

    async def totals_by_category(self, owner_id: str | None = None, **filters) -> list:
        """Rows of (category, total, txn_count) grouped by stored category."""
        sub = self._query(owner_id, **filters).subquery()
        query = (
            select(
                sub.c.category,
                func.sum(sub.c.amount).label("total"),
                func.count().label("txn_count"),
            )
            .group_by(sub.c.category)
        )
        result = await self.db.execute(query)
        return list(result.all())
