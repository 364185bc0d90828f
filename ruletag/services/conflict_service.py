"""Conflict detection over the most recent transactions."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.config import settings
from ruletag.engine.conflicts import Conflict, find_conflicts
from ruletag.engine.rules import snapshot
from ruletag.repositories.rules import RuleRepository
from ruletag.repositories.transactions import TransactionRepository

logger = structlog.get_logger()


class ConflictService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.rules = RuleRepository(db)

    async def find_conflicts(self, owner_id: str | None = None, scan_limit: int | None = None) -> list[Conflict]:
        """Transactions among the ``scan_limit`` most recent that two or more rules match."""
        scan_limit = scan_limit or settings.conflict_scan_limit
        rules = snapshot(await self.rules.find_many())
        transactions = await self.transactions.find_many(owner_id, recent_first=True, limit=scan_limit)

        conflicts = find_conflicts(transactions, rules)
        logger.info(
            "conflicts_found",
            owner_id=owner_id,
            scanned=len(transactions),
            conflicts=len(conflicts),
        )
        return conflicts
