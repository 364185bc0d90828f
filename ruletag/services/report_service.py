"""Report service: description grouping and category totals."""

import re
from collections import defaultdict
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.config import settings
from ruletag.engine.classifier import UNCATEGORIZED, is_uncategorized
from ruletag.repositories.transactions import TransactionRepository


def normalize_description(description: str | None) -> str:
    """Grouping key for a description: trimmed, single-spaced, upper-case.

    This is an exact-match key, not fuzzy matching.
    """
    return re.sub(r"\s+", " ", (description or "").strip().upper())


class ReportService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transactions = TransactionRepository(db)

    async def description_summary(self, owner_id: str | None = None, limit: int | None = None) -> list[dict]:
        """Group transactions by normalized description, most frequent first.

        ``sample`` is the first raw description seen for the group; samples
        are what the rule-from-samples builder is fed with.
        """
        limit = limit or settings.description_summary_limit
        groups: dict[str, dict] = {}
        categories: dict[str, set[str]] = defaultdict(set)

        for txn in await self.transactions.find_many(owner_id):
            key = normalize_description(txn.description)
            if not key:
                continue
            group = groups.setdefault(key, {"normalized": key, "sample": txn.description, "count": 0})
            group["count"] += 1
            categories[key].add(UNCATEGORIZED if is_uncategorized(txn.category) else txn.category)

        ranked = sorted(groups.values(), key=lambda g: (-g["count"], g["normalized"]))
        return [{**g, "categories": sorted(categories[g["normalized"]])} for g in ranked[:limit]]

    async def category_summary(
        self,
        owner_id: str | None = None,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[dict]:
        """Totals per category, largest absolute total first."""
        rows = await self.transactions.totals_by_category(
            owner_id, type=type, date_from=date_from, date_to=date_to
        )

        totals: dict[str, dict] = {}
        for row in rows:
            name = UNCATEGORIZED if is_uncategorized(row.category) else row.category
            entry = totals.setdefault(name, {"category": name, "total": Decimal("0"), "count": 0})
            entry["total"] += Decimal(str(row.total or 0))
            entry["count"] += row.txn_count

        return sorted(totals.values(), key=lambda e: (-abs(e["total"]), e["category"]))
