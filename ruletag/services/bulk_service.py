"""Bulk categorization: preview/apply a pattern, apply by description, retag.

Every operation loads its data once at the start of the call. Writes are
issued one record at a time and each one is committed on its own, so a store
failure part-way leaves the earlier updates in place; the returned counts
only include writes that succeeded.
"""

from collections.abc import Iterable

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.config import settings
from ruletag.core.exceptions import ValidationError
from ruletag.engine.classifier import classify
from ruletag.engine.matcher import matches
from ruletag.engine.rules import MAX_NAME_LENGTH, MatchType, RuleSpec, snapshot
from ruletag.models.transaction import Transaction
from ruletag.repositories.rules import RuleRepository
from ruletag.repositories.transactions import TransactionRepository
from ruletag.schemas.bulk import AssignByPatternRequest

logger = structlog.get_logger()

# Name given to ad-hoc rules; never stored.
_ADHOC_RULE_NAME = "__adhoc__"


class BulkService:
    def __init__(
        self,
        db: AsyncSession,
        transactions: TransactionRepository | None = None,
        rules: RuleRepository | None = None,
    ):
        self.db = db
        self.transactions = transactions or TransactionRepository(db)
        self.rules = rules or RuleRepository(db)

    # ── By pattern ─────────────────────────────────────

    async def assign_by_pattern(self, data: AssignByPatternRequest, owner_id: str | None = None) -> dict:
        """Preview or apply an ad-hoc rule, depending on ``data.preview``.

        Only an explicit ``preview=False`` writes.
        """
        if data.is_apply:
            return await self.apply_pattern(data.match_type, data.pattern, data.category, owner_id)
        return await self.preview_pattern(data.match_type, data.pattern, data.limit, owner_id)

    async def preview_pattern(
        self,
        match_type: str,
        pattern: str,
        limit: int | None = None,
        owner_id: str | None = None,
    ) -> dict:
        """Count the transactions an ad-hoc rule would match, without writing."""
        rule = self._adhoc_rule(match_type, pattern)
        limit = min(limit or settings.preview_default_limit, settings.preview_max_limit)

        matched = self._matching(await self.transactions.find_many(owner_id), rule)

        logger.info(
            "pattern_previewed",
            match_type=rule.match_type.value,
            owner_id=owner_id,
            count=len(matched),
        )
        return {"count": len(matched), "sample": matched[:limit]}

    async def apply_pattern(
        self,
        match_type: str,
        pattern: str,
        category: str,
        owner_id: str | None = None,
    ) -> dict:
        """Set ``category`` on every transaction the ad-hoc rule matches."""
        rule = self._adhoc_rule(match_type, pattern)
        category = self._require_category(category)

        matched = self._matching(await self.transactions.find_many(owner_id), rule)
        result = await self._assign(matched, category)

        logger.info(
            "pattern_applied",
            match_type=rule.match_type.value,
            category=category,
            owner_id=owner_id,
            **result,
        )
        return result

    # ── By exact description ───────────────────────────

    async def apply_by_description(
        self,
        description: str,
        category: str,
        owner_id: str | None = None,
    ) -> dict:
        """Set ``category`` on every transaction whose description is exactly ``description``.

        An empty ``description`` selects the transactions stored without one.
        """
        if not isinstance(description, str):
            raise ValidationError("Description must be a string")
        category = self._require_category(category)

        matched = await self.transactions.find_many(owner_id, description=description)
        result = await self._assign(matched, category)

        logger.info("description_applied", category=category, owner_id=owner_id, **result)
        return result

    # ── Full retag ─────────────────────────────────────

    async def retag_all(self, owner_id: str | None = None) -> dict:
        """Reclassify every transaction with the current rules.

        Only transactions whose computed category differs from the stored
        one are written.
        """
        rules = snapshot(await self.rules.find_many())
        transactions = await self.transactions.find_many(owner_id)

        changes = []
        for txn in transactions:
            category = classify(txn, rules)
            if category != txn.category:
                changes.append((txn.id, category))

        updated = 0
        failed = 0
        for txn_id, category in changes:
            if await self._write_category(txn_id, category):
                updated += 1
            else:
                failed += 1

        logger.info(
            "transactions_retagged",
            owner_id=owner_id,
            rules_count=len(rules),
            scanned=len(transactions),
            updated=updated,
            failed=failed,
        )
        return {"updated": updated, "failed": failed}

    # ── Helpers ─────────────────────────────────────────

    @staticmethod
    def _adhoc_rule(match_type: str, pattern: str) -> RuleSpec:
        return RuleSpec(name=_ADHOC_RULE_NAME, match_type=MatchType.parse(match_type), pattern=pattern)

    @staticmethod
    def _require_category(category: str) -> str:
        if not isinstance(category, str) or not category.strip():
            raise ValidationError("Category is required")
        if len(category.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"Category is too long (max {MAX_NAME_LENGTH} characters)")
        return category.strip()

    @staticmethod
    def _matching(transactions: Iterable[Transaction], rule: RuleSpec) -> list[Transaction]:
        return [txn for txn in transactions if matches(txn.description, rule)]

    async def _assign(self, transactions: list[Transaction], category: str) -> dict:
        # IDs are collected up front: a failed write rolls the session back
        # and expires every loaded row.
        pending = [txn.id for txn in transactions if txn.category != category]

        modified = 0
        failed = 0
        for txn_id in pending:
            if await self._write_category(txn_id, category):
                modified += 1
            else:
                failed += 1
        return {"matched": len(transactions), "modified": modified, "failed": failed}

    async def _write_category(self, txn_id: int, category: str) -> bool:
        try:
            written = await self.transactions.update_one(txn_id, {"category": category})
        except SQLAlchemyError as e:
            logger.warning("category_write_failed", transaction_id=txn_id, error=str(e))
            return False
        if not written:
            logger.warning("category_write_missed", transaction_id=txn_id)
        return written
