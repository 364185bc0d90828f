"""Transaction management service."""

from math import ceil

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.core.exceptions import NotFoundError
from ruletag.engine.classifier import classify, is_uncategorized
from ruletag.engine.rules import snapshot
from ruletag.models.transaction import Transaction
from ruletag.repositories.rules import RuleRepository
from ruletag.repositories.transactions import TransactionRepository
from ruletag.schemas.transaction import ClassifyRequest, TransactionCreate

logger = structlog.get_logger()


class TransactionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.rules = RuleRepository(db)

    async def list_transactions(
        self,
        owner_id: str | None = None,
        page: int = 1,
        per_page: int = 50,
        account_id: str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> dict:
        """List transactions with pagination and filters, newest first."""
        filters = {"account_id": account_id, "category": category, "search": search}
        total = await self.transactions.count_matching(owner_id, **filters)
        transactions = await self.transactions.find_many(
            owner_id,
            recent_first=True,
            offset=(page - 1) * per_page,
            limit=per_page,
            **filters,
        )
        return {
            "data": transactions,
            "meta": {
                "total": total,
                "page": page,
                "per_page": per_page,
                "pages": ceil(total / per_page) if per_page else 0,
            },
        }

    async def list_uncategorized(self, owner_id: str | None = None, limit: int = 500) -> list[Transaction]:
        """Transactions with no category, an empty one, or "Uncategorized"."""
        return await self.transactions.find_many(owner_id, recent_first=True, limit=limit, uncategorized=True)

    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        """Create a transaction; its category comes from the rules when not given."""
        txn = Transaction(
            owner_id=data.owner_id,
            account_id=data.account_id,
            date=data.date,
            description=data.description or "",
            amount=data.amount,
            category=data.category or None,
            type=data.type.value,
        )
        if is_uncategorized(txn.category):
            rules = snapshot(await self.rules.find_many())
            txn.category = classify(txn, rules)
        return await self.transactions.create(txn)

    async def set_category(self, transaction_id: int, category: str | None) -> Transaction:
        """Set the category of a single transaction."""
        txn = await self.transactions.get_by_id(transaction_id)
        if not txn:
            raise NotFoundError("Transaction")
        txn.category = category or None
        await self.db.flush()
        await self.db.refresh(txn)
        logger.info("transaction_category_set", transaction_id=transaction_id, category=txn.category)
        return txn

    async def classify_description(self, data: ClassifyRequest) -> str:
        """Run the classifier on an unsaved transaction."""
        rules = snapshot(await self.rules.find_many())
        txn = Transaction(description=data.description or "", category=data.category)
        return classify(txn, rules)
