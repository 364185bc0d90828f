"""Transaction API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.api.deps import get_db, get_owner_id
from ruletag.schemas.bulk import ConflictResponse
from ruletag.schemas.transaction import (
    ClassifyRequest,
    ClassifyResult,
    PaginatedResponse,
    TransactionCategoryUpdate,
    TransactionCreate,
    TransactionResponse,
)
from ruletag.services.conflict_service import ConflictService
from ruletag.services.transaction_service import TransactionService

router = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    account_id: str | None = None,
    category: str | None = None,
    search: str | None = None,
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """List transactions with pagination and filters."""
    service = TransactionService(db)
    return await service.list_transactions(
        owner_id=owner_id,
        page=page,
        per_page=per_page,
        account_id=account_id,
        category=category,
        search=search,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(data: TransactionCreate, db: AsyncSession = Depends(get_db)):
    """Create a transaction, classifying it when no category is given."""
    service = TransactionService(db)
    return await service.create_transaction(data)


@router.get("/uncategorized", response_model=list[TransactionResponse])
async def list_uncategorized(
    limit: int = Query(500, ge=1, le=5000),
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Transactions still waiting for a category."""
    service = TransactionService(db)
    return await service.list_uncategorized(owner_id, limit)


@router.get("/conflicts", response_model=list[ConflictResponse])
async def list_conflicts(
    limit: int | None = Query(None, ge=1, le=10000, description="Number of recent transactions to scan"),
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Recent transactions matched by more than one rule."""
    service = ConflictService(db)
    conflicts = await service.find_conflicts(owner_id, limit)
    return [
        {"transaction": c.transaction, "matching_rule_names": c.matching_rule_names}
        for c in conflicts
    ]


@router.post("/classify", response_model=ClassifyResult)
async def classify_transaction(data: ClassifyRequest, db: AsyncSession = Depends(get_db)):
    """Return the category the current rules give to a description."""
    service = TransactionService(db)
    return {"category": await service.classify_description(data)}


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def set_transaction_category(
    transaction_id: int,
    data: TransactionCategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Set the category of one transaction."""
    service = TransactionService(db)
    return await service.set_category(transaction_id, data.category)
