"""Report API routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.api.deps import get_db, get_owner_id
from ruletag.schemas.report import CategorySummaryItem, DescriptionSummaryItem
from ruletag.schemas.transaction import TransactionType
from ruletag.services.report_service import ReportService

router = APIRouter()


@router.get("/description-summary", response_model=list[DescriptionSummaryItem])
async def description_summary(
    limit: int | None = Query(None, ge=1, le=5000),
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Distinct descriptions with their counts and the categories seen."""
    service = ReportService(db)
    return await service.description_summary(owner_id, limit)


@router.get("/category-summary", response_model=list[CategorySummaryItem])
async def category_summary(
    type: TransactionType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Totals grouped by category."""
    service = ReportService(db)
    return await service.category_summary(
        owner_id,
        type=type.value if type else None,
        date_from=date_from,
        date_to=date_to,
    )
