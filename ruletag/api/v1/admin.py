"""Bulk categorization API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.api.deps import get_db, get_owner_id
from ruletag.schemas.bulk import (
    ApplyResult,
    AssignByDescriptionRequest,
    AssignByPatternRequest,
    PreviewResult,
    RetagResult,
)
from ruletag.schemas.rule import BuildRuleRequest, BuildRuleResult
from ruletag.services.bulk_service import BulkService
from ruletag.services.rule_service import RuleService

router = APIRouter()


@router.post("/assign-category-by-pattern", response_model=PreviewResult | ApplyResult)
async def assign_category_by_pattern(
    data: AssignByPatternRequest,
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Preview (default) or apply a pattern to all transactions.

    Only ``"preview": false`` writes; the preview returns the match count and
    a sample.
    """
    service = BulkService(db)
    return await service.assign_by_pattern(data, owner_id)


@router.post("/assign-category-by-description", response_model=ApplyResult)
async def assign_category_by_description(
    data: AssignByDescriptionRequest,
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Set the category of every transaction with exactly this description."""
    service = BulkService(db)
    return await service.apply_by_description(data.description, data.category, owner_id)


@router.post("/retag-transactions", response_model=RetagResult)
async def retag_transactions(
    owner_id: str | None = Depends(get_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Reclassify all transactions with the current rules."""
    service = BulkService(db)
    return await service.retag_all(owner_id)


@router.post("/create-rule-from-descriptions", response_model=BuildRuleResult)
async def create_rule_from_descriptions(
    data: BuildRuleRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create or overwrite a rule matching exactly the given descriptions."""
    service = RuleService(db)
    rule, created = await service.build_rule_from_samples(data.name, data.descriptions, data.priority)
    return {"rule": rule, "created": created}
