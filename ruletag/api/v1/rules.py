"""Category rules API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.api.deps import get_db
from ruletag.schemas.rule import RuleCreate, RuleResponse, RuleUpdate
from ruletag.services.rule_service import RuleService

router = APIRouter()


@router.get("", response_model=list[RuleResponse])
async def list_rules(db: AsyncSession = Depends(get_db)):
    """List all rules, highest priority first."""
    service = RuleService(db)
    return await service.list_rules()


@router.post("", response_model=RuleResponse, status_code=201)
async def create_rule(data: RuleCreate, db: AsyncSession = Depends(get_db)):
    """Create a new rule."""
    service = RuleService(db)
    return await service.create_rule(data)


@router.patch("/{rule_id}", response_model=RuleResponse)
async def update_rule(rule_id: int, data: RuleUpdate, db: AsyncSession = Depends(get_db)):
    """Update an existing rule."""
    service = RuleService(db)
    return await service.update_rule(rule_id, data)


@router.delete("/{rule_id}", status_code=204)
async def delete_rule(rule_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a rule."""
    service = RuleService(db)
    await service.delete_rule(rule_id)
