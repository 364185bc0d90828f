"""Report schemas."""

from decimal import Decimal

from pydantic import BaseModel


class DescriptionSummaryItem(BaseModel):
    normalized: str
    sample: str
    count: int
    categories: list[str]


class CategorySummaryItem(BaseModel):
    category: str
    total: Decimal
    count: int
