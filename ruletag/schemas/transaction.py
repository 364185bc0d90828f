"""Transaction schemas for request/response validation."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from ruletag.engine.rules import MAX_NAME_LENGTH


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class TransactionCreate(BaseModel):
    owner_id: str = Field(min_length=1)
    account_id: str = Field(min_length=1)
    date: date
    description: str = ""
    amount: Decimal
    category: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)  # computed from the rules when omitted
    type: TransactionType = TransactionType.EXPENSE


class TransactionCategoryUpdate(BaseModel):
    category: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)


class TransactionResponse(BaseModel):
    id: int
    owner_id: str
    account_id: str
    date: date
    description: str
    amount: Decimal
    category: str | None = None
    type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PaginationMeta(BaseModel):
    total: int
    page: int
    per_page: int
    pages: int


class PaginatedResponse(BaseModel):
    data: list[TransactionResponse]
    meta: PaginationMeta


class ClassifyRequest(BaseModel):
    description: str | None = ""
    category: str | None = None


class ClassifyResult(BaseModel):
    category: str
