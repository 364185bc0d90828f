"""Bulk categorization schemas."""

from pydantic import BaseModel, Field

from ruletag.engine.rules import MAX_NAME_LENGTH
from ruletag.schemas.transaction import TransactionResponse


class AssignByPatternRequest(BaseModel):
    match_type: str = "contains"
    pattern: str
    category: str = Field(default="", max_length=MAX_NAME_LENGTH)
    # Anything but an explicit false is treated as a preview.
    preview: bool | str | int | None = True
    limit: int | None = Field(default=None, ge=1)

    @property
    def is_apply(self) -> bool:
        return self.preview is False


class AssignByDescriptionRequest(BaseModel):
    description: str
    category: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


class PreviewResult(BaseModel):
    count: int
    sample: list[TransactionResponse]


class ApplyResult(BaseModel):
    matched: int
    modified: int
    failed: int = 0


class RetagResult(BaseModel):
    updated: int
    failed: int = 0


class ConflictResponse(BaseModel):
    transaction: TransactionResponse
    matching_rule_names: list[str]
