"""Category rule schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from ruletag.core.exceptions import PatternCompileError
from ruletag.engine.matcher import compile_pattern
from ruletag.engine.rules import MAX_NAME_LENGTH, MatchType


def _check_regex(match_type: MatchType | None, pattern: str | None) -> None:
    if match_type is MatchType.REGEX and pattern is not None:
        try:
            compile_pattern(pattern)
        except PatternCompileError as e:
            raise ValueError(str(e)) from e


class RuleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    match_type: MatchType = MatchType.CONTAINS
    pattern: str = Field(min_length=1)
    priority: int = 0

    @field_validator("name", "pattern")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @model_validator(mode="after")
    def regex_compiles(self):
        _check_regex(self.match_type, self.pattern)
        return self


class RuleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    match_type: MatchType | None = None
    pattern: str | None = Field(default=None, min_length=1)
    priority: int | None = None

    @field_validator("name", "pattern")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value.strip() if value is not None else None


class RuleResponse(BaseModel):
    id: int
    name: str
    match_type: str
    pattern: str
    priority: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BuildRuleRequest(BaseModel):
    name: str
    descriptions: list[str | None]
    priority: int = 0


class BuildRuleResult(BaseModel):
    rule: RuleResponse
    created: bool
