"""Immutable rule representation used by the matching engine.

Stored rules (``CategoryRule`` rows) and ad-hoc rules built for a bulk preview
are both turned into ``RuleSpec`` before evaluation, so the match type is
validated once, at construction, instead of at every comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from ruletag.core.exceptions import ValidationError

logger = structlog.get_logger()

# Column width of rule names and transaction categories.
MAX_NAME_LENGTH = 100


class MatchType(str, Enum):
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    REGEX = "regex"

    @classmethod
    def parse(cls, value: Any) -> MatchType:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValidationError(f"Unknown match type {value!r} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class RuleSpec:
    """One categorization rule, ready for evaluation."""

    name: str
    match_type: MatchType
    pattern: str
    priority: int = 0
    id: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "match_type", MatchType.parse(self.match_type))
        if not isinstance(self.pattern, str) or not self.pattern.strip():
            raise ValidationError("Rule pattern must not be empty")
        if self.priority is None:
            object.__setattr__(self, "priority", 0)

    @classmethod
    def from_model(cls, rule: Any) -> RuleSpec:
        return cls(
            id=rule.id,
            name=rule.name,
            match_type=rule.match_type,
            pattern=rule.pattern,
            priority=rule.priority or 0,
        )


def snapshot(rules: list[Any]) -> tuple[RuleSpec, ...]:
    """Freeze stored rules into a tuple of ``RuleSpec``.

    Rows that cannot form a valid rule (unknown match type, blank pattern)
    are skipped with a warning; they would never match anyway.
    """
    specs = []
    for rule in rules:
        try:
            specs.append(RuleSpec.from_model(rule))
        except ValidationError as e:
            logger.warning("rule_skipped", rule_id=rule.id, rule_name=rule.name, reason=e.detail)
    return tuple(specs)
