"""Category rule service.

Manages CRUD operations on rules and builds exact-match rules from sample
descriptions.
"""

from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from ruletag.config import settings
from ruletag.core.exceptions import AlreadyExistsError, NotFoundError, PatternCompileError, ValidationError
from ruletag.engine.builder import build_rule
from ruletag.engine.classifier import order_rules
from ruletag.engine.matcher import compile_pattern
from ruletag.engine.rules import MatchType, RuleSpec
from ruletag.models.rule import CategoryRule
from ruletag.repositories.rules import RuleRepository
from ruletag.schemas.rule import RuleCreate, RuleUpdate

logger = structlog.get_logger()


class RuleService:
    def __init__(self, db: AsyncSession, rules: RuleRepository | None = None):
        self.db = db
        self.rules = rules or RuleRepository(db)

    # ── CRUD ───────────────────────────────────────────

    async def list_rules(self) -> list[CategoryRule]:
        """List all rules, highest priority first, then by name."""
        rules = await self.rules.find_many()
        by_name = sorted(rules, key=lambda r: r.name.lower())
        return order_rules(by_name)

    async def create_rule(self, data: RuleCreate) -> CategoryRule:
        """Create a new rule. Names are unique."""
        if await self.rules.get_by_name(data.name):
            raise AlreadyExistsError("Rule")

        rule = await self.rules.create(
            CategoryRule(
                name=data.name,
                match_type=data.match_type.value,
                pattern=data.pattern,
                priority=data.priority,
            )
        )
        logger.info("rule_created", rule_id=rule.id, rule_name=rule.name, match_type=rule.match_type)
        return rule

    async def update_rule(self, rule_id: int, data: RuleUpdate) -> CategoryRule:
        """Update an existing rule."""
        rule = await self._get_rule(rule_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        new_name = update_data.get("name")
        if new_name and new_name != rule.name:
            existing = await self.rules.get_by_name(new_name)
            if existing and existing.id != rule.id:
                raise AlreadyExistsError("Rule")

        if "match_type" in update_data:
            update_data["match_type"] = MatchType(update_data["match_type"]).value

        merged = RuleSpec(
            name=update_data.get("name", rule.name),
            match_type=update_data.get("match_type", rule.match_type),
            pattern=update_data.get("pattern", rule.pattern),
            priority=update_data.get("priority", rule.priority),
        )
        self._check_pattern(merged)

        for key, value in update_data.items():
            setattr(rule, key, value)
        await self.db.flush()
        await self.db.refresh(rule)
        logger.info("rule_updated", rule_id=rule.id, fields=sorted(update_data))
        return rule

    async def delete_rule(self, rule_id: int) -> None:
        """Delete a rule."""
        rule = await self._get_rule(rule_id)
        await self.rules.delete(rule)
        logger.info("rule_deleted", rule_id=rule_id)

    # ── Rule from samples ──────────────────────────────

    async def build_rule_from_samples(
        self,
        name: str,
        descriptions: Sequence[str | None],
        priority: int = 0,
    ) -> tuple[CategoryRule, bool]:
        """Create or overwrite the rule ``name`` with an exact-match regex.

        An existing rule with the same name keeps its ID; its match type,
        pattern and priority are replaced. Returns (rule, created).
        """
        spec = build_rule(
            name,
            descriptions,
            priority,
            max_samples=settings.rule_builder_max_samples,
            max_pattern_length=settings.rule_builder_max_pattern_length,
        )

        existing = await self.rules.get_by_name(spec.name)
        if existing:
            existing.match_type = spec.match_type.value
            existing.pattern = spec.pattern
            existing.priority = spec.priority
            await self.db.flush()
            await self.db.refresh(existing)
            rule, created = existing, False
        else:
            rule = await self.rules.create(
                CategoryRule(
                    name=spec.name,
                    match_type=spec.match_type.value,
                    pattern=spec.pattern,
                    priority=spec.priority,
                )
            )
            created = True

        logger.info(
            "rule_built_from_samples",
            rule_id=rule.id,
            rule_name=rule.name,
            created=created,
            pattern_length=len(rule.pattern),
        )
        return rule, created

    # ── Helpers ─────────────────────────────────────────

    @staticmethod
    def _check_pattern(spec: RuleSpec) -> None:
        if spec.match_type is MatchType.REGEX:
            try:
                compile_pattern(spec.pattern)
            except PatternCompileError as e:
                raise ValidationError(str(e)) from e

    async def _get_rule(self, rule_id: int) -> CategoryRule:
        rule = await self.rules.get_by_id(rule_id)
        if not rule:
            raise NotFoundError("Rule")
        return rule
