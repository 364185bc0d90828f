"""Match a single rule against a transaction description."""

import re
from functools import lru_cache

import structlog

from ruletag.core.exceptions import PatternCompileError
from ruletag.engine.rules import MatchType, RuleSpec

logger = structlog.get_logger()


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a regex rule pattern case-insensitively.

    Raises:
        PatternCompileError: if the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PatternCompileError(pattern, str(e)) from e


@lru_cache(maxsize=1024)
def _compiled_or_none(pattern: str) -> re.Pattern[str] | None:
    try:
        return compile_pattern(pattern)
    except PatternCompileError as e:
        logger.warning("rule_pattern_invalid", pattern=pattern, reason=e.reason)
        return None


def contains_tokens(pattern: str) -> list[str]:
    """Split a ``contains`` pattern into its trimmed, case-folded tokens."""
    return [token.strip().lower() for token in pattern.split(",") if token.strip()]


def matches(description: str | None, rule: RuleSpec) -> bool:
    """Return True if ``rule`` matches ``description``.

    contains/startsWith compare lower-cased text; regex searches the raw
    description case-insensitively. A regex that does not compile never
    matches.
    """
    text = description or ""

    if rule.match_type is MatchType.CONTAINS:
        lowered = text.lower()
        return any(token in lowered for token in contains_tokens(rule.pattern))

    if rule.match_type is MatchType.STARTS_WITH:
        prefix = rule.pattern.strip().lower()
        return bool(prefix) and text.lower().startswith(prefix)

    compiled = _compiled_or_none(rule.pattern)
    if compiled is None:
        return False
    return compiled.search(text) is not None
