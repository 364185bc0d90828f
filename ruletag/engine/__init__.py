"""Rule matching engine: pure functions, no I/O."""

from ruletag.engine.builder import build_rule
from ruletag.engine.classifier import UNCATEGORIZED, classify, order_rules
from ruletag.engine.conflicts import Conflict, find_conflicts
from ruletag.engine.matcher import matches
from ruletag.engine.rules import MatchType, RuleSpec, snapshot

__all__ = [
    "UNCATEGORIZED",
    "Conflict",
    "MatchType",
    "RuleSpec",
    "build_rule",
    "classify",
    "find_conflicts",
    "matches",
    "order_rules",
    "snapshot",
]
