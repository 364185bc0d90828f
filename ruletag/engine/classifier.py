"""Pick the category of a transaction from the rule set.

Rules are scanned in priority order (highest first); the first rule that
matches wins. Equal priorities keep the order the rules were given in.
"""

from collections.abc import Iterable, Iterator
from typing import Any

from ruletag.engine.matcher import matches
from ruletag.engine.rules import RuleSpec

UNCATEGORIZED = "Uncategorized"


def order_rules(rules: Iterable[RuleSpec]) -> list[RuleSpec]:
    """Sort rules by priority descending (stable)."""
    return sorted(rules, key=lambda rule: rule.priority, reverse=True)


def matching_rules(description: str | None, rules: Iterable[RuleSpec]) -> Iterator[RuleSpec]:
    """Yield every rule matching ``description``, in evaluation order."""
    for rule in order_rules(rules):
        if matches(description, rule):
            yield rule


def classify(transaction: Any, rules: Iterable[RuleSpec]) -> str:
    """Return the category ``transaction`` should carry.

    Falls back to the transaction's current category, then to
    ``"Uncategorized"``, when no rule matches.
    """
    first = next(matching_rules(transaction.description, rules), None)
    if first is not None:
        return first.name
    return transaction.category or UNCATEGORIZED


def is_uncategorized(category: str | None) -> bool:
    """Null, empty and the literal "Uncategorized" all mean no category."""
    return not category or category == UNCATEGORIZED
