"""Find transactions claimed by more than one rule."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ruletag.engine.classifier import matching_rules
from ruletag.engine.rules import RuleSpec


@dataclass
class Conflict:
    transaction: Any
    matching_rule_names: list[str]


def find_conflicts(transactions: Iterable[Any], rules: Iterable[RuleSpec]) -> list[Conflict]:
    """Return one ``Conflict`` per transaction matched by two or more rules.

    Rule names are listed highest priority first.
    """
    rules = tuple(rules)
    conflicts = []
    for txn in transactions:
        names = [rule.name for rule in matching_rules(txn.description, rules)]
        if len(names) >= 2:
            conflicts.append(Conflict(transaction=txn, matching_rule_names=names))
    return conflicts
