"""Data access layer."""

from ruletag.repositories.rules import RuleRepository
from ruletag.repositories.transactions import TransactionRepository

__all__ = ["RuleRepository", "TransactionRepository"]
