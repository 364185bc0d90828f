"""SQLAlchemy models."""

from ruletag.models.base import Base
from ruletag.models.rule import CategoryRule
from ruletag.models.transaction import Transaction

__all__ = [
    "Base",
    "CategoryRule",
    "Transaction",
]
