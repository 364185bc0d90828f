"""Transaction model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ruletag.engine.rules import MAX_NAME_LENGTH
from ruletag.models.base import Base, TimestampMixin


class Transaction(Base, TimestampMixin):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    account_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)  # null/"" = uncategorized
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="expense")  # income, expense, transfer

    __table_args__ = (
        Index("idx_transactions_owner_date", "owner_id", "date"),
        Index("idx_transactions_description", "description"),
    )
