"""Category rule model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ruletag.engine.rules import MAX_NAME_LENGTH
from ruletag.models.base import Base, TimestampMixin


class CategoryRule(Base, TimestampMixin):
    """A rule that assigns its ``name`` as category to matching transactions.

    The pattern is interpreted according to match_type; rules with a higher
    priority are checked first.
    """

    __tablename__ = "category_rules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), unique=True, nullable=False)
    match_type: Mapped[str] = mapped_column(
        String(20), default="contains", nullable=False
    )  # contains, startsWith, regex
    pattern: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # higher = checked first
