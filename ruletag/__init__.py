"""Rule-based transaction categorization service."""

__version__ = "0.1.0"
