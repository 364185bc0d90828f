"""Shared API dependencies."""

from fastapi import Query

from ruletag.core.database import get_db


def get_owner_id(
    owner_id: str | None = Query(None, min_length=1, description="Restrict to one owner's transactions"),
) -> str | None:
    return owner_id


__all__ = ["get_db", "get_owner_id"]
