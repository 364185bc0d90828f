"""API tests for bulk categorization and rule building."""

import pytest


async def create_txn(client, description, category=None, owner_id="owner-1", **extra):
    payload = {
        "owner_id": owner_id,
        "account_id": "acc-1",
        "date": extra.pop("date", "2026-01-15"),
        "description": description,
        "amount": extra.pop("amount", "-12.50"),
        "category": category,
        **extra,
    }
    response = await client.post("/api/v1/transactions", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_preview_then_apply_by_pattern(client):
    await create_txn(client, "UBER *TRIP")
    await create_txn(client, "UBER EATS")
    await create_txn(client, "TRAIN")

    body = {"match_type": "contains", "pattern": "uber", "category": "Transport", "preview": True, "limit": 1}
    response = await client.post("/api/v1/admin/assign-category-by-pattern", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert len(data["sample"]) == 1

    uncategorized = await client.get("/api/v1/transactions/uncategorized")
    assert len(uncategorized.json()) == 3

    body["preview"] = False
    response = await client.post("/api/v1/admin/assign-category-by-pattern", json=body)
    assert response.status_code == 200
    assert response.json() == {"matched": 2, "modified": 2, "failed": 0}


@pytest.mark.asyncio
async def test_pattern_preview_is_the_default(client):
    await create_txn(client, "UBER *TRIP")
    body = {"match_type": "contains", "pattern": "uber", "category": "Transport"}

    response = await client.post("/api/v1/admin/assign-category-by-pattern", json=body)

    assert response.json()["count"] == 1
    listing = await client.get("/api/v1/transactions", params={"category": "Transport"})
    assert listing.json()["meta"]["total"] == 0


@pytest.mark.asyncio
async def test_string_false_preview_does_not_write(client):
    await create_txn(client, "UBER *TRIP")
    body = {"match_type": "contains", "pattern": "uber", "category": "Transport", "preview": "false"}

    response = await client.post("/api/v1/admin/assign-category-by-pattern", json=body)

    assert "count" in response.json()
    listing = await client.get("/api/v1/transactions", params={"category": "Transport"})
    assert listing.json()["meta"]["total"] == 0


@pytest.mark.asyncio
async def test_unknown_match_type_is_422(client):
    body = {"match_type": "fuzzy", "pattern": "x", "category": "X", "preview": True}
    response = await client.post("/api/v1/admin/assign-category-by-pattern", json=body)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_assign_by_description(client):
    await create_txn(client, "KMART 1042", owner_id="alice")
    await create_txn(client, "KMART 1042", owner_id="bob")
    await create_txn(client, "KMART 1042 ONLINE", owner_id="alice")

    response = await client.post(
        "/api/v1/admin/assign-category-by-description",
        params={"owner_id": "alice"},
        json={"description": "KMART 1042", "category": "Household"},
    )

    assert response.status_code == 200
    assert response.json() == {"matched": 1, "modified": 1, "failed": 0}


@pytest.mark.asyncio
async def test_retag_transactions(client):
    await create_txn(client, "WOOLWORTHS 123")
    await client.post("/api/v1/rules", json={"name": "Groceries", "match_type": "contains", "pattern": "woolworths"})

    first = await client.post("/api/v1/admin/retag-transactions")
    second = await client.post("/api/v1/admin/retag-transactions")

    assert first.json() == {"updated": 1, "failed": 0}
    assert second.json() == {"updated": 0, "failed": 0}


@pytest.mark.asyncio
async def test_create_rule_from_descriptions_upserts(client):
    body = {"name": "Coffee", "descriptions": ["SQ *JOES COFFEE", "SQ *JOES COFFEE "], "priority": 70}

    first = await client.post("/api/v1/admin/create-rule-from-descriptions", json=body)
    assert first.status_code == 200
    data = first.json()
    assert data["created"] is True
    assert data["rule"]["match_type"] == "regex"
    assert data["rule"]["pattern"] == r"^\s*(?:SQ\ \*JOES\ COFFEE|SQ\ \*JOES\ COFFEE)\s*$"

    body["descriptions"] = ["JOES"]
    second = await client.post("/api/v1/admin/create-rule-from-descriptions", json=body)
    assert second.json()["created"] is False
    assert second.json()["rule"]["id"] == data["rule"]["id"]


@pytest.mark.asyncio
async def test_create_rule_from_descriptions_validation(client):
    response = await client.post(
        "/api/v1/admin/create-rule-from-descriptions",
        json={"name": "", "descriptions": ["X"]},
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/admin/create-rule-from-descriptions",
        json={"name": "Coffee", "descriptions": ["", None]},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_built_rule_preview_matches_only_samples(client):
    await create_txn(client, "SQ *JOES COFFEE")
    await create_txn(client, "SQ *JOES COFFEE SHOP")
    built = await client.post(
        "/api/v1/admin/create-rule-from-descriptions",
        json={"name": "Coffee", "descriptions": ["SQ *JOES COFFEE"]},
    )
    pattern = built.json()["rule"]["pattern"]

    response = await client.post(
        "/api/v1/admin/assign-category-by-pattern",
        json={"match_type": "regex", "pattern": pattern, "category": "Coffee", "preview": True},
    )

    data = response.json()
    assert data["count"] == 1
    assert data["sample"][0]["description"] == "SQ *JOES COFFEE"


@pytest.mark.asyncio
async def test_over_long_rule_name_and_category_are_422(client):
    await create_txn(client, "UBER *TRIP")

    response = await client.post(
        "/api/v1/admin/create-rule-from-descriptions",
        json={"name": "x" * 101, "descriptions": ["UBER *TRIP"]},
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/admin/assign-category-by-pattern",
        json={"match_type": "contains", "pattern": "uber", "category": "x" * 101, "preview": False},
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/admin/assign-category-by-description",
        json={"description": "UBER *TRIP", "category": "x" * 101},
    )
    assert response.status_code == 422

    uncategorized = await client.get("/api/v1/transactions/uncategorized")
    assert len(uncategorized.json()) == 1
