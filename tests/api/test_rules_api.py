"""API tests for rule CRUD."""

import pytest


@pytest.mark.asyncio
async def test_rule_crud(client):
    created = await client.post(
        "/api/v1/rules",
        json={"name": "Groceries", "match_type": "contains", "pattern": "coles,woolworths", "priority": 100},
    )
    assert created.status_code == 201
    rule = created.json()
    assert rule["name"] == "Groceries"
    assert rule["priority"] == 100

    patched = await client.patch(f"/api/v1/rules/{rule['id']}", json={"priority": 5})
    assert patched.status_code == 200
    assert patched.json()["priority"] == 5
    assert patched.json()["pattern"] == "coles,woolworths"

    listing = await client.get("/api/v1/rules")
    assert [r["name"] for r in listing.json()] == ["Groceries"]

    deleted = await client.delete(f"/api/v1/rules/{rule['id']}")
    assert deleted.status_code == 204
    assert (await client.get("/api/v1/rules")).json() == []


@pytest.mark.asyncio
async def test_invalid_regex_is_rejected_on_create(client):
    response = await client.post("/api/v1/rules", json={"name": "Bad", "match_type": "regex", "pattern": "(("})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_match_type_is_rejected(client):
    response = await client.post("/api/v1/rules", json={"name": "Bad", "match_type": "endsWith", "pattern": "x"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_blank_pattern_is_rejected(client):
    response = await client.post("/api/v1/rules", json={"name": "Bad", "pattern": "   "})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_name_conflict(client):
    body = {"name": "Fuel", "pattern": "shell"}
    assert (await client.post("/api/v1/rules", json=body)).status_code == 201
    assert (await client.post("/api/v1/rules", json=body)).status_code == 409


@pytest.mark.asyncio
async def test_missing_rule_is_404(client):
    assert (await client.patch("/api/v1/rules/42", json={"priority": 1})).status_code == 404
    assert (await client.delete("/api/v1/rules/42")).status_code == 404
