"""API tests for reports."""

from decimal import Decimal

import pytest


async def add_txn(client, description, amount, category=None, type="expense", date="2026-01-15"):
    response = await client.post(
        "/api/v1/transactions",
        json={
            "owner_id": "owner-1",
            "account_id": "acc-1",
            "date": date,
            "description": description,
            "amount": amount,
            "category": category,
            "type": type,
        },
    )
    assert response.status_code == 201, response.text


@pytest.mark.asyncio
async def test_description_summary_groups_normalized_descriptions(client):
    await add_txn(client, "Coles  123", "-10.00", category="Groceries")
    await add_txn(client, "COLES 123 ", "-5.00", category="Food")
    await add_txn(client, "RENT", "-500.00")

    response = await client.get("/api/v1/reports/description-summary")

    assert response.status_code == 200
    items = response.json()
    assert items[0] == {
        "normalized": "COLES 123",
        "sample": "Coles  123",
        "count": 2,
        "categories": ["Food", "Groceries"],
    }
    assert items[1]["normalized"] == "RENT"
    assert items[1]["categories"] == ["Uncategorized"]


@pytest.mark.asyncio
async def test_description_summary_limit(client):
    await add_txn(client, "A", "-1.00")
    await add_txn(client, "B", "-1.00")
    response = await client.get("/api/v1/reports/description-summary", params={"limit": 1})
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_category_summary(client):
    await add_txn(client, "COLES", "-10.50", category="Groceries")
    await add_txn(client, "WOOLWORTHS", "-4.25", category="Groceries")
    await add_txn(client, "RENT", "-500.00", category="Housing")
    await add_txn(client, "SALARY", "2000.00", category="Income", type="income")

    response = await client.get("/api/v1/reports/category-summary", params={"type": "expense"})

    assert response.status_code == 200
    items = response.json()
    assert [i["category"] for i in items] == ["Housing", "Groceries"]
    assert Decimal(str(items[1]["total"])) == Decimal("-14.75")
    assert items[1]["count"] == 2


@pytest.mark.asyncio
async def test_category_summary_date_range(client):
    await add_txn(client, "JAN", "-1.00", category="X", date="2026-01-10")
    await add_txn(client, "FEB", "-2.00", category="Y", date="2026-02-10")

    response = await client.get(
        "/api/v1/reports/category-summary",
        params={"date_from": "2026-02-01", "date_to": "2026-02-28"},
    )

    assert [i["category"] for i in response.json()] == ["Y"]


@pytest.mark.asyncio
async def test_summaries_fold_empty_categories_into_uncategorized(client, add_transaction):
    await add_transaction("MYSTERY", category=None)
    await add_transaction("MYSTERY", category="")
    await add_transaction("MYSTERY", category="Uncategorized")

    descriptions = (await client.get("/api/v1/reports/description-summary")).json()
    categories = (await client.get("/api/v1/reports/category-summary")).json()

    assert descriptions[0]["categories"] == ["Uncategorized"]
    assert [(c["category"], c["count"]) for c in categories] == [("Uncategorized", 3)]
