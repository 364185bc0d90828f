"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from ruletag.core.database import get_db  # noqa: E402
from ruletag.main import app  # noqa: E402
from ruletag.models import Base, CategoryRule, Transaction  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Async test client for the FastAPI app, bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def add_transaction(db):
    """Insert a transaction and return it."""

    async def _add(
        description: str,
        category: str | None = None,
        owner_id: str = "owner-1",
        amount: str = "-10.00",
        on: date = date(2026, 1, 15),
        type: str = "expense",
        account_id: str = "acc-1",
    ) -> Transaction:
        txn = Transaction(
            owner_id=owner_id,
            account_id=account_id,
            date=on,
            description=description,
            amount=Decimal(amount),
            category=category,
            type=type,
        )
        db.add(txn)
        await db.commit()
        return txn

    return _add


@pytest.fixture
def add_rule(db):
    """Insert a rule and return it."""

    async def _add(name: str, pattern: str, match_type: str = "contains", priority: int = 0) -> CategoryRule:
        rule = CategoryRule(name=name, match_type=match_type, pattern=pattern, priority=priority)
        db.add(rule)
        await db.commit()
        return rule

    return _add
