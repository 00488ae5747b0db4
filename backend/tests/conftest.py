"""
Marketplace Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, seed data, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    db_engine        In-memory SQLite (aiosqlite) with all tables created
    ├── session_factory
    │   ├── db_session      Session handed to services in unit tests
    │   └── test_client     HTTPX AsyncClient over a fresh create_app()
    └── seed                Profiles, contracts and jobs (see SEED LAYOUT)
    file_session_factory   Seeded SQLite file database with a connection pool

SEED LAYOUT:
    Profiles
        1 Harry Potter    client      Wizard      balance 1000
        2 Mr Robot        client      Hacker      balance 50
        3 John Lenon      contractor  Musician    balance 500
        4 Linus Torvalds  contractor  Programmer  balance 0
        5 Ash Kethcum     client      Pokemon     balance 20
    Contracts
        1 client 1 ↔ contractor 3  in_progress
        2 client 1 ↔ contractor 4  terminated
        3 client 2 ↔ contractor 4  in_progress
        4 client 2 ↔ contractor 3  new
        5 client 5 ↔ contractor 4  terminated
    Jobs
        1 contract 1  200  paid NULL
        2 contract 1  150  paid false
        3 contract 2  300  paid NULL   (terminated contract)
        4 contract 3  400  paid NULL
        5 contract 1  100  paid 2024-08-10
        6 contract 3  250  paid 2024-08-12
        7 contract 4  200  paid 2024-08-15 18:00
        8 contract 1  500  paid 2023-01-01
        9 contract 5   80  paid NULL   (terminated contract)
"""

import os

# Override settings BEFORE any marketplace import creates the singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from marketplace.auth import Principal
from marketplace.database import Base, get_db_session
from marketplace.models import Contract, Job, Profile


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared by every session in one test.

    StaticPool keeps a single connection alive; without it each new
    connection would see an empty in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


async def insert_seed_rows(session_factory) -> None:
    """Insert the SEED LAYOUT described in the module docstring."""
    async with session_factory() as session:
        session.add_all([
            Profile(id=1, first_name="Harry", last_name="Potter", profession="Wizard",
                    balance=Decimal("1000"), type="client"),
            Profile(id=2, first_name="Mr", last_name="Robot", profession="Hacker",
                    balance=Decimal("50"), type="client"),
            Profile(id=3, first_name="John", last_name="Lenon", profession="Musician",
                    balance=Decimal("500"), type="contractor"),
            Profile(id=4, first_name="Linus", last_name="Torvalds", profession="Programmer",
                    balance=Decimal("0"), type="contractor"),
            Profile(id=5, first_name="Ash", last_name="Kethcum", profession="Pokemon",
                    balance=Decimal("20"), type="client"),
        ])
        await session.flush()
        session.add_all([
            Contract(id=1, terms="bla bla bla", status="in_progress", client_id=1, contractor_id=3),
            Contract(id=2, terms="bla bla bla", status="terminated", client_id=1, contractor_id=4),
            Contract(id=3, terms="bla bla bla", status="in_progress", client_id=2, contractor_id=4),
            Contract(id=4, terms="bla bla bla", status="new", client_id=2, contractor_id=3),
            Contract(id=5, terms="bla bla bla", status="terminated", client_id=5, contractor_id=4),
        ])
        await session.flush()
        session.add_all([
            Job(id=1, description="work", price=Decimal("200"), paid=None, contract_id=1),
            Job(id=2, description="work", price=Decimal("150"), paid=False, contract_id=1),
            Job(id=3, description="work", price=Decimal("300"), paid=None, contract_id=2),
            Job(id=4, description="work", price=Decimal("400"), paid=None, contract_id=3),
            Job(id=5, description="work", price=Decimal("100"), paid=True,
                payment_date=utc(2024, 8, 10, 9, 0), contract_id=1),
            Job(id=6, description="work", price=Decimal("250"), paid=True,
                payment_date=utc(2024, 8, 12, 14, 30), contract_id=3),
            Job(id=7, description="work", price=Decimal("200"), paid=True,
                payment_date=utc(2024, 8, 15, 18, 0), contract_id=4),
            Job(id=8, description="work", price=Decimal("500"), paid=True,
                payment_date=utc(2023, 1, 1, 12, 0), contract_id=1),
            Job(id=9, description="work", price=Decimal("80"), paid=None, contract_id=5),
        ])
        await session.commit()


@pytest_asyncio.fixture
async def seed(session_factory):
    await insert_seed_rows(session_factory)
    return SimpleNamespace(
        client=1, poor_client=2, contractor=3, other_contractor=4, idle_client=5,
    )


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """
    Seeded SQLite file database behind a real connection pool.

    Unlike the in-memory engine, every session gets its own connection,
    so concurrent transactions contend the way they do in production.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    await insert_seed_rows(factory)
    yield factory
    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    What:    An AsyncMock standing in for AsyncSession.
    Why:     Transaction-boundary tests only care which methods were awaited.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def principal():
    """Factory: principal(1) → Principal(profile_id=1)."""
    return lambda profile_id: Principal(profile_id=profile_id)


@pytest.fixture
def fetch_profile(session_factory):
    """Reads a profile in a fresh session (sees only committed state)."""
    async def _fetch(profile_id: int) -> Profile:
        async with session_factory() as session:
            return await session.get(Profile, profile_id)
    return _fetch


@pytest.fixture
def fetch_job(session_factory):
    async def _fetch(job_id: int) -> Job:
        async with session_factory() as session:
            return await session.get(Job, job_id)
    return _fetch


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to a fresh app wired to the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from marketplace.main import create_app

    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
