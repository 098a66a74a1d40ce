"""
Pytest configuration and fixtures for tests.

Environment is pinned to a development/sqlite setup before any `app`
import, since `app.core.config` validates it at import time.
"""

import os

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STATUS_PERSIST_TIMEOUT_SECONDS"] = "5"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import Base, enable_sqlite_foreign_keys, get_db
from app.constants.default_statuses import DEFAULT_QUOTE_STATUSES, DEFAULT_ORDER_STATUSES
from app.schemas.status.status_config_schemas import StatusConfig
from app.services.status.status_initializer import initialize_status_settings


# ============================================================================
# Status Fixtures
# ============================================================================

@pytest.fixture
def default_quote_statuses():
    return [StatusConfig.model_validate(s) for s in DEFAULT_QUOTE_STATUSES]


@pytest.fixture
def default_order_statuses():
    return [StatusConfig.model_validate(s) for s in DEFAULT_ORDER_STATUSES]


@pytest.fixture
def all_default_statuses(default_quote_statuses, default_order_statuses):
    return default_quote_statuses + default_order_statuses


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine.sync_engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded_session(test_session):
    """Session on a database holding the default status settings."""
    await initialize_status_settings(test_session, actor="tests")
    yield test_session


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app, with get_db bound to the test engine."""
    from main import app

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
