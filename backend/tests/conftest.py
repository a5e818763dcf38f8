"""
ETTU Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings built for tests (no .env file, no rate limiting)
    ├── mock_database: Stand-in for ettu.database.Database (no real DB needed)
    ├── make_app: Builds an app from Settings overrides
    ├── make_client: HTTPX AsyncClient bound to any app
    └── test_client: HTTPX AsyncClient for the default test app (database-less)
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports:
# ettu.main builds a module-level app from the environment on import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["RATE_LIMITING"] = "false"

from ettu.config import Settings, load_settings  # noqa: E402
from ettu.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any developer .env file."""
    return load_settings(_env_file=None)


@pytest.fixture
def mock_database():
    """
    Stand-in for a connected Database.

    Usage:
        mock_database.health_check.side_effect = ConnectionError("refused")
    """
    database = MagicMock()
    database.health_check = AsyncMock(return_value=None)
    database.migrate = AsyncMock(return_value=None)
    database.close = AsyncMock(return_value=None)
    return database


@pytest.fixture
def make_app():
    """
    Factory for apps with specific settings.

    ASGITransport does not run the lifespan, so app.state.database stays
    None (database-less mode) unless a test assigns it.

    Usage:
        app = make_app(guest_mode=False)
    """

    def _make(**overrides):
        overrides.setdefault("rate_limiting", False)
        return create_app(load_settings(_env_file=None, **overrides))

    return _make


@pytest.fixture
def make_client():
    """
    Async context manager yielding an HTTPX client wired to an app.

    Usage:
        async with make_client(app) as client:
            response = await client.get("/health")
    """

    @asynccontextmanager
    async def _client(app, raise_app_exceptions: bool = True) -> AsyncGenerator[AsyncClient, None]:
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _client


@pytest_asyncio.fixture
async def test_client(make_app, make_client):
    """
    HTTPX AsyncClient for the default test app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with make_client(make_app()) as client:
        yield client
