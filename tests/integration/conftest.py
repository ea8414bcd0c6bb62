"""Integration test fixtures: the API wired to the test database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from clubhouse_payroll.api.app import create_app
from clubhouse_payroll.api.dependencies import get_db_session
from clubhouse_payroll.calculators import RateCache


@pytest_asyncio.fixture
async def app_cache() -> RateCache:
    return RateCache()


@pytest_asyncio.fixture
async def client(
    session: AsyncSession, seeded: dict, app_cache: RateCache
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app whose requests share the seeded test session."""
    app = create_app(rate_cache=app_cache)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_db_session] = override_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
