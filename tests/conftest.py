"""Pytest configuration and fixtures for the point-of-sale service."""

import pytest
import pytest_asyncio
from fakeredis import aioredis as fakeredis
from httpx import ASGITransport, AsyncClient

from grso_pos.config import settings
from grso_pos.services.catalog_store import CatalogStore, get_catalog_store
from grso_pos.services.storage.persistence import RedisStatePersistence


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"X-User-Id": "1"}


@pytest.fixture()
def seller_headers() -> dict[str, str]:
    return {"X-User-Id": "2"}


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    client = fakeredis.FakeRedis(decode_responses=True)
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


@pytest_asyncio.fixture()
async def store(redis_client):
    """A catalog store persisting into the fake Redis slot."""
    return CatalogStore(RedisStatePersistence(redis_client, settings.STORAGE_KEY))


@pytest_asyncio.fixture()
async def client(store):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from grso_pos.main import app

    async def _store_override() -> CatalogStore:
        await store.load()
        return store

    app.dependency_overrides[get_catalog_store] = _store_override
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_catalog_store, None)
