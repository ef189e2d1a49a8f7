"""Pytest configuration and fixtures for campus search.

HTTP tests run against create_app() through ASGITransport with the record
store dependency overridden by an in-memory FakeRecordStore, so no Supabase
project is needed.
"""

import os

# Keep tests independent of a developer's .env / shell.
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_KEY", None)
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import get_record_store  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.infrastructure.search.adapters import build_adapters  # noqa: E402
from app.main import create_app  # noqa: E402
from tests.fakes import FakeRecordStore, campus_records  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_store() -> FakeRecordStore:
    """Fake record store preloaded with the campus dataset."""
    return FakeRecordStore(campus_records())


@pytest.fixture
def adapters(fake_store: FakeRecordStore):
    """Notes, Events, LostFound adapters over the fake store."""
    return build_adapters(fake_store)


@pytest.fixture
async def client(fake_store: FakeRecordStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app with the fake store injected."""
    app = create_app()
    app.dependency_overrides[get_record_store] = lambda: fake_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def unconfigured_client() -> AsyncClient:
    """Async HTTP client with no record store configured (no override)."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
