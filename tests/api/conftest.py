"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from licensegate.config import Settings
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase
from licensegate.infrastructure.persistence.memory.unit_of_work import create_uow_factory
from licensegate.infrastructure.persistence.store import Store
from licensegate.main import create_licensegate_app

ADMIN_KEY = "test-admin-key"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        root_actor_id="root-1",
        admin_key=ADMIN_KEY,
        legacy_license_key="lic-legacy",
        cors_origins="https://example.com",
    )


@pytest.fixture
def api_db() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def app(settings, api_db):
    """Falcon ASGI app wired by the composition root over an in-memory store."""
    store = Store(uow_factory=create_uow_factory(api_db))
    return create_licensegate_app(settings=settings, store=store)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}
