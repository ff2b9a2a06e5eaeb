"""Service test fixtures — async DB, snapshot repository, registry service, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_registry_service dependency overridden to use the test service
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from registry.db.base import Base
from registry.infrastructure.database import DatabaseSessionManager
from registry.infrastructure.snapshot_repository import SqlSnapshotRepository
from registry.services.registry_service import RegistryService, get_registry_service
import registry.infrastructure.database as db_module
import registry.models  # noqa: F401
from registry.main import app


@pytest.fixture
async def test_db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await manager.dispose()


@pytest.fixture
async def repository(test_db_manager):
    return SqlSnapshotRepository(test_db_manager, "test")


@pytest.fixture
async def service(repository):
    return await RegistryService.bootstrap(repository)


@pytest.fixture
async def client(service, test_db_manager):
    """FastAPI test client with the registry service dependency overridden."""
    app.dependency_overrides[get_registry_service] = lambda: service

    previous_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = previous_manager
