"""Registry Service — serialized mutations, snapshot persistence, rollback on failed saves.

Invariants:
    - Successful mutations are persisted with the new height
    - Rejected mutations neither persist nor change memory
    - A failed save leaves the live registry exactly as before the call
    - bootstrap restores the last saved state
"""

import asyncio

import pytest

from registry.core.domain_types import Identity, PropertyId
from registry.core.errors import DatabaseError, UnauthorizedError
from registry.core.property_registry import PropertyRegistry
from registry.core.records import PropertyPatch
from registry.services.registry_service import RegistryService

OWNER = Identity("wallet_1")
USER = Identity("wallet_3")
PID = PropertyId(1)


class _FailingRepository:
    """Repository whose save() fails after a configurable number of calls."""

    def __init__(self, fail_after: int):
        self.saves = 0
        self.fail_after = fail_after

    async def load(self) -> dict | None:
        return None

    async def save(self, snapshot: dict, height: int) -> None:
        if self.saves >= self.fail_after:
            raise DatabaseError("disk full", "commit")
        self.saves += 1


async def test_mutation_is_persisted(service, repository):
    property_id = await service.register_property(OWNER, "123 Main St", 1_000, 50, "d")
    assert property_id == 1
    snapshot = await repository.load()
    assert snapshot["height"] == 1
    assert snapshot["properties"][0]["owner"] == OWNER


async def test_bootstrap_restores_saved_state(service, repository):
    await service.register_property(OWNER, "123 Main St", 1_000, 50, "d")
    await service.set_revenue_share(OWNER, PID, USER, 25)

    restored = await RegistryService.bootstrap(repository)
    assert restored.registry.height == 2
    assert restored.registry.get_revenue_share(PID, USER).percentage == 25
    assert restored.registry.get_next_property_id() == 2


async def test_bootstrap_uses_genesis_height_when_empty(repository):
    fresh = await RegistryService.bootstrap(repository, genesis_height=1000)
    assert fresh.registry.height == 1000


async def test_rejected_mutation_is_not_persisted(service, repository):
    await service.register_property(OWNER, "123 Main St", 1_000, 50, "d")
    with pytest.raises(UnauthorizedError):
        await service.update_property(USER, PID, PropertyPatch(address="x"))
    snapshot = await repository.load()
    assert snapshot["height"] == 1
    assert snapshot["properties"][0]["address"] == "123 Main St"
    assert service.registry.height == 1


async def test_failed_save_rolls_back_memory():
    repo = _FailingRepository(fail_after=1)
    service = RegistryService(PropertyRegistry(), repo)
    await service.register_property(OWNER, "123 Main St", 1_000, 50, "d")

    with pytest.raises(DatabaseError):
        await service.register_new_version(OWNER, PID, 2_000, 1, "appraisal")

    assert service.registry.height == 1
    assert service.registry.get_property(PID).value == 1_000
    assert service.registry.get_version(PID, 1) is None


async def test_in_memory_service_without_repository():
    service = RegistryService(PropertyRegistry())
    await service.register_property(OWNER, "a", 1, 0, "")
    await service.grant_lease(OWNER, PID, USER, 10, "terms")
    assert service.registry.is_lease_active(PID, USER)


async def test_concurrent_registrations_get_distinct_ids(service):
    ids = await asyncio.gather(*(
        service.register_property(OWNER, f"{i} Main St", 100 + i, 0, "")
        for i in range(10)
    ))
    assert sorted(ids) == list(range(1, 11))
    assert service.registry.height == 10
