"""Registry Service — single-writer shell around the pure PropertyRegistry.

Invariants:
    - One asyncio.Lock serializes every mutation (the global ordering point)
    - With a repository, a mutation runs on a working copy; the copy replaces the
      live registry only after its snapshot is saved. Readers never observe a
      mutation that later fails to persist
    - Rejected mutations (RegistryError) leave both memory and storage untouched
    - Reads go straight to the live registry and never take the lock

Design Decisions:
    - Copy-on-write through the snapshot codec over undo logs: the codec already
      exists and is tested, so the rollback path has no extra logic of its own
    - Cost: each persisted mutation encodes the full registry twice (working copy,
      then save) and rewrites one JSON row, so it is O(total state) per call.
      Accepted for a single-writer registry of modest size; per-table rows with
      incremental writes would be the next step if the state outgrows this
    - Without a repository (tests, embedded use) mutations apply in place; there
      is no await between check and write, so they are still atomic
"""

import asyncio
import logging
from typing import Callable, Iterable, TypeVar

from registry.core.domain_types import Identity, Operation, Percentage, PropertyId
from registry.core.errors import RegistryError
from registry.core.property_registry import PropertyRegistry
from registry.core.records import PropertyPatch
from registry.core.registry_snapshot import registry_from_snapshot, registry_to_snapshot
from registry.core.repository_protocols import SnapshotRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RegistryService:
    """Serialized, persisted access to a PropertyRegistry."""

    def __init__(
        self,
        registry: PropertyRegistry,
        repository: SnapshotRepository | None = None,
    ):
        self._registry = registry
        self._repository = repository
        self._lock = asyncio.Lock()

    @classmethod
    async def bootstrap(
        cls, repository: SnapshotRepository, genesis_height: int = 0,
    ) -> "RegistryService":
        """Restore the last saved registry, or start an empty one."""
        snapshot = await repository.load()
        if snapshot is None:
            registry = PropertyRegistry(genesis_height=genesis_height)
            logger.info("Starting empty registry", extra={"height": registry.height})
        else:
            registry = registry_from_snapshot(snapshot)
            logger.info("Registry restored from snapshot", extra={"height": registry.height})
        return cls(registry, repository)

    @property
    def registry(self) -> PropertyRegistry:
        return self._registry

    async def _mutate(
        self,
        operation: Operation,
        caller: Identity,
        property_id: PropertyId | None,
        apply: Callable[[PropertyRegistry], T],
    ) -> T:
        async with self._lock:
            working = (
                registry_from_snapshot(registry_to_snapshot(self._registry))
                if self._repository is not None else self._registry
            )
            try:
                result = apply(working)
            except RegistryError as e:
                logger.warning(
                    f"{operation.value} rejected: {e.message}",
                    extra={
                        "operation": operation.value, "caller": caller,
                        "property_id": property_id, "error_code": e.code,
                    },
                )
                raise
            if self._repository is not None:
                await self._repository.save(registry_to_snapshot(working), working.height)
                self._registry = working
            logger.info(
                f"{operation.value} committed",
                extra={
                    "operation": operation.value, "caller": caller,
                    "property_id": property_id, "height": working.height,
                },
            )
            return result

    # ─── Mutations ───────────────────────────────────────────────

    async def register_property(
        self,
        caller: Identity,
        address: str,
        value: int,
        rental_income: int,
        description: str,
    ) -> PropertyId:
        return await self._mutate(
            Operation.REGISTER, caller, None,
            lambda r: r.register_property(
                caller, address, value, rental_income, description,
            ),
        )

    async def update_property(
        self, caller: Identity, property_id: PropertyId, patch: PropertyPatch,
    ) -> bool:
        return await self._mutate(
            Operation.UPDATE, caller, property_id,
            lambda r: r.update_property(caller, property_id, patch),
        )

    async def transfer_ownership(
        self, caller: Identity, property_id: PropertyId, new_owner: Identity,
    ) -> bool:
        return await self._mutate(
            Operation.TRANSFER_OWNERSHIP, caller, property_id,
            lambda r: r.transfer_ownership(caller, property_id, new_owner),
        )

    async def deactivate_property(
        self, caller: Identity, property_id: PropertyId,
    ) -> bool:
        return await self._mutate(
            Operation.DEACTIVATE, caller, property_id,
            lambda r: r.deactivate_property(caller, property_id),
        )

    async def register_new_version(
        self,
        caller: Identity,
        property_id: PropertyId,
        new_value: int,
        version: int,
        notes: str,
    ) -> bool:
        return await self._mutate(
            Operation.REGISTER_NEW_VERSION, caller, property_id,
            lambda r: r.register_new_version(
                caller, property_id, new_value, version, notes,
            ),
        )

    async def add_collaborator(
        self,
        caller: Identity,
        property_id: PropertyId,
        collaborator: Identity,
        role: str,
        permissions: Iterable[str],
    ) -> bool:
        permissions = list(permissions)
        return await self._mutate(
            Operation.ADD_COLLABORATOR, caller, property_id,
            lambda r: r.add_collaborator(
                caller, property_id, collaborator, role, permissions,
            ),
        )

    async def update_status(
        self, caller: Identity, property_id: PropertyId, status: str, visibility: bool,
    ) -> bool:
        return await self._mutate(
            Operation.UPDATE_STATUS, caller, property_id,
            lambda r: r.update_status(caller, property_id, status, visibility),
        )

    async def add_category(
        self,
        caller: Identity,
        property_id: PropertyId,
        category: str,
        tags: Iterable[str],
    ) -> bool:
        tags = list(tags)
        return await self._mutate(
            Operation.ADD_CATEGORY, caller, property_id,
            lambda r: r.add_category(caller, property_id, category, tags),
        )

    async def set_revenue_share(
        self,
        caller: Identity,
        property_id: PropertyId,
        participant: Identity,
        percentage: Percentage,
    ) -> bool:
        return await self._mutate(
            Operation.SET_REVENUE_SHARE, caller, property_id,
            lambda r: r.set_revenue_share(caller, property_id, participant, percentage),
        )

    async def grant_lease(
        self,
        caller: Identity,
        property_id: PropertyId,
        lessee: Identity,
        duration: int,
        terms: str,
    ) -> bool:
        return await self._mutate(
            Operation.GRANT_LEASE, caller, property_id,
            lambda r: r.grant_lease(caller, property_id, lessee, duration, terms),
        )


# Singleton (initialized on startup)
registry_service: RegistryService | None = None


def get_registry_service() -> RegistryService:
    """FastAPI dependency for the registry service."""
    if registry_service is None:
        raise RuntimeError("Registry service not initialized")
    return registry_service
