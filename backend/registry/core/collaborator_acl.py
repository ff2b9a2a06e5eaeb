"""Collaborator ACL — per-property delegated permission sets.

Invariants:
    - Only the property owner adds collaborators; adding again overwrites the record
    - permissions stored as frozenset: duplicate grants collapse, membership is O(1)
    - has_permission is read-only and never raises; unknown property/identity → False
    - Holding a permission never makes a collaborator the owner
"""

from typing import Iterable, Iterator

from registry.core.domain_types import Height, Identity, Operation, PropertyId
from registry.core.enforce_access import require_owner, validate_permissions
from registry.core.property_store import PropertyStore
from registry.core.records import CollaboratorRecord


class CollaboratorACL:

    def __init__(self, store: PropertyStore) -> None:
        self._store = store
        self._records: dict[tuple[PropertyId, Identity], CollaboratorRecord] = {}

    def add_collaborator(
        self,
        caller: Identity,
        property_id: PropertyId,
        collaborator: Identity,
        role: str,
        permissions: Iterable[str],
        height: Height,
    ) -> CollaboratorRecord:
        prop = self._store.require(property_id, Operation.ADD_COLLABORATOR)
        require_owner(prop, caller, Operation.ADD_COLLABORATOR)
        record = CollaboratorRecord(
            role=role, permissions=validate_permissions(permissions), added_at=height,
        )
        self._records[(property_id, collaborator)] = record
        return record

    def has_permission(
        self, property_id: PropertyId, identity: Identity, permission: str,
    ) -> bool:
        record = self._records.get((property_id, identity))
        return record is not None and permission in record.permissions

    def get(
        self, property_id: PropertyId, collaborator: Identity,
    ) -> CollaboratorRecord | None:
        return self._records.get((property_id, collaborator))

    def items(self) -> Iterator[tuple[tuple[PropertyId, Identity], CollaboratorRecord]]:
        return iter(sorted(self._records.items()))

    def restore(
        self,
        records: Iterable[tuple[tuple[PropertyId, Identity], CollaboratorRecord]],
    ) -> None:
        self._records = dict(records)
