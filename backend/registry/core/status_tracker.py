"""Status Tracker — free-form status and visibility per property.

Invariants:
    - register() seeds every property with status "pending", visibility True
    - update_status: owner, or a collaborator holding "update-status"
    - Status strings are not validated; lifecycle is tracked on Property, not here
"""

from typing import Iterable, Iterator

from registry.core.collaborator_acl import CollaboratorACL
from registry.core.domain_types import (
    INITIAL_STATUS, Height, Identity, Operation, PropertyId,
)
from registry.core.enforce_access import require_status_authority
from registry.core.property_store import PropertyStore
from registry.core.records import StatusRecord


class StatusTracker:

    def __init__(self, store: PropertyStore, acl: CollaboratorACL) -> None:
        self._store = store
        self._acl = acl
        self._records: dict[PropertyId, StatusRecord] = {}

    def initialize(self, property_id: PropertyId, height: Height) -> StatusRecord:
        """Seed the pending status of a freshly registered property."""
        record = StatusRecord(status=INITIAL_STATUS, visibility=True, last_updated=height)
        self._records[property_id] = record
        return record

    def update_status(
        self,
        caller: Identity,
        property_id: PropertyId,
        status: str,
        visibility: bool,
        height: Height,
    ) -> StatusRecord:
        prop = self._store.require(property_id, Operation.UPDATE_STATUS)
        require_status_authority(prop, caller, self._acl.has_permission)
        record = StatusRecord(status=status, visibility=visibility, last_updated=height)
        self._records[property_id] = record
        return record

    def get(self, property_id: PropertyId) -> StatusRecord | None:
        return self._records.get(property_id)

    def items(self) -> Iterator[tuple[PropertyId, StatusRecord]]:
        return iter(sorted(self._records.items()))

    def restore(self, records: Iterable[tuple[PropertyId, StatusRecord]]) -> None:
        self._records = dict(records)
