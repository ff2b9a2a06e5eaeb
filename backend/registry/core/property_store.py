"""Property Store — primary registry of Property records.

Invariants:
    - Ids come from IdAllocator only; a rejected register() consumes no id
    - AlreadyRegistered is checked before parameter validation
    - Every mutation except register() is owner-only; collaborators never qualify
    - update() is a merge-patch: UNSET fields keep their prior value
    - register_new_version() writes the VersionRecord and the new value together
    - DEACTIVATED is terminal; nothing here moves a property back to ACTIVE

Design Decisions:
    - Validate everything, then assign: the only writes happen after the last
      check, so a raised RegistryError leaves the store untouched
    - Height passed in by the caller: the store never reads a global clock
      (ADR: deterministic, testable in isolation)
"""

from dataclasses import replace
from typing import Iterable, Iterator

from registry.core.domain_types import (
    Height, Identity, Lifecycle, Operation, PropertyId,
)
from registry.core.enforce_access import (
    require_owner, validate_description, validate_non_negative, validate_value,
)
from registry.core.errors import AlreadyRegisteredError, ErrorContext, NotFoundError
from registry.core.id_allocator import IdAllocator
from registry.core.records import Property, PropertyPatch
from registry.core.version_history import VersionHistory


class PropertyStore:

    def __init__(
        self,
        allocator: IdAllocator | None = None,
        history: VersionHistory | None = None,
    ) -> None:
        self.allocator = allocator or IdAllocator()
        self.history = history or VersionHistory()
        self._properties: dict[PropertyId, Property] = {}

    # ─── Reads ───────────────────────────────────────────────────

    def get(self, property_id: PropertyId) -> Property | None:
        return self._properties.get(property_id)

    def require(self, property_id: PropertyId, operation: Operation) -> Property:
        """Resolve a property for a mutation, or raise NotFound."""
        prop = self._properties.get(property_id)
        if prop is None:
            raise NotFoundError(
                property_id,
                ErrorContext(property_id=property_id, operation=operation.value),
            )
        return prop

    def verify_ownership(self, property_id: PropertyId, identity: Identity) -> bool:
        prop = self._properties.get(property_id)
        return prop is not None and prop.owner == identity

    def next_id(self) -> PropertyId:
        return self.allocator.peek()

    # ─── Mutations ───────────────────────────────────────────────

    def register(
        self,
        caller: Identity,
        address: str,
        value: int,
        rental_income: int,
        description: str,
        height: Height,
    ) -> Property:
        candidate = self.allocator.peek()
        if candidate in self._properties:
            raise AlreadyRegisteredError(
                candidate,
                ErrorContext(
                    property_id=candidate, caller=caller,
                    operation=Operation.REGISTER.value,
                ),
            )
        validate_value(value)
        validate_description(description)

        prop = Property(
            id=self.allocator.allocate(),
            owner=caller,
            created_at=height,
            address=address,
            value=value,
            rental_income=rental_income,
            description=description,
        )
        self._properties[prop.id] = prop
        return prop

    def update(
        self, caller: Identity, property_id: PropertyId, patch: PropertyPatch,
    ) -> Property:
        prop = self.require(property_id, Operation.UPDATE)
        require_owner(prop, caller, Operation.UPDATE)
        updated = patch.apply_to(prop)
        validate_value(updated.value)
        validate_description(updated.description)
        self._properties[property_id] = updated
        return updated

    def transfer_ownership(
        self, caller: Identity, property_id: PropertyId, new_owner: Identity,
    ) -> Property:
        prop = self.require(property_id, Operation.TRANSFER_OWNERSHIP)
        require_owner(prop, caller, Operation.TRANSFER_OWNERSHIP)
        updated = replace(prop, owner=new_owner)
        self._properties[property_id] = updated
        return updated

    def deactivate(self, caller: Identity, property_id: PropertyId) -> Property:
        prop = self.require(property_id, Operation.DEACTIVATE)
        require_owner(prop, caller, Operation.DEACTIVATE)
        updated = replace(prop, lifecycle=Lifecycle.DEACTIVATED)
        self._properties[property_id] = updated
        return updated

    def register_new_version(
        self,
        caller: Identity,
        property_id: PropertyId,
        new_value: int,
        version: int,
        notes: str,
        height: Height,
    ) -> Property:
        prop = self.require(property_id, Operation.REGISTER_NEW_VERSION)
        require_owner(prop, caller, Operation.REGISTER_NEW_VERSION)
        validate_value(new_value, "new_value")
        validate_non_negative(version, "version")

        updated = replace(prop, value=new_value)
        self.history.record(property_id, version, new_value, notes, height)
        self._properties[property_id] = updated
        return updated

    # ─── Snapshot support ────────────────────────────────────────

    def items(self) -> Iterator[tuple[PropertyId, Property]]:
        return iter(sorted(self._properties.items()))

    def restore(self, properties: Iterable[Property], next_id: int) -> None:
        self._properties = {p.id: p for p in properties}
        self.allocator.next_id = next_id
