"""Property Registry — facade composing every component behind one operation surface.

Invariants:
    - Owns the height clock; passes the current height into each component call
    - Height advances by exactly 1 after each successful mutation, never on reads
      or on a rejected mutation
    - A mutation either raises a RegistryError with nothing written, or commits fully
    - register() creates the Property and its pending StatusRecord together

Design Decisions:
    - Facade over free functions: one object is the whole state, which is what
      the snapshot serializes and the service guards with its lock
    - Components exposed as attributes for read-side collaborators (dividend
      distributor, marketplace) that need more than the query methods
"""

from typing import Iterable

from registry.core.category_tagger import CategoryTagger
from registry.core.collaborator_acl import CollaboratorACL
from registry.core.domain_types import Height, Identity, Percentage, PropertyId
from registry.core.id_allocator import IdAllocator
from registry.core.lease_manager import LeaseManager
from registry.core.property_store import PropertyStore
from registry.core.records import (
    CategoryRecord, CollaboratorRecord, LeaseRecord, Property, PropertyPatch,
    RevenueShareRecord, StatusRecord, VersionRecord,
)
from registry.core.revenue_share_ledger import RevenueShareLedger
from registry.core.status_tracker import StatusTracker
from registry.core.version_history import VersionHistory


class PropertyRegistry:
    """Authoritative ledger of properties and the rights attached to them."""

    def __init__(self, genesis_height: int = 0) -> None:
        self.height = Height(genesis_height)
        self.versions = VersionHistory()
        self.properties = PropertyStore(IdAllocator(), self.versions)
        self.collaborators = CollaboratorACL(self.properties)
        self.statuses = StatusTracker(self.properties, self.collaborators)
        self.categories = CategoryTagger(self.properties)
        self.revenue_shares = RevenueShareLedger(self.properties)
        self.leases = LeaseManager(self.properties)

    def _advance(self) -> None:
        self.height = Height(self.height + 1)

    # ─── Mutations ───────────────────────────────────────────────

    def register_property(
        self,
        caller: Identity,
        address: str,
        value: int,
        rental_income: int,
        description: str,
    ) -> PropertyId:
        prop = self.properties.register(
            caller, address, value, rental_income, description, self.height,
        )
        self.statuses.initialize(prop.id, self.height)
        self._advance()
        return prop.id

    def update_property(
        self, caller: Identity, property_id: PropertyId, patch: PropertyPatch,
    ) -> bool:
        self.properties.update(caller, property_id, patch)
        self._advance()
        return True

    def transfer_ownership(
        self, caller: Identity, property_id: PropertyId, new_owner: Identity,
    ) -> bool:
        self.properties.transfer_ownership(caller, property_id, new_owner)
        self._advance()
        return True

    def deactivate_property(self, caller: Identity, property_id: PropertyId) -> bool:
        self.properties.deactivate(caller, property_id)
        self._advance()
        return True

    def register_new_version(
        self,
        caller: Identity,
        property_id: PropertyId,
        new_value: int,
        version: int,
        notes: str,
    ) -> bool:
        self.properties.register_new_version(
            caller, property_id, new_value, version, notes, self.height,
        )
        self._advance()
        return True

    def add_collaborator(
        self,
        caller: Identity,
        property_id: PropertyId,
        collaborator: Identity,
        role: str,
        permissions: Iterable[str],
    ) -> bool:
        self.collaborators.add_collaborator(
            caller, property_id, collaborator, role, permissions, self.height,
        )
        self._advance()
        return True

    def update_status(
        self, caller: Identity, property_id: PropertyId, status: str, visibility: bool,
    ) -> bool:
        self.statuses.update_status(caller, property_id, status, visibility, self.height)
        self._advance()
        return True

    def add_category(
        self,
        caller: Identity,
        property_id: PropertyId,
        category: str,
        tags: Iterable[str],
    ) -> bool:
        self.categories.add_category(caller, property_id, category, tags)
        self._advance()
        return True

    def set_revenue_share(
        self,
        caller: Identity,
        property_id: PropertyId,
        participant: Identity,
        percentage: Percentage,
    ) -> bool:
        self.revenue_shares.set_share(caller, property_id, participant, percentage)
        self._advance()
        return True

    def grant_lease(
        self,
        caller: Identity,
        property_id: PropertyId,
        lessee: Identity,
        duration: int,
        terms: str,
    ) -> bool:
        self.leases.grant_lease(caller, property_id, lessee, duration, terms, self.height)
        self._advance()
        return True

    # ─── Queries (never raise, never advance height) ─────────────

    def get_property(self, property_id: PropertyId) -> Property | None:
        return self.properties.get(property_id)

    def get_category(self, property_id: PropertyId) -> CategoryRecord | None:
        return self.categories.get(property_id)

    def get_status(self, property_id: PropertyId) -> StatusRecord | None:
        return self.statuses.get(property_id)

    def get_collaborator(
        self, property_id: PropertyId, collaborator: Identity,
    ) -> CollaboratorRecord | None:
        return self.collaborators.get(property_id, collaborator)

    def has_permission(
        self, property_id: PropertyId, identity: Identity, permission: str,
    ) -> bool:
        return self.collaborators.has_permission(property_id, identity, permission)

    def get_revenue_share(
        self, property_id: PropertyId, participant: Identity,
    ) -> RevenueShareRecord | None:
        return self.revenue_shares.get(property_id, participant)

    def total_revenue_allocated(self, property_id: PropertyId) -> int:
        return self.revenue_shares.total_allocated(property_id)

    def get_lease(self, property_id: PropertyId, lessee: Identity) -> LeaseRecord | None:
        return self.leases.get(property_id, lessee)

    def is_lease_active(self, property_id: PropertyId, lessee: Identity) -> bool:
        return self.leases.is_lease_active(property_id, lessee, self.height)

    def get_version(self, property_id: PropertyId, version: int) -> VersionRecord | None:
        return self.versions.get(property_id, version)

    def verify_ownership(self, property_id: PropertyId, identity: Identity) -> bool:
        return self.properties.verify_ownership(property_id, identity)

    def get_next_property_id(self) -> PropertyId:
        return self.properties.next_id()
