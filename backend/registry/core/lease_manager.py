"""Lease Manager — time-bounded occupancy rights per (property, lessee).

Invariants:
    - grant_lease is owner-only; expiry = height at grant + duration, active = True
    - Granting again to the same lessee replaces the previous lease
    - is_lease_active is evaluated at read time: exists AND active AND expiry ≥ height
    - The stored active flag is never cleared when height passes expiry

Design Decisions:
    - Lazy expiry over a sweeper: no background work, reads stay pure
      (ADR: keep the stored record exactly as granted for audit)
"""

from typing import Iterable, Iterator

from registry.core.domain_types import Height, Identity, Operation, PropertyId
from registry.core.enforce_access import require_owner, validate_non_negative
from registry.core.property_store import PropertyStore
from registry.core.records import LeaseRecord


class LeaseManager:

    def __init__(self, store: PropertyStore) -> None:
        self._store = store
        self._records: dict[tuple[PropertyId, Identity], LeaseRecord] = {}

    def grant_lease(
        self,
        caller: Identity,
        property_id: PropertyId,
        lessee: Identity,
        duration: int,
        terms: str,
        height: Height,
    ) -> LeaseRecord:
        prop = self._store.require(property_id, Operation.GRANT_LEASE)
        require_owner(prop, caller, Operation.GRANT_LEASE)
        validate_non_negative(duration, "duration")
        record = LeaseRecord(expiry=Height(height + duration), terms=terms, active=True)
        self._records[(property_id, lessee)] = record
        return record

    def is_lease_active(
        self, property_id: PropertyId, lessee: Identity, height: Height,
    ) -> bool:
        lease = self._records.get((property_id, lessee))
        return lease is not None and lease.active and lease.expiry >= height

    def get(self, property_id: PropertyId, lessee: Identity) -> LeaseRecord | None:
        return self._records.get((property_id, lessee))

    def items(self) -> Iterator[tuple[tuple[PropertyId, Identity], LeaseRecord]]:
        return iter(sorted(self._records.items()))

    def restore(
        self, records: Iterable[tuple[tuple[PropertyId, Identity], LeaseRecord]],
    ) -> None:
        self._records = dict(records)
