"""Revenue Share Ledger — entitlement percentage per (property, participant).

Invariants:
    - Owner-only; percentage must lie in [0, 100]
    - set_share overwrites any prior record and resets total_received to 0
    - No check that a property's shares sum to ≤ 100 (distributors must cope)
    - total_received is never changed here; distribution bookkeeping is external
"""

from typing import Iterable, Iterator

from registry.core.domain_types import Identity, Operation, Percentage, PropertyId
from registry.core.enforce_access import require_owner, validate_percentage
from registry.core.property_store import PropertyStore
from registry.core.records import RevenueShareRecord


class RevenueShareLedger:

    def __init__(self, store: PropertyStore) -> None:
        self._store = store
        self._records: dict[tuple[PropertyId, Identity], RevenueShareRecord] = {}

    def set_share(
        self,
        caller: Identity,
        property_id: PropertyId,
        participant: Identity,
        percentage: Percentage,
    ) -> RevenueShareRecord:
        prop = self._store.require(property_id, Operation.SET_REVENUE_SHARE)
        require_owner(prop, caller, Operation.SET_REVENUE_SHARE)
        validate_percentage(percentage)
        record = RevenueShareRecord(percentage=percentage, total_received=0)
        self._records[(property_id, participant)] = record
        return record

    def get(
        self, property_id: PropertyId, participant: Identity,
    ) -> RevenueShareRecord | None:
        return self._records.get((property_id, participant))

    def total_allocated(self, property_id: PropertyId) -> int:
        """Sum of stored percentages for a property. May exceed 100."""
        return sum(
            record.percentage
            for (pid, _), record in self._records.items()
            if pid == property_id
        )

    def items(self) -> Iterator[tuple[tuple[PropertyId, Identity], RevenueShareRecord]]:
        return iter(sorted(self._records.items()))

    def restore(
        self,
        records: Iterable[tuple[tuple[PropertyId, Identity], RevenueShareRecord]],
    ) -> None:
        self._records = dict(records)
