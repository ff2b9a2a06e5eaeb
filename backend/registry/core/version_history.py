"""Version History — valuation log keyed by (property id, version number).

Invariants:
    - Only PropertyStore.register_new_version writes here, after authorization
    - Re-recording an existing version number overwrites that entry
"""

from typing import Iterable, Iterator

from registry.core.domain_types import Height, PropertyId
from registry.core.records import VersionRecord


class VersionHistory:

    def __init__(self) -> None:
        self._entries: dict[tuple[PropertyId, int], VersionRecord] = {}

    def record(
        self, property_id: PropertyId, version: int,
        new_value: int, notes: str, height: Height,
    ) -> VersionRecord:
        entry = VersionRecord(updated_value=new_value, notes=notes, timestamp=height)
        self._entries[(property_id, version)] = entry
        return entry

    def get(self, property_id: PropertyId, version: int) -> VersionRecord | None:
        return self._entries.get((property_id, version))

    def items(self) -> Iterator[tuple[tuple[PropertyId, int], VersionRecord]]:
        return iter(sorted(self._entries.items()))

    def restore(
        self, entries: Iterable[tuple[tuple[PropertyId, int], VersionRecord]],
    ) -> None:
        self._entries = dict(entries)
