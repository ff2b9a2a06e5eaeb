"""Category Tagger — one category plus up to 10 short tags per property."""

from typing import Iterable, Iterator

from registry.core.domain_types import Identity, Operation, PropertyId
from registry.core.enforce_access import require_owner, validate_tags
from registry.core.property_store import PropertyStore
from registry.core.records import CategoryRecord


class CategoryTagger:

    def __init__(self, store: PropertyStore) -> None:
        self._store = store
        self._records: dict[PropertyId, CategoryRecord] = {}

    def add_category(
        self,
        caller: Identity,
        property_id: PropertyId,
        category: str,
        tags: Iterable[str],
    ) -> CategoryRecord:
        prop = self._store.require(property_id, Operation.ADD_CATEGORY)
        require_owner(prop, caller, Operation.ADD_CATEGORY)
        record = CategoryRecord(category=category, tags=validate_tags(tags))
        self._records[property_id] = record
        return record

    def get(self, property_id: PropertyId) -> CategoryRecord | None:
        return self._records.get(property_id)

    def items(self) -> Iterator[tuple[PropertyId, CategoryRecord]]:
        return iter(sorted(self._records.items()))

    def restore(self, records: Iterable[tuple[PropertyId, CategoryRecord]]) -> None:
        self._records = dict(records)
