"""Registry Records — immutable value objects stored by each component.

Invariants:
    - Records are frozen: a mutation builds a replacement and swaps it in one assignment
    - CollaboratorRecord.permissions is a frozenset (O(1) membership, duplicates collapse)
    - PropertyPatch distinguishes "absent" (UNSET) from any real value, including falsy ones

Design Decisions:
    - Frozen dataclasses over dicts: a half-built record can never be observed,
      so validate-then-assign gives per-call atomicity for free
    - Property.active derived from Lifecycle: the bool survives for readers,
      the enum makes the terminal state explicit
"""

from dataclasses import dataclass, field, replace

from registry.core.domain_types import (
    Height, Identity, Lifecycle, Percentage, PropertyId,
)


class _Unset:
    """Marker for a PropertyPatch field that was not supplied."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class Property:
    id: PropertyId
    owner: Identity
    created_at: Height
    address: str
    value: int
    rental_income: int
    description: str
    lifecycle: Lifecycle = Lifecycle.ACTIVE

    @property
    def active(self) -> bool:
        return self.lifecycle is Lifecycle.ACTIVE


@dataclass(frozen=True)
class PropertyPatch:
    """Merge-patch for Property details. UNSET fields keep their prior value."""
    address: str | _Unset = UNSET
    value: int | _Unset = UNSET
    rental_income: int | _Unset = UNSET
    description: str | _Unset = UNSET

    def present_fields(self) -> dict[str, object]:
        return {
            name: getattr(self, name)
            for name in ("address", "value", "rental_income", "description")
            if getattr(self, name) is not UNSET
        }

    def apply_to(self, prop: Property) -> Property:
        return replace(prop, **self.present_fields())


@dataclass(frozen=True)
class CategoryRecord:
    category: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class StatusRecord:
    status: str
    visibility: bool
    last_updated: Height


@dataclass(frozen=True)
class CollaboratorRecord:
    role: str
    permissions: frozenset[str] = field(default_factory=frozenset)
    added_at: Height = Height(0)


@dataclass(frozen=True)
class RevenueShareRecord:
    percentage: Percentage
    total_received: int = 0


@dataclass(frozen=True)
class LeaseRecord:
    expiry: Height
    terms: str
    active: bool = True


@dataclass(frozen=True)
class VersionRecord:
    updated_value: int
    notes: str
    timestamp: Height
