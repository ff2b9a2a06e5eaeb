"""Property Schemas — Pydantic request/response models for the registry API.

Invariants:
    - Request models check shape and types only; registry invariants (value > 0,
      description length, tag limits, percentage range) are enforced by core so
      the client sees the domain error code, not a generic validation error
    - PropertyUpdate fields are non-nullable: absent means "unchanged", null is a
      validation error, never a silent no-op
    - Response models are built from core records with from_record()

Design Decisions:
    - Integer money fields: values are whole currency units, matching the ledger
"""

from pydantic import BaseModel, Field

from registry.core.records import (
    UNSET, CategoryRecord, CollaboratorRecord, LeaseRecord, Property, PropertyPatch,
    RevenueShareRecord, StatusRecord, VersionRecord,
)


# ─── Requests ────────────────────────────────────────────────────

class PropertyCreate(BaseModel):
    address: str
    value: int
    rental_income: int = 0
    description: str = ""


class PropertyUpdate(BaseModel):
    """Merge-patch body. Omitted fields are left unchanged; null is rejected.

    Defaults are placeholders only: to_patch reads model_fields_set, so a
    default never reaches the registry.
    """
    address: str = ""
    value: int = 0
    rental_income: int = 0
    description: str = ""

    def to_patch(self) -> PropertyPatch:
        return PropertyPatch(**{
            name: getattr(self, name) if name in self.model_fields_set else UNSET
            for name in ("address", "value", "rental_income", "description")
        })


class OwnershipTransfer(BaseModel):
    new_owner: str = Field(min_length=1)


class NewVersion(BaseModel):
    new_value: int
    notes: str = ""


class StatusUpdate(BaseModel):
    status: str = Field(min_length=1)
    visibility: bool = True


class CategoryUpdate(BaseModel):
    category: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)


class CollaboratorGrant(BaseModel):
    role: str
    permissions: list[str] = Field(default_factory=list)


class RevenueShareUpdate(BaseModel):
    percentage: int


class LeaseGrant(BaseModel):
    duration: int
    terms: str = ""


# ─── Responses ───────────────────────────────────────────────────

class RegisterResponse(BaseModel):
    property_id: int


class OkResponse(BaseModel):
    ok: bool = True


class PropertyOut(BaseModel):
    id: int
    owner: str
    created_at: int
    address: str
    value: int
    rental_income: int
    description: str
    lifecycle: str
    active: bool

    @classmethod
    def from_record(cls, prop: Property) -> "PropertyOut":
        return cls(
            id=prop.id, owner=prop.owner, created_at=prop.created_at,
            address=prop.address, value=prop.value,
            rental_income=prop.rental_income, description=prop.description,
            lifecycle=prop.lifecycle.value, active=prop.active,
        )


class StatusOut(BaseModel):
    status: str
    visibility: bool
    last_updated: int

    @classmethod
    def from_record(cls, record: StatusRecord) -> "StatusOut":
        return cls(
            status=record.status, visibility=record.visibility,
            last_updated=record.last_updated,
        )


class CategoryOut(BaseModel):
    category: str
    tags: list[str]

    @classmethod
    def from_record(cls, record: CategoryRecord) -> "CategoryOut":
        return cls(category=record.category, tags=list(record.tags))


class CollaboratorOut(BaseModel):
    role: str
    permissions: list[str]
    added_at: int

    @classmethod
    def from_record(cls, record: CollaboratorRecord) -> "CollaboratorOut":
        return cls(
            role=record.role, permissions=sorted(record.permissions),
            added_at=record.added_at,
        )


class RevenueShareOut(BaseModel):
    percentage: int
    total_received: int

    @classmethod
    def from_record(cls, record: RevenueShareRecord) -> "RevenueShareOut":
        return cls(percentage=record.percentage, total_received=record.total_received)


class LeaseOut(BaseModel):
    expiry: int
    terms: str
    active: bool

    @classmethod
    def from_record(cls, record: LeaseRecord) -> "LeaseOut":
        return cls(expiry=record.expiry, terms=record.terms, active=record.active)


class VersionOut(BaseModel):
    updated_value: int
    notes: str
    timestamp: int

    @classmethod
    def from_record(cls, record: VersionRecord) -> "VersionOut":
        return cls(
            updated_value=record.updated_value, notes=record.notes,
            timestamp=record.timestamp,
        )
