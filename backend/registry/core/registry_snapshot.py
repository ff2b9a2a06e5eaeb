"""Registry Snapshot — serialization / deserialization for PropertyRegistry.

Invariants:
    - registry_to_snapshot produces a JSON-safe dict (no sets, no Enums, no tuples)
    - registry_from_snapshot reconstructs an equivalent PropertyRegistry
    - height and next_property_id survive the round trip, so ids are never reused
    - Missing sections fall back to empty (forward-compatible)

Design Decisions:
    - Lists of flat dicts over nested maps: JSON object keys must be strings,
      composite (property_id, identity) keys would need an ad-hoc encoding
    - Permissions serialized sorted: snapshots of equal state compare equal
"""

from registry.core.domain_types import (
    Height, Identity, Lifecycle, Percentage, PropertyId,
)
from registry.core.property_registry import PropertyRegistry
from registry.core.records import (
    CategoryRecord, CollaboratorRecord, LeaseRecord, Property,
    RevenueShareRecord, StatusRecord, VersionRecord,
)

SNAPSHOT_FORMAT: int = 1


def _serialize_property(prop: Property) -> dict:
    return {
        "id": prop.id,
        "owner": prop.owner,
        "created_at": prop.created_at,
        "address": prop.address,
        "value": prop.value,
        "rental_income": prop.rental_income,
        "description": prop.description,
        "lifecycle": prop.lifecycle.value,
    }


def _deserialize_property(data: dict) -> Property:
    return Property(
        id=PropertyId(data["id"]),
        owner=Identity(data["owner"]),
        created_at=Height(data["created_at"]),
        address=data["address"],
        value=data["value"],
        rental_income=data["rental_income"],
        description=data["description"],
        lifecycle=Lifecycle(data.get("lifecycle", Lifecycle.ACTIVE.value)),
    )


def registry_to_snapshot(registry: PropertyRegistry) -> dict:
    """Serialize PropertyRegistry to JSON-safe dict. Pure, no IO."""
    return {
        "format": SNAPSHOT_FORMAT,
        "height": registry.height,
        "next_property_id": registry.properties.allocator.next_id,
        "properties": [
            _serialize_property(p) for _, p in registry.properties.items()
        ],
        "statuses": [
            {
                "property_id": pid, "status": r.status,
                "visibility": r.visibility, "last_updated": r.last_updated,
            }
            for pid, r in registry.statuses.items()
        ],
        "categories": [
            {"property_id": pid, "category": r.category, "tags": list(r.tags)}
            for pid, r in registry.categories.items()
        ],
        "collaborators": [
            {
                "property_id": pid, "collaborator": who, "role": r.role,
                "permissions": sorted(r.permissions), "added_at": r.added_at,
            }
            for (pid, who), r in registry.collaborators.items()
        ],
        "revenue_shares": [
            {
                "property_id": pid, "participant": who,
                "percentage": r.percentage, "total_received": r.total_received,
            }
            for (pid, who), r in registry.revenue_shares.items()
        ],
        "leases": [
            {
                "property_id": pid, "lessee": who, "expiry": r.expiry,
                "terms": r.terms, "active": r.active,
            }
            for (pid, who), r in registry.leases.items()
        ],
        "versions": [
            {
                "property_id": pid, "version": version,
                "updated_value": r.updated_value, "notes": r.notes,
                "timestamp": r.timestamp,
            }
            for (pid, version), r in registry.versions.items()
        ],
    }


def registry_from_snapshot(snapshot: dict) -> PropertyRegistry:
    """Reconstruct PropertyRegistry from a snapshot dict. Pure, no IO."""
    registry = PropertyRegistry(genesis_height=snapshot.get("height", 0))
    registry.properties.restore(
        (_deserialize_property(p) for p in snapshot.get("properties", [])),
        snapshot.get("next_property_id", 1),
    )
    registry.statuses.restore(
        (
            PropertyId(s["property_id"]),
            StatusRecord(
                status=s["status"], visibility=s["visibility"],
                last_updated=Height(s["last_updated"]),
            ),
        )
        for s in snapshot.get("statuses", [])
    )
    registry.categories.restore(
        (
            PropertyId(c["property_id"]),
            CategoryRecord(category=c["category"], tags=tuple(c.get("tags", []))),
        )
        for c in snapshot.get("categories", [])
    )
    registry.collaborators.restore(
        (
            (PropertyId(c["property_id"]), Identity(c["collaborator"])),
            CollaboratorRecord(
                role=c["role"], permissions=frozenset(c.get("permissions", [])),
                added_at=Height(c["added_at"]),
            ),
        )
        for c in snapshot.get("collaborators", [])
    )
    registry.revenue_shares.restore(
        (
            (PropertyId(r["property_id"]), Identity(r["participant"])),
            RevenueShareRecord(
                percentage=Percentage(r["percentage"]),
                total_received=r.get("total_received", 0),
            ),
        )
        for r in snapshot.get("revenue_shares", [])
    )
    registry.leases.restore(
        (
            (PropertyId(lease["property_id"]), Identity(lease["lessee"])),
            LeaseRecord(
                expiry=Height(lease["expiry"]), terms=lease["terms"],
                active=lease["active"],
            ),
        )
        for lease in snapshot.get("leases", [])
    )
    registry.versions.restore(
        (
            (PropertyId(v["property_id"]), v["version"]),
            VersionRecord(
                updated_value=v["updated_value"], notes=v["notes"],
                timestamp=Height(v["timestamp"]),
            ),
        )
        for v in snapshot.get("versions", [])
    )
    return registry
