"""Registry Snapshot — tests for serialization/deserialization.

Invariants:
    - registry_to_snapshot produces a JSON-safe dict (no sets, no enums, no tuples)
    - registry_from_snapshot reconstructs an equivalent registry
    - Counters survive: restored registry keeps issuing fresh ids and later heights
    - Missing sections fall back to empty
"""

import json

from registry.core.domain_types import Identity, Lifecycle, PropertyId
from registry.core.property_registry import PropertyRegistry
from registry.core.registry_snapshot import registry_from_snapshot, registry_to_snapshot

OWNER = Identity("wallet_1")
COLLABORATOR = Identity("wallet_2")
LESSEE = Identity("wallet_4")
PID = PropertyId(1)


def _populated() -> PropertyRegistry:
    registry = PropertyRegistry(genesis_height=1000)
    registry.register_property(OWNER, "123 Main St", 1_000_000, 5_000, "Desc")
    registry.register_property(OWNER, "9 Elm St", 300_000, 1_200, "Second")
    registry.add_category(OWNER, PID, "co-working", ["urban", "tech"])
    registry.update_status(OWNER, PID, "available", False)
    registry.add_collaborator(OWNER, PID, COLLABORATOR, "manager", ["update-status", "view"])
    registry.set_revenue_share(OWNER, PID, COLLABORATOR, 20)
    registry.grant_lease(OWNER, PID, LESSEE, 100, "Monthly lease")
    registry.register_new_version(OWNER, PID, 1_500_000, 1, "Renovations completed")
    registry.deactivate_property(OWNER, PropertyId(2))
    return registry


def test_snapshot_is_json_safe():
    snapshot = registry_to_snapshot(_populated())
    assert json.loads(json.dumps(snapshot)) == snapshot


def test_roundtrip_preserves_every_record():
    source = _populated()
    restored = registry_from_snapshot(registry_to_snapshot(source))

    assert restored.height == source.height
    assert restored.get_next_property_id() == 3
    assert restored.get_property(PID) == source.get_property(PID)
    assert restored.get_property(PropertyId(2)).lifecycle is Lifecycle.DEACTIVATED
    assert restored.get_category(PID) == source.get_category(PID)
    assert restored.get_status(PID) == source.get_status(PID)
    assert restored.get_collaborator(PID, COLLABORATOR) == source.get_collaborator(
        PID, COLLABORATOR,
    )
    assert restored.has_permission(PID, COLLABORATOR, "update-status")
    assert restored.get_revenue_share(PID, COLLABORATOR) == source.get_revenue_share(
        PID, COLLABORATOR,
    )
    assert restored.get_lease(PID, LESSEE) == source.get_lease(PID, LESSEE)
    assert restored.get_version(PID, 1) == source.get_version(PID, 1)


def test_roundtrip_is_stable():
    snapshot = registry_to_snapshot(_populated())
    assert registry_to_snapshot(registry_from_snapshot(snapshot)) == snapshot


def test_restored_registry_continues_counters():
    source = _populated()
    restored = registry_from_snapshot(registry_to_snapshot(source))
    new_id = restored.register_property(OWNER, "1 New St", 10, 0, "")
    assert new_id == 3
    assert restored.get_property(new_id).created_at == source.height


def test_empty_snapshot_yields_empty_registry():
    restored = registry_from_snapshot({})
    assert restored.height == 0
    assert restored.get_next_property_id() == 1
    assert restored.get_property(PID) is None
