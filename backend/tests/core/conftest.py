"""Core test fixtures — a fresh registry with and without a seeded property. No IO."""

import pytest

from registry.core.domain_types import Identity
from registry.core.property_registry import PropertyRegistry


@pytest.fixture
def registry() -> PropertyRegistry:
    return PropertyRegistry()


@pytest.fixture
def registered(registry: PropertyRegistry) -> PropertyRegistry:
    """Registry holding property 1, owned by wallet_1, registered at height 0."""
    registry.register_property(
        Identity("wallet_1"), "123 Main St", 1_000_000, 5_000, "Desc",
    )
    return registry
