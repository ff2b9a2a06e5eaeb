"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Snapshot persistence accessed through a Protocol type
    - Implementation provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass an in-memory fake
    - Async in Protocol: implementations do IO, the pure registry never awaits
"""

from typing import Protocol


class SnapshotRepository(Protocol):
    """Contract for registry snapshot persistence — implemented by shell."""
    async def load(self) -> dict | None: ...
    async def save(self, snapshot: dict, height: int) -> None: ...
