"""Id Allocator — issues property ids: 1, 2, 3, ... never reused.

Invariants:
    - allocate() returns strictly increasing ids and advances the counter
    - peek() never advances the counter
"""

from dataclasses import dataclass

from registry.core.domain_types import PropertyId


@dataclass
class IdAllocator:
    next_id: int = 1

    def peek(self) -> PropertyId:
        return PropertyId(self.next_id)

    def allocate(self) -> PropertyId:
        issued = PropertyId(self.next_id)
        self.next_id += 1
        return issued
