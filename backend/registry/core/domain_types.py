"""Domain Types — rich types that replace bare primitives across the registry.

Invariants:
    - PropertyId is a positive int issued by IdAllocator, never reused
    - Identity is an opaque principal string (owner, collaborator, lessee, ...)
    - Height is the monotonic logical clock, advanced once per successful mutation
    - Lifecycle has exactly two states and no edge back from DEACTIVATED

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: snapshot is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PropertyId = NewType("PropertyId", int)
Identity = NewType("Identity", str)


# ─── Value Types ─────────────────────────────────────────────────

Height = NewType("Height", int)
Percentage = NewType("Percentage", int)   # 0–100


# ─── Limits ──────────────────────────────────────────────────────

MAX_METADATA_LEN: int = 500
MAX_TAGS: int = 10
MAX_TAG_LEN: int = 20
MAX_PERCENTAGE: int = 100

INITIAL_STATUS: str = "pending"
UPDATE_STATUS_PERMISSION: str = "update-status"


# ─── Enums ───────────────────────────────────────────────────────

class Lifecycle(str, Enum):
    """Property lifecycle — DEACTIVATED is terminal."""
    ACTIVE = "active"
    DEACTIVATED = "deactivated"


class Operation(str, Enum):
    """Mutating operations, used for logging and error context."""
    REGISTER = "register"
    UPDATE = "update"
    TRANSFER_OWNERSHIP = "transfer_ownership"
    DEACTIVATE = "deactivate"
    REGISTER_NEW_VERSION = "register_new_version"
    ADD_COLLABORATOR = "add_collaborator"
    UPDATE_STATUS = "update_status"
    ADD_CATEGORY = "add_category"
    SET_REVENUE_SHARE = "set_revenue_share"
    GRANT_LEASE = "grant_lease"
