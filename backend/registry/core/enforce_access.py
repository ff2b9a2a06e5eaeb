"""Access & Parameter Enforcement — pure precondition checks run before any write.

Invariants:
    - Every check is PURE: raises a RegistryError or returns None, never mutates
    - Ownership is exact identity equality with Property.owner
    - Status authority = owner OR collaborator holding "update-status"
    - Collaborator permissions never grant owner-only operations
    - Tag and permission collections are never a bare str (it would split into chars)

Design Decisions:
    - Raise over return-dict: the facade commits only after every check passes,
      so an exception here can never leave a partial write behind
    - Permission lookup injected as a callable: enforce_access does not import
      CollaboratorACL (ADR: leaf-first dependency order)
"""

from typing import Callable, Iterable

from registry.core.domain_types import (
    MAX_METADATA_LEN, MAX_PERCENTAGE, MAX_TAG_LEN, MAX_TAGS,
    UPDATE_STATUS_PERMISSION, Identity, Operation, Percentage, PropertyId,
)
from registry.core.errors import (
    ErrorContext, InvalidParamsError, InvalidPercentageError, UnauthorizedError,
)
from registry.core.records import Property

PermissionLookup = Callable[[PropertyId, Identity, str], bool]


def require_owner(prop: Property, caller: Identity, operation: Operation) -> None:
    """Owner-only gate shared by every owner-restricted mutation."""
    if prop.owner != caller:
        raise UnauthorizedError(
            caller, prop.id,
            ErrorContext(property_id=prop.id, caller=caller, operation=operation.value),
        )


def require_status_authority(
    prop: Property, caller: Identity, has_permission: PermissionLookup,
) -> None:
    if prop.owner == caller:
        return
    if has_permission(prop.id, caller, UPDATE_STATUS_PERMISSION):
        return
    raise UnauthorizedError(
        caller, prop.id,
        ErrorContext(
            property_id=prop.id, caller=caller,
            operation=Operation.UPDATE_STATUS.value,
        ),
    )


def validate_value(value: int, field: str = "value") -> None:
    if value <= 0:
        raise InvalidParamsError(f"{field} must be positive, got {value}", field)


def validate_description(description: str) -> None:
    if len(description) > MAX_METADATA_LEN:
        raise InvalidParamsError(
            f"description exceeds {MAX_METADATA_LEN} characters "
            f"({len(description)})",
            "description",
        )


def validate_non_negative(amount: int, field: str) -> None:
    if amount < 0:
        raise InvalidParamsError(f"{field} must not be negative, got {amount}", field)


def validate_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Return tags as a tuple after checking count and per-tag length."""
    if isinstance(tags, str):
        raise InvalidParamsError(
            "tags must be a collection of strings, not a string", "tags",
        )
    checked = tuple(tags)
    if len(checked) > MAX_TAGS:
        raise InvalidParamsError(
            f"at most {MAX_TAGS} tags allowed, got {len(checked)}", "tags",
        )
    too_long = [t for t in checked if len(t) > MAX_TAG_LEN]
    if too_long:
        raise InvalidParamsError(
            f"tags longer than {MAX_TAG_LEN} characters: {', '.join(too_long)}",
            "tags",
        )
    return checked


def validate_permissions(permissions: Iterable[str]) -> frozenset[str]:
    """Return permissions as a frozenset; a bare string is rejected, not split."""
    if isinstance(permissions, str):
        raise InvalidParamsError(
            "permissions must be a collection of strings, not a string", "permissions",
        )
    return frozenset(permissions)


def validate_percentage(percentage: Percentage) -> None:
    if percentage < 0 or percentage > MAX_PERCENTAGE:
        raise InvalidPercentageError(percentage)
