"""Rights Routes — collaborators, revenue shares, and leases attached to a property.

Invariants:
    - Same caller/response conventions as properties.py (X-Caller, null for absent)
    - Lease activity is evaluated at the registry's current height
"""

from fastapi import APIRouter, Depends

from registry.api.routes.properties import caller_identity
from registry.core.domain_types import Identity, Percentage, PropertyId
from registry.schemas.property import (
    CollaboratorGrant, CollaboratorOut, LeaseGrant, LeaseOut, OkResponse,
    RevenueShareOut, RevenueShareUpdate,
)
from registry.services.registry_service import RegistryService, get_registry_service

router = APIRouter(prefix="/api/v1/properties", tags=["rights"])


# ─── Collaborators ───────────────────────────────────────────────

@router.get(
    "/{property_id}/collaborators/{identity}",
    response_model=CollaboratorOut | None,
)
async def get_collaborator(
    property_id: int,
    identity: str,
    service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_collaborator(PropertyId(property_id), Identity(identity))
    return CollaboratorOut.from_record(record) if record else None


@router.put("/{property_id}/collaborators/{identity}", response_model=OkResponse)
async def add_collaborator(
    property_id: int,
    identity: str,
    body: CollaboratorGrant,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.add_collaborator(
        caller, PropertyId(property_id), Identity(identity),
        body.role, body.permissions,
    )
    return OkResponse()


@router.get("/{property_id}/collaborators/{identity}/permissions/{permission}")
async def has_permission(
    property_id: int,
    identity: str,
    permission: str,
    service: RegistryService = Depends(get_registry_service),
):
    return {
        "granted": service.registry.has_permission(
            PropertyId(property_id), Identity(identity), permission,
        ),
    }


# ─── Revenue shares ──────────────────────────────────────────────

@router.get("/{property_id}/revenue-shares")
async def get_total_revenue_allocated(
    property_id: int, service: RegistryService = Depends(get_registry_service),
):
    return {
        "total_percentage": service.registry.total_revenue_allocated(
            PropertyId(property_id),
        ),
    }


@router.get(
    "/{property_id}/revenue-shares/{participant}",
    response_model=RevenueShareOut | None,
)
async def get_revenue_share(
    property_id: int,
    participant: str,
    service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_revenue_share(
        PropertyId(property_id), Identity(participant),
    )
    return RevenueShareOut.from_record(record) if record else None


@router.put("/{property_id}/revenue-shares/{participant}", response_model=OkResponse)
async def set_revenue_share(
    property_id: int,
    participant: str,
    body: RevenueShareUpdate,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.set_revenue_share(
        caller, PropertyId(property_id), Identity(participant), Percentage(body.percentage),
    )
    return OkResponse()


# ─── Leases ──────────────────────────────────────────────────────

@router.get("/{property_id}/leases/{lessee}", response_model=LeaseOut | None)
async def get_lease(
    property_id: int,
    lessee: str,
    service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_lease(PropertyId(property_id), Identity(lessee))
    return LeaseOut.from_record(record) if record else None


@router.put("/{property_id}/leases/{lessee}", response_model=OkResponse)
async def grant_lease(
    property_id: int,
    lessee: str,
    body: LeaseGrant,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.grant_lease(
        caller, PropertyId(property_id), Identity(lessee), body.duration, body.terms,
    )
    return OkResponse()


@router.get("/{property_id}/leases/{lessee}/active")
async def is_lease_active(
    property_id: int,
    lessee: str,
    service: RegistryService = Depends(get_registry_service),
):
    return {
        "active": service.registry.is_lease_active(
            PropertyId(property_id), Identity(lessee),
        ),
        "height": service.registry.height,
    }
