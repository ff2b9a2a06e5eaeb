"""Property Routes — registration, details, ownership, lifecycle, status, category, versions.

Invariants:
    - Caller identity comes from the X-Caller header on every mutation
    - Mutations delegate to RegistryService; RegistryError propagates to the
      global handler (403/404/409/400 with the domain error code)
    - Reads never 404 for a missing record: they return null
    - Static paths (/next-id, /height) registered before /{property_id}

Design Decisions:
    - No business logic here: routes translate HTTP ↔ service calls only
"""

from fastapi import APIRouter, Depends, Header, status

from registry.core.domain_types import Identity, PropertyId
from registry.schemas.property import (
    CategoryOut, CategoryUpdate, NewVersion, OkResponse, OwnershipTransfer,
    PropertyCreate, PropertyOut, PropertyUpdate, RegisterResponse, StatusOut,
    StatusUpdate, VersionOut,
)
from registry.services.registry_service import RegistryService, get_registry_service

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def caller_identity(x_caller: str = Header(min_length=1)) -> Identity:
    """Resolve the acting identity from the X-Caller header."""
    return Identity(x_caller)


@router.post(
    "", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED,
)
async def register_property(
    body: PropertyCreate,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    property_id = await service.register_property(
        caller, body.address, body.value, body.rental_income, body.description,
    )
    return RegisterResponse(property_id=property_id)


@router.get("/next-id")
async def get_next_property_id(
    service: RegistryService = Depends(get_registry_service),
):
    return {"next_property_id": service.registry.get_next_property_id()}


@router.get("/height")
async def get_height(service: RegistryService = Depends(get_registry_service)):
    return {"height": service.registry.height}


@router.get("/{property_id}", response_model=PropertyOut | None)
async def get_property(
    property_id: int, service: RegistryService = Depends(get_registry_service),
):
    prop = service.registry.get_property(PropertyId(property_id))
    return PropertyOut.from_record(prop) if prop else None


@router.patch("/{property_id}", response_model=OkResponse)
async def update_property(
    property_id: int,
    body: PropertyUpdate,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.update_property(caller, PropertyId(property_id), body.to_patch())
    return OkResponse()


@router.post("/{property_id}/transfer", response_model=OkResponse)
async def transfer_ownership(
    property_id: int,
    body: OwnershipTransfer,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.transfer_ownership(
        caller, PropertyId(property_id), Identity(body.new_owner),
    )
    return OkResponse()


@router.post("/{property_id}/deactivate", response_model=OkResponse)
async def deactivate_property(
    property_id: int,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.deactivate_property(caller, PropertyId(property_id))
    return OkResponse()


@router.get("/{property_id}/owner/{identity}")
async def verify_ownership(
    property_id: int,
    identity: str,
    service: RegistryService = Depends(get_registry_service),
):
    return {
        "is_owner": service.registry.verify_ownership(
            PropertyId(property_id), Identity(identity),
        ),
    }


@router.get("/{property_id}/status", response_model=StatusOut | None)
async def get_status(
    property_id: int, service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_status(PropertyId(property_id))
    return StatusOut.from_record(record) if record else None


@router.put("/{property_id}/status", response_model=OkResponse)
async def update_status(
    property_id: int,
    body: StatusUpdate,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.update_status(
        caller, PropertyId(property_id), body.status, body.visibility,
    )
    return OkResponse()


@router.get("/{property_id}/category", response_model=CategoryOut | None)
async def get_category(
    property_id: int, service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_category(PropertyId(property_id))
    return CategoryOut.from_record(record) if record else None


@router.put("/{property_id}/category", response_model=OkResponse)
async def add_category(
    property_id: int,
    body: CategoryUpdate,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.add_category(caller, PropertyId(property_id), body.category, body.tags)
    return OkResponse()


@router.get("/{property_id}/versions/{version}", response_model=VersionOut | None)
async def get_version(
    property_id: int,
    version: int,
    service: RegistryService = Depends(get_registry_service),
):
    record = service.registry.get_version(PropertyId(property_id), version)
    return VersionOut.from_record(record) if record else None


@router.put("/{property_id}/versions/{version}", response_model=OkResponse)
async def register_new_version(
    property_id: int,
    version: int,
    body: NewVersion,
    caller: Identity = Depends(caller_identity),
    service: RegistryService = Depends(get_registry_service),
):
    await service.register_new_version(
        caller, PropertyId(property_id), body.new_value, version, body.notes,
    )
    return OkResponse()
