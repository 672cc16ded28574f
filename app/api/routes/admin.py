"""
api/routes/admin.py
-------------------
Facility management for the authenticated owner.

GET    /admin/facilities        - Caller's own facilities (id / kommun_id filters).
GET    /admin/facilities/{id}   - One owned facility.
POST   /admin/facilities        - Create a facility owned by the caller.
PUT    /admin/facilities/{id}   - Partial update of an owned facility.
DELETE /admin/facilities/{id}   - Delete an owned facility.

Ownership comes from the token, never from the request body. A facility
owned by someone else is reported exactly like a missing one (404).
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_user, get_facility_service
from app.schemas.common import Envelope, ok
from app.schemas.facility import FacilityCreate, FacilityRef, FacilityUpdate, OwnedFacilityRead
from app.schemas.user import TokenClaims
from app.services.facility_service import FacilityService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/facilities",
    response_model=Envelope[list[OwnedFacilityRead]],
    summary="List the caller's facilities",
)
async def list_own_facilities(
    service: Annotated[FacilityService, Depends(get_facility_service)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    id: Optional[int] = Query(default=None, description="Facility id"),
    kommun_id: Optional[int] = Query(default=None),
) -> Envelope:
    facilities = await service.list_owned(
        current_user.user_id, facility_id=id, kommun_id=kommun_id
    )
    return ok([OwnedFacilityRead.model_validate(f) for f in facilities], with_count=True)


@router.get(
    "/facilities/{facility_id}",
    response_model=Envelope[OwnedFacilityRead],
    summary="Get one of the caller's facilities",
)
async def get_own_facility(
    facility_id: int,
    service: Annotated[FacilityService, Depends(get_facility_service)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> Envelope:
    facility = await service.get_owned(current_user.user_id, facility_id)
    return ok(OwnedFacilityRead.model_validate(facility))


@router.post(
    "/facilities",
    response_model=Envelope[OwnedFacilityRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a facility",
)
async def create_facility(
    body: FacilityCreate,
    service: Annotated[FacilityService, Depends(get_facility_service)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> Envelope:
    """Coordinates are stored only when both latitude and longitude are given."""
    facility = await service.create(current_user.user_id, body)
    return ok(OwnedFacilityRead.model_validate(facility))


@router.put(
    "/facilities/{facility_id}",
    response_model=Envelope[OwnedFacilityRead],
    summary="Update a facility",
)
async def update_facility(
    facility_id: int,
    body: FacilityUpdate,
    service: Annotated[FacilityService, Depends(get_facility_service)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> Envelope:
    """Fields left out of the body keep their stored values."""
    facility = await service.update(current_user.user_id, facility_id, body)
    return ok(OwnedFacilityRead.model_validate(facility))


@router.delete(
    "/facilities/{facility_id}",
    response_model=Envelope[FacilityRef],
    summary="Delete a facility",
)
async def delete_facility(
    facility_id: int,
    service: Annotated[FacilityService, Depends(get_facility_service)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> Envelope:
    deleted_id = await service.delete(current_user.user_id, facility_id)
    return ok(FacilityRef(id=deleted_id))
