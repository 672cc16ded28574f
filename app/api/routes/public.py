"""
api/routes/public.py
--------------------
Unauthenticated read endpoints.

GET /facilities       - Facilities with nested type, kommun and geometry.
GET /facilities-map   - Lean projection, only facilities with coordinates.
GET /municipalities   - Full kommun lookup table.
GET /facility-types   - Full facility type lookup table.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_facility_service
from app.schemas.common import Envelope, ok
from app.schemas.facility import FacilityMapRead, FacilityRead
from app.schemas.lookup import FacilityTypeRead, KommunRead
from app.services.facility_service import FacilityService

router = APIRouter(tags=["Public"])


@router.get(
    "/facilities",
    response_model=Envelope[list[FacilityRead]],
    summary="List facilities",
)
async def list_facilities(
    service: Annotated[FacilityService, Depends(get_facility_service)],
    id: Optional[int] = Query(default=None, description="Facility id"),
    kommun_id: Optional[int] = Query(default=None),
    facility_type_id: Optional[int] = Query(default=None),
) -> Envelope:
    """All filters are optional and combined with AND. Ordered by name."""
    facilities = await service.list_public(
        facility_id=id,
        kommun_id=kommun_id,
        facility_type_id=facility_type_id,
    )
    return ok([FacilityRead.model_validate(f) for f in facilities], with_count=True)


@router.get(
    "/facilities-map",
    response_model=Envelope[list[FacilityMapRead]],
    summary="List facilities for map display",
)
async def list_map_facilities(
    service: Annotated[FacilityService, Depends(get_facility_service)],
    kommun_id: Optional[int] = Query(default=None),
) -> Envelope:
    facilities = await service.list_for_map(kommun_id=kommun_id)
    return ok([FacilityMapRead.model_validate(f) for f in facilities], with_count=True)


@router.get(
    "/municipalities",
    response_model=Envelope[list[KommunRead]],
    summary="List municipalities",
)
async def list_municipalities(
    service: Annotated[FacilityService, Depends(get_facility_service)],
) -> Envelope:
    rows = await service.list_municipalities()
    return ok([KommunRead.model_validate(r) for r in rows], with_count=True)


@router.get(
    "/facility-types",
    response_model=Envelope[list[FacilityTypeRead]],
    summary="List facility types",
)
async def list_facility_types(
    service: Annotated[FacilityService, Depends(get_facility_service)],
) -> Envelope:
    rows = await service.list_facility_types()
    return ok([FacilityTypeRead.model_validate(r) for r in rows], with_count=True)
