"""
api/routes/geocode.py
---------------------
POST /geocode - Resolve a free-text address to coordinates.

A lookup with no match is a normal 200 answer with success=false; only a
failing upstream call is an error (500).
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_geocoding_service
from app.schemas.geocode import GeocodeRequest, GeocodeResult
from app.services.geocoding_service import GeocodingService

router = APIRouter(tags=["Geocoding"])


@router.post(
    "/geocode",
    response_model=GeocodeResult,
    summary="Geocode an address",
)
async def geocode(
    body: GeocodeRequest,
    geocoder: Annotated[GeocodingService, Depends(get_geocoding_service)],
) -> GeocodeResult:
    return await geocoder.geocode(body)
