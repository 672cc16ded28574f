"""
schemas/facility.py
-------------------
Pydantic request/response models for facilities.

Naming convention:
  FacilityCreate / FacilityUpdate → inbound request bodies
  FacilityRead                    → public list record
  OwnedFacilityRead               → management view (adds created_by)
  FacilityMapRead                 → lean projection for map markers

Rows are mapped from ORM objects with model_validate(from_attributes),
which is the single boundary between storage rows and API records.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.lookup import FacilityTypeRead, KommunRead


class FacilityPayload(BaseModel):
    external_id: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=255)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    city: Optional[str] = Field(default=None, max_length=255)
    facility_type_id: Optional[int] = None
    kommun_id: Optional[int] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class FacilityCreate(FacilityPayload):
    name: str = Field(..., max_length=255, examples=["Centralbadet"])


class FacilityUpdate(FacilityPayload):
    """
    Partial update. Only fields present in the request body are applied;
    use model_fields_set / exclude_unset to tell "omitted" from "null".
    """
    name: Optional[str] = Field(default=None, max_length=255)


class FacilityGeometryRead(BaseModel):
    latitude: float
    longitude: float
    geom_type: str

    model_config = {"from_attributes": True}


class FacilityRead(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    external_id: Optional[str] = None
    facility_type_id: Optional[int] = None
    kommun_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    facility_type: Optional[FacilityTypeRead] = None
    kommun: Optional[KommunRead] = None
    facility_geometry: list[FacilityGeometryRead] = []

    model_config = {"from_attributes": True}


class OwnedFacilityRead(FacilityRead):
    created_by: str


# ── Map projection ────────────────────────────────────────────────────────────

class MapFacilityType(BaseModel):
    code: str
    label: str

    model_config = {"from_attributes": True}


class MapKommun(BaseModel):
    kommun_namn: str

    model_config = {"from_attributes": True}


class MapPoint(BaseModel):
    latitude: float
    longitude: float

    model_config = {"from_attributes": True}


class FacilityMapRead(BaseModel):
    id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    facility_type: Optional[MapFacilityType] = None
    kommun: Optional[MapKommun] = None
    facility_geometry: list[MapPoint]

    model_config = {"from_attributes": True}


class FacilityRef(BaseModel):
    id: int
