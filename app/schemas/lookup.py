"""
schemas/lookup.py
-----------------
Read models for the facility_type and kommun lookup tables.
"""

from typing import Optional

from pydantic import BaseModel


class FacilityTypeRead(BaseModel):
    id: int
    code: str
    label: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class KommunRead(BaseModel):
    id: int
    kommun_kod: str
    kommun_namn: str

    model_config = {"from_attributes": True}
