"""
schemas/geocode.py
------------------
Request/response models for the geocoding proxy. Field names follow the
camelCase wire format of the frontend (postalCode, displayName).
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class GeocodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")
    kommun: Optional[str] = None


class GeocodeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    error: Optional[str] = None

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {k: v for k, v in handler(self).items() if v is not None}
