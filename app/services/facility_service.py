"""
services/facility_service.py
----------------------------
Business rules for facilities.

Service layer is responsible for:
  - Validating input that the schemas cannot (blank names, unknown
    facility type / kommun ids)
  - Enforcing ownership before any mutation
  - Deciding when a geometry row is written
  - Never returning HTTP responses (that's the route's job)

Storage is reached only through the FacilityRepository interface.
"""

from typing import Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.facility import Facility
from app.models.lookup import FacilityType, Kommun
from app.repositories.facility_repository import FacilityRepository
from app.schemas.facility import FacilityCreate, FacilityUpdate

logger = get_logger(__name__)

_COORDINATES = ("latitude", "longitude")
_NOT_OWNED = "Facility not found or access denied"


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required")
    return cleaned


class FacilityService:

    def __init__(self, repository: FacilityRepository) -> None:
        self.repository = repository

    # ── Reads ─────────────────────────────────────────────────────────────────

    async def list_public(
        self,
        facility_id: Optional[int] = None,
        kommun_id: Optional[int] = None,
        facility_type_id: Optional[int] = None,
    ) -> list[Facility]:
        facilities = await self.repository.list_facilities(
            facility_id=facility_id,
            kommun_id=kommun_id,
            facility_type_id=facility_type_id,
        )
        logger.info("Listed public facilities", count=len(facilities))
        return facilities

    async def list_for_map(self, kommun_id: Optional[int] = None) -> list[Facility]:
        facilities = await self.repository.list_with_coordinates(kommun_id=kommun_id)
        logger.info("Listed map facilities", count=len(facilities), kommun_id=kommun_id)
        return facilities

    async def list_owned(
        self,
        owner_id: str,
        facility_id: Optional[int] = None,
        kommun_id: Optional[int] = None,
    ) -> list[Facility]:
        facilities = await self.repository.list_facilities(
            facility_id=facility_id,
            kommun_id=kommun_id,
            owner_id=owner_id,
        )
        logger.info("Listed owned facilities", count=len(facilities), user_id=owner_id)
        return facilities

    async def get_owned(self, owner_id: str, facility_id: int) -> Facility:
        facility = await self.repository.get_owned(facility_id, owner_id)
        if facility is None:
            raise NotFoundError(_NOT_OWNED)
        return facility

    async def list_facility_types(self) -> list[FacilityType]:
        return await self.repository.list_facility_types()

    async def list_municipalities(self) -> list[Kommun]:
        return await self.repository.list_municipalities()

    # ── Writes ────────────────────────────────────────────────────────────────

    async def _check_references(self, fields: dict) -> None:
        """Reject lookup ids that point at no row; null clears the link."""
        facility_type_id = fields.get("facility_type_id")
        if facility_type_id is not None and not await self.repository.facility_type_exists(
            facility_type_id
        ):
            raise ValidationError(f"Unknown facility_type_id: {facility_type_id}")
        kommun_id = fields.get("kommun_id")
        if kommun_id is not None and not await self.repository.municipality_exists(kommun_id):
            raise ValidationError(f"Unknown kommun_id: {kommun_id}")

    async def create(self, owner_id: str, data: FacilityCreate) -> Facility:
        """
        Insert a facility owned by owner_id. A geometry row is written only
        when both coordinates are present.
        """
        fields = data.model_dump(exclude=set(_COORDINATES))
        fields["name"] = _clean_name(data.name)
        await self._check_references(fields)

        facility = await self.repository.insert(owner_id, fields)
        if data.latitude is not None and data.longitude is not None:
            await self.repository.set_point(facility, data.latitude, data.longitude)

        logger.info("Facility created", facility_id=facility.id, user_id=owner_id)
        return await self.get_owned(owner_id, facility.id)

    async def update(self, owner_id: str, facility_id: int, data: FacilityUpdate) -> Facility:
        """
        Apply a partial update. Only fields present in the body change;
        an omitted or null name keeps the stored one. Coordinates are
        written only when both are supplied and non-null.
        """
        facility = await self.get_owned(owner_id, facility_id)

        fields = data.model_dump(exclude_unset=True, exclude=set(_COORDINATES))
        if fields.get("name") is None:
            fields.pop("name", None)
        else:
            fields["name"] = _clean_name(fields["name"])
        await self._check_references(fields)

        await self.repository.apply_changes(facility, fields)
        if data.latitude is not None and data.longitude is not None:
            await self.repository.set_point(facility, data.latitude, data.longitude)

        logger.info(
            "Facility updated",
            facility_id=facility_id,
            user_id=owner_id,
            fields=sorted(fields),
        )
        return await self.get_owned(owner_id, facility_id)

    async def delete(self, owner_id: str, facility_id: int) -> int:
        facility = await self.get_owned(owner_id, facility_id)
        await self.repository.remove(facility)
        logger.info("Facility deleted", facility_id=facility_id, user_id=owner_id)
        return facility_id
