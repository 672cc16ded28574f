"""
repositories/facility_repository.py
-----------------------------------
Data access for facilities and their lookup tables.

FacilityRepository is the storage contract the service layer depends on;
SqlAlchemyFacilityRepository implements it on an injected AsyncSession.
Another storage backend only has to implement the same abstract methods.

Repository methods never commit: the request-scoped session commits once
the whole operation has succeeded, so a facility and its geometry are
written atomically.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.facility import POINT, Facility, FacilityGeometry
from app.models.lookup import FacilityType, Kommun


class FacilityRepository(ABC):

    @abstractmethod
    async def list_facilities(
        self,
        *,
        facility_id: Optional[int] = None,
        kommun_id: Optional[int] = None,
        facility_type_id: Optional[int] = None,
        owner_id: Optional[str] = None,
    ) -> list[Facility]:
        """Facilities matching every supplied filter, ordered by name."""

    @abstractmethod
    async def list_with_coordinates(self, *, kommun_id: Optional[int] = None) -> list[Facility]:
        """Facilities that have a geometry with both coordinates, ordered by name."""

    @abstractmethod
    async def get_owned(self, facility_id: int, owner_id: str) -> Optional[Facility]:
        ...

    @abstractmethod
    async def insert(self, owner_id: str, fields: dict[str, Any]) -> Facility:
        ...

    @abstractmethod
    async def apply_changes(self, facility: Facility, fields: dict[str, Any]) -> Facility:
        ...

    @abstractmethod
    async def set_point(self, facility: Facility, latitude: float, longitude: float) -> None:
        """Create the facility's geometry, or overwrite its coordinates."""

    @abstractmethod
    async def remove(self, facility: Facility) -> None:
        ...

    @abstractmethod
    async def list_facility_types(self) -> list[FacilityType]:
        ...

    @abstractmethod
    async def list_municipalities(self) -> list[Kommun]:
        ...

    @abstractmethod
    async def facility_type_exists(self, facility_type_id: int) -> bool:
        ...

    @abstractmethod
    async def municipality_exists(self, kommun_id: int) -> bool:
        ...


class SqlAlchemyFacilityRepository(FacilityRepository):

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _joined() -> Select:
        return select(Facility).options(
            selectinload(Facility.facility_type),
            selectinload(Facility.kommun),
            selectinload(Facility.facility_geometry),
        )

    async def list_facilities(
        self,
        *,
        facility_id: Optional[int] = None,
        kommun_id: Optional[int] = None,
        facility_type_id: Optional[int] = None,
        owner_id: Optional[str] = None,
    ) -> list[Facility]:
        query = self._joined()
        if owner_id is not None:
            query = query.where(Facility.created_by == owner_id)
        if facility_id is not None:
            query = query.where(Facility.id == facility_id)
        if kommun_id is not None:
            query = query.where(Facility.kommun_id == kommun_id)
        if facility_type_id is not None:
            query = query.where(Facility.facility_type_id == facility_type_id)

        result = await self.db.execute(query.order_by(Facility.name))
        return list(result.scalars().all())

    async def list_with_coordinates(self, *, kommun_id: Optional[int] = None) -> list[Facility]:
        query = (
            self._joined()
            .join(FacilityGeometry, FacilityGeometry.facility_id == Facility.id)
            .where(
                FacilityGeometry.latitude.is_not(None),
                FacilityGeometry.longitude.is_not(None),
            )
        )
        if kommun_id is not None:
            query = query.where(Facility.kommun_id == kommun_id)

        result = await self.db.execute(query.order_by(Facility.name))
        return list(result.scalars().all())

    async def get_owned(self, facility_id: int, owner_id: str) -> Optional[Facility]:
        # populate_existing refreshes server-side timestamps after a flush
        result = await self.db.execute(
            self._joined()
            .where(Facility.id == facility_id, Facility.created_by == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def insert(self, owner_id: str, fields: dict[str, Any]) -> Facility:
        facility = Facility(created_by=owner_id, **fields)
        self.db.add(facility)
        await self.db.flush()
        return facility

    async def apply_changes(self, facility: Facility, fields: dict[str, Any]) -> Facility:
        for key, value in fields.items():
            setattr(facility, key, value)
        facility.updated_at = func.now()
        await self.db.flush()
        return facility

    async def set_point(self, facility: Facility, latitude: float, longitude: float) -> None:
        existing = await self.db.get(FacilityGeometry, facility.id)
        if existing is not None:
            existing.latitude = latitude
            existing.longitude = longitude
            existing.geom_type = POINT
        else:
            self.db.add(
                FacilityGeometry(
                    facility_id=facility.id,
                    latitude=latitude,
                    longitude=longitude,
                    geom_type=POINT,
                )
            )
        await self.db.flush()

    async def remove(self, facility: Facility) -> None:
        await self.db.delete(facility)
        await self.db.flush()

    async def list_facility_types(self) -> list[FacilityType]:
        result = await self.db.execute(select(FacilityType).order_by(FacilityType.label))
        return list(result.scalars().all())

    async def list_municipalities(self) -> list[Kommun]:
        result = await self.db.execute(select(Kommun).order_by(Kommun.kommun_namn))
        return list(result.scalars().all())

    async def facility_type_exists(self, facility_type_id: int) -> bool:
        return await self.db.get(FacilityType, facility_type_id) is not None

    async def municipality_exists(self, kommun_id: int) -> bool:
        return await self.db.get(Kommun, kommun_id) is not None
