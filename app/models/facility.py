"""
models/facility.py
------------------
Facility and FacilityGeometry ORM models.

Ownership: created_by is set once at insert and never updated; every
authenticated mutation filters on it.

Geometry: facility_id is both primary key and foreign key, so a facility
has at most one geometry row. The relationship is still exposed as a list
because that is the shape the API returns (zero or one point).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

POINT = "POINT"


class Facility(Base, TimestampMixin):
    __tablename__ = "facility"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[Optional[str]] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[Optional[str]] = mapped_column(String(255))
    postal_code: Mapped[Optional[str]] = mapped_column(String(20))
    city: Mapped[Optional[str]] = mapped_column(String(255))

    facility_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("facility_type.id", ondelete="SET NULL"), index=True
    )
    kommun_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("kommun.id", ondelete="SET NULL"), index=True
    )
    created_by: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    facility_type: Mapped[Optional["FacilityType"]] = relationship("FacilityType")  # noqa: F821
    kommun: Mapped[Optional["Kommun"]] = relationship("Kommun")  # noqa: F821
    owner: Mapped["User"] = relationship("User", back_populates="facilities")  # noqa: F821
    facility_geometry: Mapped[list["FacilityGeometry"]] = relationship(
        "FacilityGeometry",
        back_populates="facility",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Facility id={self.id} name={self.name}>"


class FacilityGeometry(Base):
    __tablename__ = "facility_geometry"

    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facility.id", ondelete="CASCADE"), primary_key=True
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    geom_type: Mapped[str] = mapped_column(String(20), nullable=False, default=POINT)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    facility: Mapped["Facility"] = relationship("Facility", back_populates="facility_geometry")

    def __repr__(self) -> str:
        return (
            f"<FacilityGeometry facility_id={self.facility_id} "
            f"lat={self.latitude} lon={self.longitude}>"
        )
