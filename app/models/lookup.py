"""
models/lookup.py
----------------
Read-only lookup tables referenced by facilities.

Rows are seeded out of band; the API never writes or deletes them.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class FacilityType(Base):
    __tablename__ = "facility_type"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<FacilityType id={self.id} code={self.code}>"


class Kommun(Base):
    """A Swedish municipality."""

    __tablename__ = "kommun"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kommun_kod: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    kommun_namn: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Kommun id={self.id} kommun_kod={self.kommun_kod}>"
