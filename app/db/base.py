"""
db/base.py
----------
Declarative base and shared mixins for the registry schema.

Key conventions:
  - profiles (users) use string UUID primary keys from generate_uuid();
    that string is the token subject and facility.created_by.
  - facility, facility_type and kommun use autoincrement integer ids; the
    facility_geometry row reuses its facility's id as primary key.
  - TimestampMixin adds server-side created_at / updated_at columns to
    profiles and facility; updates refresh updated_at on the server.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class TimestampMixin:
    """Adds server-side created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def generate_uuid() -> str:
    return str(uuid.uuid4())
