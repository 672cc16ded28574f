"""
models/__init__.py
------------------
Re-export all models so schema tooling can import Base and discover
all tables via a single import:

    from app.models import Base
"""

from app.db.base import Base
from app.models.facility import Facility, FacilityGeometry
from app.models.lookup import FacilityType, Kommun
from app.models.user import User

__all__ = ["Base", "Facility", "FacilityGeometry", "FacilityType", "Kommun", "User"]
