"""
dependencies.py
---------------
FastAPI dependency injection functions.

Authentication flow:
  1. HTTPBearer extracts the token from the Authorization header. It is
     built with auto_error=False so that a missing header raises our own
     Unauthenticated error and is answered with the uniform envelope.
  2. decode_access_token validates and parses the JWT (no DB round-trip)
     and yields the caller's user_id / email.

Services are constructed per request from the request-scoped session and
the app-level collaborators stored on app.state.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import Unauthenticated
from app.core.security import decode_access_token
from app.db.session import DbSession
from app.repositories.facility_repository import SqlAlchemyFacilityRepository
from app.schemas.user import TokenClaims
from app.services.facility_service import FacilityService
from app.services.geocoding_service import GeocodingService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> TokenClaims:
    """
    Return the identity encoded in the bearer token.
    Raises 401 if the header is missing or the token is invalid/expired.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)


def get_facility_service(
    db: DbSession,
) -> FacilityService:
    return FacilityService(SqlAlchemyFacilityRepository(db))


def get_geocoding_service(request: Request) -> GeocodingService:
    return request.app.state.geocoder
