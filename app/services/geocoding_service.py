"""
services/geocoding_service.py
-----------------------------
Free-text address → coordinates via a Nominatim-compatible search API.

One outbound GET per lookup, restricted to the configured country, with a
timeout. No retries and no caching.

Outcomes:
  - match found      → GeocodeResult(success=True, latitude, longitude, ...)
  - zero matches     → GeocodeResult(success=False, error=...), not an error
  - transport / HTTP → UpstreamError (the route answers 500)
"""

from typing import Optional

import httpx

from app.core.config import Settings
from app.core.exceptions import UpstreamError
from app.core.logging import get_logger
from app.schemas.geocode import GeocodeRequest, GeocodeResult

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Could not find coordinates for the given address"


class GeocodingService:

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = settings.GEOCODER_URL
        self._timeout = settings.GEOCODER_TIMEOUT
        self._user_agent = settings.GEOCODER_USER_AGENT
        self._country = settings.GEOCODER_COUNTRY
        self._country_code = settings.GEOCODER_COUNTRY_CODE
        # Tests inject an httpx.MockTransport here
        self._transport = transport

    def build_query(self, request: GeocodeRequest) -> str:
        parts = [
            request.address,
            request.postal_code,
            request.city,
            request.kommun,
            self._country,
        ]
        return ", ".join(part.strip() for part in parts if part and part.strip())

    async def geocode(self, request: GeocodeRequest) -> GeocodeResult:
        query = self.build_query(request)
        logger.info("Geocoding", query=query)

        results = await self._search(query)
        if not results:
            logger.info("Geocoding found no match", query=query)
            return GeocodeResult(success=False, error=NOT_FOUND_MESSAGE)

        best = results[0]
        try:
            latitude = float(best["lat"])
            longitude = float(best["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected geocoder payload", query=query, error=str(exc))
            raise UpstreamError("Geocoding service returned an invalid result") from exc

        logger.info("Geocoding matched", latitude=latitude, longitude=longitude)
        return GeocodeResult(
            success=True,
            latitude=latitude,
            longitude=longitude,
            display_name=best.get("display_name"),
        )

    async def _search(self, query: str) -> list:
        params = {
            "format": "json",
            "q": query,
            "limit": 1,
            "countrycodes": self._country_code,
        }
        headers = {"User-Agent": self._user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._url, params=params, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error("Geocoding service error", status_code=status_code)
            raise UpstreamError(f"Geocoding service error: {status_code}") from exc
        except httpx.TimeoutException as exc:
            logger.error("Geocoding service timed out", timeout=self._timeout)
            raise UpstreamError("Geocoding service timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Geocoding request failed", error=str(exc))
            raise UpstreamError(f"Geocoding request failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Geocoding response is not JSON", error=str(exc))
            raise UpstreamError("Geocoding service returned an invalid response") from exc

        if not isinstance(payload, list):
            raise UpstreamError("Geocoding service returned an invalid response")
        return payload
