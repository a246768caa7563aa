# app/services/directions.py
from typing import Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.logger import logger
from app.models.navigation import Coordinate, RouteResult, TransportMode

# Transport mode -> OSRM routing profile. OSRM has no public transit profile.
TRANSPORT_PROFILES: Dict[TransportMode, Optional[str]] = {
    TransportMode.DRIVE: "driving",
    TransportMode.TRANSIT: None,
    TransportMode.WALK: "walking",
    TransportMode.CYCLE: "cycling",
}


class DirectionsError(Exception):
    """Raised when the directions service cannot produce a route."""


class TransitUnavailableError(DirectionsError):
    """Raised when no public transit routing is available."""


class DirectionsClient:
    """
    Turn-by-turn route lookup against an OSRM-compatible HTTP API.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        alternatives: Optional[bool] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.OSRM_URL).rstrip("/")
        self.alternatives = (
            alternatives if alternatives is not None else settings.OSRM_ALTERNATIVES
        )
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_S
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": settings.USER_AGENT},
            transport=self._transport,
        )

    async def route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: TransportMode,
    ) -> List[RouteResult]:
        """
        Candidate routes from origin to destination, best first.

        An empty list means the service answered but found no route.
        """
        profile = TRANSPORT_PROFILES[mode]
        if profile is None:
            raise TransitUnavailableError(f"No routing profile for mode '{mode.value}'.")

        # OSRM expects "lon,lat;lon,lat"
        coordinate_str = f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        url = f"{self.base_url}/route/v1/{profile}/{coordinate_str}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "alternatives": "true" if self.alternatives else "false",
            "steps": "false",
        }

        logger.info(
            f"Requesting {profile} route ({origin.lat:.6f}, {origin.lon:.6f}) -> "
            f"({destination.lat:.6f}, {destination.lon:.6f})"
        )

        async with self._client() as client:
            try:
                response = await client.get(url, params=params)
                data = response.json()
            except httpx.HTTPError as exc:
                logger.warning(f"Directions request failed: {exc}")
                raise DirectionsError(f"Directions request failed: {exc}") from exc
            except ValueError as exc:
                logger.warning(f"Directions service returned invalid JSON: {exc}")
                raise DirectionsError("Directions service returned invalid JSON.") from exc

        # OSRM reports NoRoute with HTTP 400 and a JSON body
        code = data.get("code") if isinstance(data, dict) else None
        if code == "NoRoute":
            logger.info("Directions service found no route")
            return []
        if code != "Ok":
            message = data.get("message", "Unknown error") if isinstance(data, dict) else data
            raise DirectionsError(f"Directions service error ({code}): {message}")

        routes = [self._parse_route(item) for item in data.get("routes") or []]
        logger.info(f"Directions service returned {len(routes)} route(s)")
        return routes

    @staticmethod
    def _parse_route(item: dict) -> RouteResult:
        try:
            # GeoJSON coordinates are [lon, lat]
            geometry = [
                Coordinate(lat=float(lat), lon=float(lon))
                for lon, lat in item["geometry"]["coordinates"]
            ]
            return RouteResult(
                distance_m=float(item["distance"]),
                duration_s=float(item["duration"]),
                geometry=geometry,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DirectionsError(f"Malformed route in directions response: {exc}") from exc
