# app/services/place_search.py
from typing import List, Optional

import httpx

from app.core.config import settings
from app.core.logger import logger
from app.models.navigation import Coordinate, MapRegion, PlaceMatch
from app.services.geo import region_viewbox


class PlaceSearchError(Exception):
    """Raised when the place-search service cannot answer a query."""


class PlaceSearchClient:
    """
    Free-text place search against a Nominatim-compatible HTTP API.

    Results come back ranked by the service; the current map region is
    passed as a viewbox so nearby places rank higher, without excluding
    anything outside it.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.NOMINATIM_URL).rstrip("/")
        self.limit = limit if limit is not None else settings.SEARCH_RESULT_LIMIT
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_S
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": settings.USER_AGENT},
            transport=self._transport,
        )

    async def search(self, query: str, region: MapRegion) -> List[PlaceMatch]:
        params = {
            "q": query,
            "format": "jsonv2",
            "limit": self.limit,
            "viewbox": region_viewbox(region),
            "bounded": 0,
        }
        url = f"{self.base_url}/search"

        async with self._client() as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPError as exc:
                logger.warning(f"Place search for {query!r} failed: {exc}")
                raise PlaceSearchError(f"Place search failed: {exc}") from exc
            except ValueError as exc:
                logger.warning(f"Place search for {query!r} returned invalid JSON: {exc}")
                raise PlaceSearchError("Place search returned invalid JSON.") from exc

        if not isinstance(data, list):
            raise PlaceSearchError("Place search returned an unexpected payload.")

        matches = [self._parse_item(item) for item in data]
        logger.info(f"Place search for {query!r} returned {len(matches)} result(s)")
        return matches

    @staticmethod
    def _parse_item(item: dict) -> PlaceMatch:
        try:
            coordinate = Coordinate(lat=float(item["lat"]), lon=float(item["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise PlaceSearchError(f"Malformed place search result: {item!r}") from exc

        name = item.get("name") or item.get("display_name") or ""
        return PlaceMatch(name=name, coordinate=coordinate)
