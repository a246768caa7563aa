# app/services/navigator.py
from typing import List, Optional

from app.core.config import settings
from app.core.logger import logger
from app.models.navigation import (
    Alert,
    AuthorizationStatus,
    Coordinate,
    MapLocation,
    MapRegion,
    MapSpan,
    RouteResult,
    TransportMode,
    ViewModel,
)
from app.services.directions import DirectionsClient, DirectionsError, TransitUnavailableError
from app.services.geo import (
    bounding_box,
    haversine_distance_m,
    region_for_bounding_box,
    scale_region,
)
from app.services.location import LocationProvider
from app.services.place_search import PlaceSearchClient, PlaceSearchError

SEARCH_ERROR_TITLE = "Search Error"
ROUTE_ERROR_TITLE = "Route Error"
NO_RESULTS_MESSAGE = "No results found"
TRANSIT_UNAVAILABLE_MESSAGE = "No public transit route available. Try 🚗 automobile or 🚶 walking."
ROUTE_UNAVAILABLE_MESSAGE = "Route not available. Try a different transport mode."

ORIGIN_COLOR = "red"
USER_COLOR = "blue"
DESTINATION_COLOR = "green"


class Navigator:
    """
    Session state for the map page and the operations that change it:

    - destination search (first hit only, rejected beyond the search radius)
    - route calculation from the fixed origin for the selected mode
    - transport mode changes (re-route when a destination is set)
    - camera zoom and route framing

    All methods are meant to run on a single event loop. Each search and
    route request takes a ticket; a response whose ticket has been
    superseded by a newer request is dropped without touching state.
    """

    def __init__(
        self,
        search_client: Optional[PlaceSearchClient] = None,
        directions_client: Optional[DirectionsClient] = None,
        location_provider: Optional[LocationProvider] = None,
    ) -> None:
        self.search_client = search_client or PlaceSearchClient()
        self.directions_client = directions_client or DirectionsClient()
        self.location_provider = location_provider or LocationProvider()

        self.origin = Coordinate(lat=settings.ORIGIN_LAT, lon=settings.ORIGIN_LON)
        self.reference_point = Coordinate(lat=settings.REFERENCE_LAT, lon=settings.REFERENCE_LON)

        self.region = self._default_region(self.origin)
        self.destination: Optional[Coordinate] = None
        self.mode = TransportMode.DRIVE
        self.route: Optional[RouteResult] = None
        self.alert: Optional[Alert] = None
        self.search_text = ""
        self.user_location: Optional[Coordinate] = self.location_provider.last_location

        self._search_ticket = 0
        self._route_ticket = 0

        self.location_provider.on_location(self._handle_location)
        self.location_provider.on_authorization_change(self._handle_authorization)

        logger.info(
            f"Navigator initialised at origin ({self.origin.lat:.6f}, {self.origin.lon:.6f})"
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def search(self, query: str) -> None:
        """
        Look up query and, if the first hit is close enough, make it the
        destination and route to it. Otherwise raise a "No results found"
        alert and leave destination, region and route as they were.
        """
        query = query.strip()
        if not query:
            return

        self.search_text = query
        self._search_ticket += 1
        ticket = self._search_ticket

        try:
            matches = await self.search_client.search(query, self.region)
        except PlaceSearchError as exc:
            if self._is_stale_search(ticket):
                return
            logger.warning(f"Search for {query!r} failed: {exc}")
            self._show_alert(SEARCH_ERROR_TITLE, NO_RESULTS_MESSAGE)
            return

        if self._is_stale_search(ticket):
            return

        if not matches:
            logger.info(f"Search for {query!r} returned no results")
            self._show_alert(SEARCH_ERROR_TITLE, NO_RESULTS_MESSAGE)
            return

        match = matches[0]
        distance_km = haversine_distance_m(match.coordinate, self.reference_point) / 1000.0
        if distance_km > settings.SEARCH_RADIUS_KM:
            logger.info(
                f"Rejecting {match.name!r}: {distance_km:.1f} km from reference point "
                f"(limit {settings.SEARCH_RADIUS_KM:.0f} km)"
            )
            self._show_alert(SEARCH_ERROR_TITLE, NO_RESULTS_MESSAGE)
            return

        logger.info(f"Destination set to {match.name!r} ({distance_km:.1f} km from reference)")
        self.destination = match.coordinate
        self.region = self._default_region(match.coordinate)

        await self.calculate_route()

    async def calculate_route(self) -> None:
        """
        Request a route from the origin to the destination for the current
        mode. Success replaces the stored route and frames it; failure
        clears it and raises a mode-specific alert.
        """
        destination = self.destination
        if destination is None:
            return

        mode = self.mode
        self._route_ticket += 1
        ticket = self._route_ticket

        try:
            routes = await self.directions_client.route(self.origin, destination, mode)
        except DirectionsError as exc:
            if self._is_stale_route(ticket):
                return
            logger.warning(f"Route calculation ({mode.value}) failed: {exc}")
            self.route = None
            if isinstance(exc, TransitUnavailableError) or mode is TransportMode.TRANSIT:
                self._show_alert(ROUTE_ERROR_TITLE, TRANSIT_UNAVAILABLE_MESSAGE)
            else:
                self._show_alert(ROUTE_ERROR_TITLE, ROUTE_UNAVAILABLE_MESSAGE)
            return

        if self._is_stale_route(ticket):
            return

        if not routes:
            logger.info(f"No {mode.value} route found; clearing route")
            self.route = None
            return

        self.route = routes[0]
        logger.info(
            f"Route ({mode.value}): {self.route.distance_text}, {self.route.duration_text}, "
            f"{len(self.route.geometry)} points"
        )
        self._fit_route_in_view(self.route)

    async def set_mode(self, mode: TransportMode) -> None:
        if mode is self.mode:
            return

        logger.info(f"Transport mode changed: {self.mode.value} -> {mode.value}")
        self.mode = mode
        if self.destination is not None:
            await self.calculate_route()

    def zoom_in(self) -> None:
        self.region = self._scaled(0.5)

    def zoom_out(self) -> None:
        self.region = self._scaled(2.0)

    def dismiss_alert(self) -> None:
        self.alert = None

    def view_model(self) -> ViewModel:
        return ViewModel(
            region=self.region,
            markers=self._markers(),
            route=self.route,
            mode=self.mode,
            destination=self.destination,
            user_location=self.user_location,
            authorization_status=self.location_provider.authorization_status,
            search_text=self.search_text,
            alert=self.alert,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _markers(self) -> List[MapLocation]:
        markers = [
            MapLocation(
                id="origin",
                coordinate=self.origin,
                label=settings.ORIGIN_LABEL,
                color=ORIGIN_COLOR,
            )
        ]
        if self.user_location is not None:
            markers.append(
                MapLocation(id="user", coordinate=self.user_location, label="You", color=USER_COLOR)
            )
        if self.destination is not None:
            markers.append(
                MapLocation(
                    id="destination",
                    coordinate=self.destination,
                    label="Destination",
                    color=DESTINATION_COLOR,
                )
            )
        return markers

    def _fit_route_in_view(self, route: RouteResult) -> None:
        if not route.geometry:
            return
        self.region = region_for_bounding_box(
            bounding_box(route.geometry),
            padding_ratio=settings.ROUTE_PADDING_RATIO,
            min_span=settings.MIN_SPAN_DEGREES,
            max_lat_span=settings.MAX_LAT_SPAN_DEGREES,
            max_lon_span=settings.MAX_LON_SPAN_DEGREES,
        )

    def _scaled(self, factor: float) -> MapRegion:
        return scale_region(
            self.region,
            factor,
            min_span=settings.MIN_SPAN_DEGREES,
            max_lat_span=settings.MAX_LAT_SPAN_DEGREES,
            max_lon_span=settings.MAX_LON_SPAN_DEGREES,
        )

    def _show_alert(self, title: str, message: str) -> None:
        self.alert = Alert(title=title, message=message)

    def _handle_location(self, coordinate: Coordinate) -> None:
        self.user_location = coordinate

    def _handle_authorization(self, status: AuthorizationStatus) -> None:
        # A denied permission hides the last known position
        if status is AuthorizationStatus.DENIED:
            self.user_location = None

    def _is_stale_search(self, ticket: int) -> bool:
        if ticket != self._search_ticket:
            logger.info(f"Discarding stale search response (ticket {ticket})")
            return True
        return False

    def _is_stale_route(self, ticket: int) -> bool:
        if ticket != self._route_ticket:
            logger.info(f"Discarding stale route response (ticket {ticket})")
            return True
        return False

    @staticmethod
    def _default_region(center: Coordinate) -> MapRegion:
        span = settings.DEFAULT_SPAN_DEGREES
        return MapRegion(center=center, span=MapSpan(lat_delta=span, lon_delta=span))
