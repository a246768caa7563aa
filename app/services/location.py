# app/services/location.py
from typing import Callable, List, Optional

from app.core.logger import logger
from app.models.navigation import AuthorizationStatus, Coordinate

LocationHandler = Callable[[Coordinate], None]
AuthorizationHandler = Callable[[AuthorizationStatus], None]


class LocationProvider:
    """
    Relays device location updates to registered handlers.

    Updates are pushed in by the map page (browser geolocation). Handlers
    run synchronously on the caller's event loop, so they may write session
    state directly.
    """

    def __init__(self) -> None:
        self.last_location: Optional[Coordinate] = None
        self.authorization_status = AuthorizationStatus.NOT_DETERMINED
        self._location_handlers: List[LocationHandler] = []
        self._authorization_handlers: List[AuthorizationHandler] = []

    def on_location(self, handler: LocationHandler) -> LocationHandler:
        self._location_handlers.append(handler)
        return handler

    def on_authorization_change(self, handler: AuthorizationHandler) -> AuthorizationHandler:
        self._authorization_handlers.append(handler)
        return handler

    def publish_location(self, coordinate: Coordinate) -> None:
        self.last_location = coordinate
        for handler in self._location_handlers:
            handler(coordinate)

    def publish_authorization(self, status: AuthorizationStatus) -> None:
        if status is self.authorization_status:
            return
        logger.info(f"Location authorization changed: {status.value}")
        self.authorization_status = status
        for handler in self._authorization_handlers:
            handler(status)

    def report_error(self, message: str) -> None:
        # Non-fatal: search and routing work from the fixed origin
        logger.warning(f"Location error: {message}")
