# app/models/navigation.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Coordinate(BaseModel):
    """
    Simple latitude/longitude coordinate (degrees). Immutable.
    """
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class MapSpan(BaseModel):
    """
    Visible extent of the map, in degrees of latitude/longitude.
    """
    lat_delta: float = Field(gt=0.0)
    lon_delta: float = Field(gt=0.0)


class MapRegion(BaseModel):
    """
    Camera region: a center plus the visible span around it.
    """
    center: Coordinate
    span: MapSpan


class BoundingBox(BaseModel):
    """
    Smallest axis-aligned rectangle enclosing a set of coordinates.
    """
    south: float
    west: float
    north: float
    east: float


class TransportMode(str, Enum):
    DRIVE = "drive"
    TRANSIT = "transit"
    WALK = "walk"
    CYCLE = "cycle"

    @property
    def symbol(self) -> str:
        return MODE_SYMBOLS[self]


MODE_SYMBOLS = {
    TransportMode.DRIVE: "🚗",
    TransportMode.TRANSIT: "🚇",
    TransportMode.WALK: "🚶",
    TransportMode.CYCLE: "🚴",
}


class AuthorizationStatus(str, Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"


class MapLocation(BaseModel):
    """
    A point marker on the map. Derived from session state on every render.
    """
    id: str
    coordinate: Coordinate
    label: str
    color: str


class PlaceMatch(BaseModel):
    """
    One hit returned by the place-search service.
    """
    name: str
    coordinate: Coordinate


class RouteResult(BaseModel):
    """
    One route returned by the directions service.

    geometry is the ordered path from origin to destination.
    """
    distance_m: float
    duration_s: float
    geometry: List[Coordinate]

    @computed_field
    @property
    def distance_text(self) -> str:
        return f"{self.distance_m / 1000.0:.2f} km"

    @computed_field
    @property
    def duration_text(self) -> str:
        return f"{self.duration_s / 60.0:.0f} min"


class Alert(BaseModel):
    """
    User-visible error notice, shown until dismissed.
    """
    title: str
    message: str


class ViewModel(BaseModel):
    """
    Everything the map page needs to redraw itself.
    """
    region: MapRegion
    markers: List[MapLocation]
    route: Optional[RouteResult] = None
    mode: TransportMode
    destination: Optional[Coordinate] = None
    user_location: Optional[Coordinate] = None
    authorization_status: AuthorizationStatus
    search_text: str = ""
    alert: Optional[Alert] = None


# ---------------------------------------------------------------------- #
# Request bodies
# ---------------------------------------------------------------------- #


class SearchRequest(BaseModel):
    query: str = Field(max_length=512)


class ModeRequest(BaseModel):
    mode: TransportMode


class AuthorizationRequest(BaseModel):
    status: AuthorizationStatus


class LocationErrorRequest(BaseModel):
    message: str


class TransportModeInfo(BaseModel):
    mode: TransportMode
    symbol: str
