# tests/conftest.py
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import app" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from app.api.v1.routes_navigation import get_navigator  # noqa: E402
from app.main import app  # noqa: E402
from app.models.navigation import Coordinate, PlaceMatch, RouteResult  # noqa: E402
from app.services.navigator import Navigator  # noqa: E402

ORIGIN = Coordinate(lat=45.4919, lon=-73.5794)
MONTREAL = PlaceMatch(name="Montréal", coordinate=Coordinate(lat=45.5019, lon=-73.5674))
PARIS = PlaceMatch(name="Paris", coordinate=Coordinate(lat=48.8566, lon=2.3522))


def make_route(distance_m: float = 1850.0, duration_s: float = 420.0) -> RouteResult:
    return RouteResult(
        distance_m=distance_m,
        duration_s=duration_s,
        geometry=[
            ORIGIN,
            Coordinate(lat=45.4960, lon=-73.5700),
            MONTREAL.coordinate,
        ],
    )


class FakeSearchClient:
    """Place search stand-in: returns canned matches or raises a canned error."""

    def __init__(self, matches=None, error=None):
        self.matches = list(matches or [])
        self.error = error
        self.calls = []

    async def search(self, query, region):
        self.calls.append((query, region))
        if self.error is not None:
            raise self.error
        return list(self.matches)


class FakeDirectionsClient:
    """Directions stand-in: returns canned routes or raises a canned error."""

    def __init__(self, routes=None, error=None):
        self.routes = [make_route()] if routes is None else list(routes)
        self.error = error
        self.calls = []

    async def route(self, origin, destination, mode):
        self.calls.append((origin, destination, mode))
        if self.error is not None:
            raise self.error
        return list(self.routes)


@pytest.fixture
def search_client():
    return FakeSearchClient(matches=[MONTREAL])


@pytest.fixture
def directions_client():
    return FakeDirectionsClient()


@pytest.fixture
def navigator(search_client, directions_client):
    return Navigator(search_client=search_client, directions_client=directions_client)


@pytest.fixture
def client(navigator):
    app.dependency_overrides[get_navigator] = lambda: navigator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_navigator, None)
