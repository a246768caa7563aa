# app/api/v1/routes_navigation.py
from typing import List

from fastapi import APIRouter, Depends

from app.models.navigation import (
    AuthorizationRequest,
    Coordinate,
    LocationErrorRequest,
    ModeRequest,
    SearchRequest,
    TransportMode,
    TransportModeInfo,
    ViewModel,
)
from app.services.navigator import Navigator

router = APIRouter(
    prefix="/navigation",
    tags=["navigation"],
)

# Single shared session
navigator = Navigator()


def get_navigator() -> Navigator:
    return navigator


@router.get("/", response_model=ViewModel, summary="Current map view model")
async def get_view(nav: Navigator = Depends(get_navigator)) -> ViewModel:
    return nav.view_model()


@router.get("/modes", response_model=List[TransportModeInfo], summary="Available transport modes")
async def list_modes() -> List[TransportModeInfo]:
    return [TransportModeInfo(mode=mode, symbol=mode.symbol) for mode in TransportMode]


@router.post("/search", response_model=ViewModel, summary="Search for a destination")
async def search(request: SearchRequest, nav: Navigator = Depends(get_navigator)) -> ViewModel:
    """
    Search for a destination near the current map region.

    The first result becomes the destination (and is routed to) unless it
    lies more than the configured radius from the reference point, in which
    case the view model carries a "No results found" alert instead.
    """
    await nav.search(request.query)
    return nav.view_model()


@router.post("/mode", response_model=ViewModel, summary="Select the transport mode")
async def set_mode(request: ModeRequest, nav: Navigator = Depends(get_navigator)) -> ViewModel:
    await nav.set_mode(request.mode)
    return nav.view_model()


@router.post("/route", response_model=ViewModel, summary="Recalculate the current route")
async def recalculate_route(nav: Navigator = Depends(get_navigator)) -> ViewModel:
    await nav.calculate_route()
    return nav.view_model()


@router.post("/zoom/in", response_model=ViewModel, summary="Halve the visible span")
async def zoom_in(nav: Navigator = Depends(get_navigator)) -> ViewModel:
    nav.zoom_in()
    return nav.view_model()


@router.post("/zoom/out", response_model=ViewModel, summary="Double the visible span")
async def zoom_out(nav: Navigator = Depends(get_navigator)) -> ViewModel:
    nav.zoom_out()
    return nav.view_model()


@router.post("/alert/dismiss", response_model=ViewModel, summary="Dismiss the current alert")
async def dismiss_alert(nav: Navigator = Depends(get_navigator)) -> ViewModel:
    nav.dismiss_alert()
    return nav.view_model()


@router.post("/location", response_model=ViewModel, summary="Report the user's location")
async def update_location(
    coordinate: Coordinate, nav: Navigator = Depends(get_navigator)
) -> ViewModel:
    nav.location_provider.publish_location(coordinate)
    return nav.view_model()


@router.post(
    "/location/authorization",
    response_model=ViewModel,
    summary="Report a location permission change",
)
async def update_authorization(
    request: AuthorizationRequest, nav: Navigator = Depends(get_navigator)
) -> ViewModel:
    nav.location_provider.publish_authorization(request.status)
    return nav.view_model()


@router.post("/location/error", response_model=ViewModel, summary="Report a location error")
async def report_location_error(
    request: LocationErrorRequest, nav: Navigator = Depends(get_navigator)
) -> ViewModel:
    nav.location_provider.report_error(request.message)
    return nav.view_model()
