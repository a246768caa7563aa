# app/api/v1/routes_health.py
from fastapi import APIRouter
from app.core.config import settings

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check():
    """
    Report that the API is up and which external services it talks to.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "services": {
            "place_search": settings.NOMINATIM_URL,
            "directions": settings.OSRM_URL,
        },
    }
