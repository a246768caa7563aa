# app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Map Navigator API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Fixed route origin shown on the map at all times
    ORIGIN_LAT: float = 45.4919
    ORIGIN_LON: float = -73.5794
    ORIGIN_LABEL: str = "Collège LaSalle"

    # Search results farther than SEARCH_RADIUS_KM from this point are rejected
    REFERENCE_LAT: float = 45.5017
    REFERENCE_LON: float = -73.5673
    SEARCH_RADIUS_KM: float = 100.0

    # Camera
    DEFAULT_SPAN_DEGREES: float = 0.05
    ROUTE_PADDING_RATIO: float = 0.3
    MIN_SPAN_DEGREES: float = 0.0005
    MAX_LAT_SPAN_DEGREES: float = 180.0
    MAX_LON_SPAN_DEGREES: float = 360.0

    # External services
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org"
    SEARCH_RESULT_LIMIT: int = 5
    OSRM_URL: str = "https://router.project-osrm.org"
    OSRM_ALTERNATIVES: bool = False
    HTTP_TIMEOUT_S: float = 10.0
    USER_AGENT: str = "map-navigator/0.1.0"


settings = Settings()
