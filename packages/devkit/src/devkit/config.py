from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    OSRM_BASE_URL: str = "https://router.project-osrm.org"
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    NOMINATIM_BASE_URL: str = "https://nominatim.openstreetmap.org"
    NOMINATIM_USER_AGENT: str = "safe-journey-navigator/0.1"
    OPEN_METEO_BASE_URL: str = "https://api.open-meteo.com"
    PROVIDER_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    PROVIDER_RETRIES: int = Field(default=1, ge=1)
    LOG_LEVEL: str = "INFO"


def load_settings(service_name: str) -> ServiceSettings:
    return ServiceSettings(SERVICE_NAME=service_name)
