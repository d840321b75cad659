# backend/services/geo_service.py
import logging
from dataclasses import dataclass
from typing import List, Optional

import requests

from config.settings import Settings, get_settings
from services.errors import APIKeyMissingError, GeoServiceError

logger = logging.getLogger(__name__)


@dataclass
class ResolvedLocation:
    name: str
    country: Optional[str]
    lat: Optional[float] = None
    lon: Optional[float] = None


class GeoService:
    """OpenWeather direct geocoding: city name (+ optional country) -> candidate places."""

    LIMIT = 5

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.api_key = settings.openweather_api_key
        self.base_url = settings.openweather_geo_base_url.rstrip("/")
        self.timeout = settings.openweather_timeout

    def resolve_city(self, name: str, country: Optional[str] = None) -> List[ResolvedLocation]:
        if not self.api_key:
            logger.error("OPENWEATHER_API_KEY is not configured; geocoding unavailable")
            raise APIKeyMissingError("OPENWEATHER_API_KEY is not configured")

        q = f"{name},{country}" if country else name
        try:
            response = requests.get(
                f"{self.base_url}/geo/1.0/direct",
                params={"q": q, "limit": self.LIMIT, "appid": self.api_key},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Geocoding request failed for {q!r}: {e}")
            raise GeoServiceError("Geocoding request failed") from e

        if response.status_code != 200:
            logger.error(f"Geocoding API error: {response.status_code} - {response.text[:200]}")
            raise GeoServiceError(f"Geocoding API returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeoServiceError("Geocoding API returned invalid JSON") from e

        if not isinstance(data, list):
            logger.warning(f"Unexpected geocoding payload for {q!r}: {type(data).__name__}")
            return []

        return [
            ResolvedLocation(
                name=item.get("name") or "",
                country=item.get("country"),
                lat=item.get("lat"),
                lon=item.get("lon"),
            )
            for item in data
            if isinstance(item, dict)
        ]

    def resolve_exact_city(self, name: str, country: Optional[str] = None) -> List[ResolvedLocation]:
        """Only the candidates whose name equals ``name`` (case-insensitive)."""
        target = name.strip().lower()
        return [
            loc for loc in self.resolve_city(name, country)
            if loc.name and loc.name.strip().lower() == target
        ]


def get_geo_service() -> GeoService:
    return GeoService()
