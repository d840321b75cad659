# backend/services/weather_service.py
import logging
from typing import Optional

import requests

from config.settings import Settings, get_settings
from schemas.weather import WeatherOut
from services.errors import APIKeyMissingError, WeatherNotFoundError, WeatherServiceError

logger = logging.getLogger(__name__)


class WeatherService:
    """Current weather from OpenWeather, metric units."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.api_key = settings.openweather_api_key
        self.base_url = settings.openweather_api_base_url.rstrip("/")
        self.timeout = settings.openweather_timeout

    def fetch_weather(self, name: str, country: Optional[str] = None) -> WeatherOut:
        """
        Raises:
            APIKeyMissingError: OPENWEATHER_API_KEY is not set
            WeatherNotFoundError: the provider does not know the city
            WeatherServiceError: any other provider failure
        """
        if not self.api_key:
            logger.error("OPENWEATHER_API_KEY is not configured; weather unavailable")
            raise APIKeyMissingError("OPENWEATHER_API_KEY is not configured")

        q = f"{name},{country}" if country else name
        try:
            response = requests.get(
                f"{self.base_url}/weather",
                params={"q": q, "units": "metric", "appid": self.api_key},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Weather request failed for {q!r}: {e}")
            raise WeatherServiceError("Weather request failed") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        # OpenWeather sends cod as a string in error bodies ("404")
        cod = str(data.get("cod")) if isinstance(data, dict) and data.get("cod") is not None else None
        if response.status_code == 404 or cod == "404":
            logger.warning(f"City not found by weather provider: {q}")
            raise WeatherNotFoundError(f"City '{q}' not found")

        if response.status_code != 200 or not isinstance(data, dict):
            logger.error(f"Weather API error: {response.status_code} - {response.text[:200]}")
            raise WeatherServiceError(f"Weather API returned status {response.status_code}")

        return self._to_weather(data)

    @staticmethod
    def _to_weather(data: dict) -> WeatherOut:
        main = data.get("main") or {}
        conditions = data.get("weather") or [{}]
        first = conditions[0] if conditions and isinstance(conditions[0], dict) else {}
        wind = data.get("wind") or {}

        if main.get("temp") is None:
            raise WeatherServiceError("Weather API response has no temperature")

        return WeatherOut(
            cityName=data.get("name") or "",
            country=(data.get("sys") or {}).get("country"),
            temperature=float(main["temp"]),
            description=first.get("description") or "",
            icon=first.get("icon") or "",
            humidity=main.get("humidity"),
            windSpeed=wind.get("speed"),
        )


def get_weather_service() -> WeatherService:
    return WeatherService()
