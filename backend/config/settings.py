# backend/config/settings.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env_str(name)
    if raw is None:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment (and .env) when built."""

    database_url: str = field(default_factory=lambda: _env_str("DATABASE_URL", "sqlite:///./weather_dashboard.db"))

    jwt_secret: Optional[str] = field(default_factory=lambda: _env_str("JWT_SECRET"))
    jwt_algorithm: str = field(default_factory=lambda: _env_str("JWT_ALGORITHM", "HS256"))
    jwt_expires_minutes: int = field(default_factory=lambda: _env_int("JWT_EXPIRES_MINUTES", 120))

    openweather_api_key: Optional[str] = field(default_factory=lambda: _env_str("OPENWEATHER_API_KEY"))
    openweather_api_base_url: str = field(
        default_factory=lambda: _env_str("OPENWEATHER_API_BASE_URL", "https://api.openweathermap.org/data/2.5")
    )
    openweather_geo_base_url: str = field(
        default_factory=lambda: _env_str("OPENWEATHER_GEO_BASE_URL", "http://api.openweathermap.org")
    )
    openweather_timeout: int = field(default_factory=lambda: _env_int("OPENWEATHER_TIMEOUT", 10))

    gemini_api_key: Optional[str] = field(default_factory=lambda: _env_str("GEMINI_API_KEY"))
    gemini_api_base_url: str = field(
        default_factory=lambda: _env_str("GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com")
    )
    gemini_model: str = field(default_factory=lambda: _env_str("GEMINI_MODEL", "gemini-3-flash-preview"))
    gemini_timeout: int = field(default_factory=lambda: _env_int("GEMINI_TIMEOUT", 30))

    cors_origins: str = field(default_factory=lambda: _env_str("CORS_ORIGINS", "*"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO").upper())
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    port: int = field(default_factory=lambda: _env_int("PORT", 8000))

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    # Not cached: tests and services pick up env changes without a reload.
    return Settings()
