# backend/services/city_service.py
import logging
import re
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.city_model import City
from queries import city_queries
from schemas.cities import CitySuggestion
from schemas.weather import WeatherOut
from services.errors import (
    CityNotFoundError,
    CityValidationError,
    DuplicateCityError,
    WeatherNotFoundError,
)
from services.geo_service import GeoService
from services.weather_service import WeatherService

logger = logging.getLogger(__name__)

COUNTRY_RE = re.compile(r"^[A-Za-z]{2}$")

MSG_NAME_REQUIRED = "City name is required"
MSG_SUGGEST_NAME_REQUIRED = "Query parameter 'name' is required"
MSG_BAD_COUNTRY = "Country code must be a valid 2-letter ISO code"
MSG_NOT_IN_COUNTRY = "We couldn't find that city in the specified country. Please check the name and country code."
MSG_NOT_FOUND = "We couldn't find that city. Please check the spelling."
MSG_AMBIGUOUS = "This city exists in multiple countries. Please provide a country code."
MSG_NO_WEATHER = "We couldn't load weather for this city. It may not exist or be supported."
MSG_DUPLICATE = "City already exists in your list"
MSG_CITY_NOT_FOUND = "City not found"


def normalize_country(country: Optional[str]) -> Optional[str]:
    """Trim + uppercase; blank means "no country". Raises on anything but two letters."""
    if country is None:
        return None
    c = country.strip().upper()
    if not c:
        return None
    if not COUNTRY_RE.match(c):
        raise CityValidationError(MSG_BAD_COUNTRY)
    return c


def _same_country(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").upper() == (b or "").upper()


# ---------- suggest ----------

def suggest_cities(geo: GeoService, name: Optional[str], country: Optional[str] = None) -> List[CitySuggestion]:
    name = (name or "").strip()
    if not name:
        raise CityValidationError(MSG_SUGGEST_NAME_REQUIRED)
    country = normalize_country(country)

    matches = geo.resolve_exact_city(name, country)
    if country:
        matches = [m for m in matches if _same_country(m.country, country)]

    out: List[CitySuggestion] = []
    seen = set()
    for m in matches:
        key = (m.name.lower(), (m.country or "").upper())
        if key in seen:
            continue
        seen.add(key)
        out.append(CitySuggestion(name=m.name, country=m.country))
    return out


# ---------- list / create ----------

def list_cities(db: Session, user_id: int) -> List[City]:
    return city_queries.list_cities(db, user_id)


def create_city(
    db: Session,
    geo: GeoService,
    weather: WeatherService,
    user_id: int,
    name: Optional[str],
    country: Optional[str] = None,
) -> City:
    name = (name or "").strip()
    if not name:
        raise CityValidationError(MSG_NAME_REQUIRED)
    # checked before any outbound call
    country = normalize_country(country)

    matches = geo.resolve_exact_city(name, country)

    if country:
        matches = [m for m in matches if _same_country(m.country, country)]
        if not matches:
            raise CityValidationError(MSG_NOT_IN_COUNTRY)
    else:
        if not matches:
            raise CityValidationError(MSG_NOT_FOUND)
        distinct = {m.country.upper() for m in matches if m.country}
        if len(distinct) > 1:
            raise CityValidationError(MSG_AMBIGUOUS)

    best = matches[0]
    display_name = best.name
    name_normalized = display_name.lower()
    resolved_country = best.country.upper() if best.country else None

    if city_queries.find_duplicate(db, user_id, name_normalized, resolved_country):
        raise DuplicateCityError(MSG_DUPLICATE)

    # make sure the weather provider can actually serve this city
    try:
        weather.fetch_weather(display_name, resolved_country)
    except WeatherNotFoundError:
        raise CityValidationError(MSG_NO_WEATHER)
    except Exception as e:
        logger.warning(f"Weather probe failed for {display_name!r} ({resolved_country}), saving anyway: {e}")

    try:
        city = city_queries.create_city(
            db,
            user_id=user_id,
            name=display_name,
            name_normalized=name_normalized,
            country=resolved_country,
        )
    except IntegrityError:
        db.rollback()
        raise DuplicateCityError(MSG_DUPLICATE)

    logger.info(f"User {user_id} saved city id={city.id} {display_name} ({resolved_country})")
    return city


# ---------- owner-scoped mutations ----------

def _get_owned(db: Session, user_id: int, city_id: int) -> City:
    city = city_queries.get_city(db, user_id, city_id)
    if not city:
        raise CityNotFoundError(MSG_CITY_NOT_FOUND)
    return city


def delete_city(db: Session, user_id: int, city_id: int) -> None:
    city = _get_owned(db, user_id, city_id)
    city_queries.delete_city(db, city)
    logger.info(f"User {user_id} deleted city id={city_id}")


def set_favorite(db: Session, user_id: int, city_id: int, is_favorite: Optional[bool]) -> City:
    city = _get_owned(db, user_id, city_id)
    return city_queries.set_favorite(db, city, bool(is_favorite))


def get_city_weather(db: Session, weather: WeatherService, user_id: int, city_id: int) -> WeatherOut:
    city = _get_owned(db, user_id, city_id)
    return weather.fetch_weather(city.name, city.country)
