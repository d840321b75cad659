# backend/routers/cities_router.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from database.session import get_db
from dependencies.auth import CurrentUser
from models.city_model import City
from schemas.cities import CityCreate, CityOut, CitySuggestion, FavoriteUpdate
from schemas.weather import WeatherOut
from services import city_service
from services.errors import (
    APIKeyMissingError,
    BadRequestError,
    CityNotFoundError,
    DuplicateCityError,
    GeoServiceError,
    WeatherNotFoundError,
    WeatherServiceError,
)
from services.geo_service import GeoService, get_geo_service
from services.weather_service import WeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cities", tags=["cities"])

WEATHER_NOT_FOUND = "Weather data not found for this city. Please check the name and country code."
WEATHER_PROVIDER_FAILED = "Failed to fetch weather data from provider"
PROVIDER_NOT_CONFIGURED = "Weather provider is not configured"


def _to_out(c: City) -> CityOut:
    return CityOut(id=c.id, name=c.name, country=c.country, isFavorite=bool(c.is_favorite))


@router.get("/suggest", response_model=List[CitySuggestion])
def suggest_cities(
    current_user: CurrentUser,
    name: Optional[str] = Query(default=None),
    country: Optional[str] = Query(default=None),
    geo: GeoService = Depends(get_geo_service),
):
    try:
        return city_service.suggest_cities(geo, name, country)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except APIKeyMissingError:
        raise HTTPException(status_code=500, detail=PROVIDER_NOT_CONFIGURED)
    except GeoServiceError:
        raise HTTPException(status_code=502, detail="Failed to fetch city suggestions")


@router.get("", response_model=List[CityOut])
def list_cities(current_user: CurrentUser, db: Session = Depends(get_db)):
    return [_to_out(c) for c in city_service.list_cities(db, current_user.id)]


@router.post("", response_model=CityOut, status_code=201)
def create_city(
    body: CityCreate,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
    geo: GeoService = Depends(get_geo_service),
    weather: WeatherService = Depends(get_weather_service),
):
    try:
        c = city_service.create_city(db, geo, weather, current_user.id, body.name, body.country)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DuplicateCityError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except APIKeyMissingError:
        raise HTTPException(status_code=500, detail=PROVIDER_NOT_CONFIGURED)
    except GeoServiceError:
        raise HTTPException(status_code=502, detail="Failed to look up city with provider")
    return _to_out(c)


@router.delete("/{city_id}", status_code=204)
def delete_city(city_id: int, current_user: CurrentUser, db: Session = Depends(get_db)):
    try:
        city_service.delete_city(db, current_user.id, city_id)
    except CityNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return Response(status_code=204)


@router.patch("/{city_id}/favorite", response_model=CityOut)
def set_favorite(
    city_id: int,
    current_user: CurrentUser,
    body: Optional[FavoriteUpdate] = Body(default=None),
    db: Session = Depends(get_db),
):
    try:
        c = city_service.set_favorite(db, current_user.id, city_id, body.isFavorite if body else False)
    except CityNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return _to_out(c)


@router.get("/{city_id}/weather", response_model=WeatherOut)
def get_city_weather(
    city_id: int,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
    weather: WeatherService = Depends(get_weather_service),
):
    try:
        return city_service.get_city_weather(db, weather, current_user.id, city_id)
    except CityNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except WeatherNotFoundError:
        raise HTTPException(status_code=404, detail=WEATHER_NOT_FOUND)
    except APIKeyMissingError:
        raise HTTPException(status_code=500, detail=PROVIDER_NOT_CONFIGURED)
    except WeatherServiceError as e:
        logger.error(f"Weather fetch failed for city id={city_id}: {e}")
        raise HTTPException(status_code=502, detail=WEATHER_PROVIDER_FAILED)
