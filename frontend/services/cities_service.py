# frontend/services/cities_service.py
from typing import Any, Dict, List, Optional

from frontend.services.api_client import api_fetch


def list_cities() -> List[Dict[str, Any]]:
    return api_fetch("GET", "/cities") or []

def add_city(name: str, country: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": name}
    if country:
        payload["country"] = country
    return api_fetch("POST", "/cities", json=payload)

def delete_city(city_id: int) -> None:
    api_fetch("DELETE", f"/cities/{city_id}")

def set_favorite(city_id: int, is_favorite: bool) -> Dict[str, Any]:
    return api_fetch("PATCH", f"/cities/{city_id}/favorite", json={"isFavorite": is_favorite})

def suggest_cities(name: str, country: Optional[str] = None) -> List[Dict[str, Any]]:
    params = {"name": name}
    if country:
        params["country"] = country
    return api_fetch("GET", "/cities/suggest", params=params) or []

def get_weather(city_id: int) -> Dict[str, Any]:
    return api_fetch("GET", f"/cities/{city_id}/weather")


def visible_cities(cities: List[Dict[str, Any]], favorites_only: bool = False,
                   search: str = "") -> List[Dict[str, Any]]:
    """Cities shown in the list: optional favorites view, then a case-insensitive name filter."""
    out = [c for c in cities if c.get("isFavorite")] if favorites_only else list(cities)
    term = (search or "").strip().lower()
    if term:
        out = [c for c in out if term in (c.get("name") or "").lower()]
    return out
