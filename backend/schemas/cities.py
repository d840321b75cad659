# backend/schemas/cities.py
from typing import Optional

from pydantic import BaseModel


class CityCreate(BaseModel):
    # both checked by the city service so it can answer with its own messages
    name: Optional[str] = None
    country: Optional[str] = None

class FavoriteUpdate(BaseModel):
    isFavorite: Optional[bool] = False

class CityOut(BaseModel):
    id: int
    name: str
    country: Optional[str] = None
    isFavorite: bool = False

class CitySuggestion(BaseModel):
    name: str
    country: Optional[str] = None
