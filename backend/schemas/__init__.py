# backend/schemas/__init__.py

# users
from .users import RegisterPayload, UserOut, LoginPayload, LoginResponse, MeResponse

# cities
from .cities import CityCreate, FavoriteUpdate, CityOut, CitySuggestion

# weather
from .weather import WeatherOut

# ai
from .ai import AIInsightRequest, AIInsightResponse

__all__ = [
    # users
    "RegisterPayload", "UserOut", "LoginPayload", "LoginResponse", "MeResponse",
    # cities
    "CityCreate", "FavoriteUpdate", "CityOut", "CitySuggestion",
    # weather
    "WeatherOut",
    # ai
    "AIInsightRequest", "AIInsightResponse",
]
