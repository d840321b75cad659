# backend/models/__init__.py
from .user_model import User
from .city_model import City

__all__ = ["User", "City"]
