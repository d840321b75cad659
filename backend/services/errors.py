# backend/services/errors.py
"""Domain exceptions raised by the services and mapped to HTTP codes by the routers."""


class ServiceError(Exception):
    """Base class for all weather-dashboard service failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class BadRequestError(ServiceError):
    """Input the caller has to fix (HTTP 400)."""


# ---------- auth ----------

class EmailTakenError(ServiceError):
    pass


class InvalidCredentialsError(ServiceError):
    pass


class AuthConfigError(ServiceError):
    """JWT_SECRET is not configured."""


# ---------- cities ----------

class CityValidationError(BadRequestError):
    """Bad input or a city the geocoder could not resolve (HTTP 400)."""


class CityNotFoundError(ServiceError):
    pass


class DuplicateCityError(ServiceError):
    pass


# ---------- external providers ----------

class APIKeyMissingError(ServiceError):
    pass


class GeoServiceError(ServiceError):
    pass


class WeatherServiceError(ServiceError):
    pass


class WeatherNotFoundError(WeatherServiceError):
    """The provider has no weather for this city (HTTP 404 or cod 404)."""
