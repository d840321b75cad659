"""
Shared fixtures for the weather dashboard tests.

- an in-memory SQLite engine per test, wired in through the ``get_db`` override
- fake geocoding / weather providers so no test leaves the process
- helpers that register + log in a user and return bearer headers
"""

import os

# the app module builds its engine at import time; keep it off the disk
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  registers tables on Base.metadata
from config.settings import Settings
from database.session import Base, get_db
from main import create_app
from schemas.weather import WeatherOut
from services.ai_service import AIService, get_ai_service
from services.geo_service import GeoService, ResolvedLocation, get_geo_service
from services.weather_service import WeatherService, get_weather_service

TEST_SECRET = "test-secret-key"


# =============================================================================
# FAKE PROVIDERS
# =============================================================================


class FakeGeo(GeoService):
    """Geocoder returning canned candidates; the exact-name filter is the real one."""

    def __init__(self):
        super().__init__(Settings(openweather_api_key="test-key"))
        self.results: List[ResolvedLocation] = []
        self.calls: List[tuple] = []

    def resolve_city(self, name: str, country: Optional[str] = None) -> List[ResolvedLocation]:
        self.calls.append((name, country))
        return list(self.results)


class FakeWeather(WeatherService):
    """Weather by city name: a temperature, an exception to raise, or 20°C by default."""

    def __init__(self):
        super().__init__(Settings(openweather_api_key="test-key"))
        self.temps: Dict[str, float] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def fetch_weather(self, name: str, country: Optional[str] = None) -> WeatherOut:
        self.calls.append((name, country))
        key = name.lower()
        if key in self.errors:
            raise self.errors[key]
        return WeatherOut(
            cityName=name,
            country=country,
            temperature=self.temps.get(key, 20.0),
            description="clear sky",
            icon="01d",
            humidity=50,
            windSpeed=3.5,
        )


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("JWT_EXPIRES_MINUTES", "120")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(db_session_factory):
    session = db_session_factory()
    yield session
    session.close()


@pytest.fixture
def geo():
    return FakeGeo()


@pytest.fixture
def weather():
    return FakeWeather()


@pytest.fixture
def ai_service():
    # no Gemini key: the heuristic path
    return AIService(Settings(gemini_api_key=None))


@pytest.fixture
def app(db_session_factory, geo, weather, ai_service):
    app = create_app()

    def _get_db():
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_geo_service] = lambda: geo
    app.dependency_overrides[get_weather_service] = lambda: weather
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def register_and_login(client: TestClient, email: str = "alice@example.com", password: str = "secret123",
                       name: str = "Alice") -> Dict[str, str]:
    r = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def login_as(client):
    """Factory: ``login_as("bob@example.com")`` -> bearer headers for a fresh user."""
    def _login(email: str, password: str = "secret123", name: str = "User") -> Dict[str, str]:
        return register_and_login(client, email=email, password=password, name=name)
    return _login
