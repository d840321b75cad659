import pytest

from services.errors import WeatherNotFoundError, WeatherServiceError
from services.geo_service import ResolvedLocation


def loc(name, country):
    return ResolvedLocation(name=name, country=country, lat=0.0, lon=0.0)


@pytest.fixture
def london(geo):
    geo.results = [loc("London", "GB")]
    return geo


# ---------- create ----------

def test_create_city_uses_provider_name_and_country(client, auth_headers, geo, weather):
    """The saved city takes the geocoder's spelling and an uppercased country."""
    geo.results = [loc("London", "gb")]

    r = client.post("/cities", json={"name": "  london ", "country": "gb"}, headers=auth_headers)

    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "London"
    assert body["country"] == "GB"
    assert body["isFavorite"] is False
    assert geo.calls == [("london", "GB")]
    assert weather.calls == [("London", "GB")]


@pytest.mark.parametrize("country", ["USA", "1A", "g", "G-"])
def test_create_rejects_bad_country_before_any_lookup(client, auth_headers, geo, weather, country):
    r = client.post("/cities", json={"name": "London", "country": country}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "Country code must be a valid 2-letter ISO code"
    assert geo.calls == []
    assert weather.calls == []


def test_create_requires_name(client, auth_headers, geo):
    blank = client.post("/cities", json={"name": "   "}, headers=auth_headers)
    missing = client.post("/cities", json={}, headers=auth_headers)

    for r in (blank, missing):
        assert r.status_code == 400
        assert r.json()["detail"] == "City name is required"
    assert geo.calls == []


def test_create_unknown_city(client, auth_headers, geo):
    """Only exact name matches count, so a near miss is not found."""
    geo.results = [loc("Londonderry", "GB")]

    r = client.post("/cities", json={"name": "London"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "We couldn't find that city. Please check the spelling."


def test_create_city_not_in_requested_country(client, auth_headers, geo):
    geo.results = [loc("Paris", "US")]

    r = client.post("/cities", json={"name": "Paris", "country": "FR"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == (
        "We couldn't find that city in the specified country. Please check the name and country code."
    )


def test_create_ambiguous_city_needs_country(client, auth_headers, geo):
    geo.results = [loc("Paris", "FR"), loc("Paris", "US")]

    r = client.post("/cities", json={"name": "Paris"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "This city exists in multiple countries. Please provide a country code."


def test_create_duplicate_city_is_conflict(client, auth_headers, london):
    first = client.post("/cities", json={"name": "London", "country": "GB"}, headers=auth_headers)
    second = client.post("/cities", json={"name": "LONDON"}, headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"] == "City already exists in your list"


def test_duplicate_without_country_is_still_a_duplicate(client, auth_headers, geo):
    """A country-less city counts as one key, not a NULL that never matches."""
    geo.results = [loc("Atlantis", None)]

    first = client.post("/cities", json={"name": "Atlantis"}, headers=auth_headers)
    second = client.post("/cities", json={"name": "Atlantis"}, headers=auth_headers)

    assert first.status_code == 201
    assert first.json()["country"] is None
    assert second.status_code == 409


def test_same_city_for_two_users_is_allowed(client, login_as, london):
    alice = login_as("alice@example.com")
    bob = login_as("bob@example.com")

    assert client.post("/cities", json={"name": "London"}, headers=alice).status_code == 201
    assert client.post("/cities", json={"name": "London"}, headers=bob).status_code == 201


def test_create_rejects_city_without_weather(client, auth_headers, london, weather):
    weather.errors["london"] = WeatherNotFoundError("city not found")

    r = client.post("/cities", json={"name": "London"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "We couldn't load weather for this city. It may not exist or be supported."
    assert client.get("/cities", headers=auth_headers).json() == []


def test_create_ignores_other_weather_probe_failures(client, auth_headers, london, weather):
    weather.errors["london"] = WeatherServiceError("provider down")

    r = client.post("/cities", json={"name": "London"}, headers=auth_headers)

    assert r.status_code == 201


def test_cities_require_auth(client):
    assert client.get("/cities").status_code == 401
    assert client.post("/cities", json={"name": "London"}).status_code == 401


# ---------- list ----------

def test_list_is_owner_scoped_and_newest_first(client, login_as, geo):
    alice = login_as("alice@example.com")
    bob = login_as("bob@example.com")
    for name, country in (("London", "GB"), ("Paris", "FR"), ("Oslo", "NO")):
        geo.results = [loc(name, country)]
        client.post("/cities", json={"name": name}, headers=alice)
    geo.results = [loc("Rome", "IT")]
    client.post("/cities", json={"name": "Rome"}, headers=bob)

    r = client.get("/cities", headers=alice)

    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Oslo", "Paris", "London"]
    assert set(r.json()[0]) == {"id", "name", "country", "isFavorite"}


# ---------- delete ----------

def test_delete_own_city(client, auth_headers, london):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]

    r = client.delete(f"/cities/{city_id}", headers=auth_headers)

    assert r.status_code == 204
    assert client.get("/cities", headers=auth_headers).json() == []


def test_delete_other_users_city_is_not_found(client, login_as, london):
    """Another user's city is a 404 and the row survives."""
    alice = login_as("alice@example.com")
    bob = login_as("bob@example.com")
    city_id = client.post("/cities", json={"name": "London"}, headers=alice).json()["id"]

    r = client.delete(f"/cities/{city_id}", headers=bob)

    assert r.status_code == 404
    assert r.json()["detail"] == "City not found"
    assert [c["id"] for c in client.get("/cities", headers=alice).json()] == [city_id]


def test_delete_missing_city_is_not_found(client, auth_headers):
    assert client.delete("/cities/424242", headers=auth_headers).status_code == 404


def test_non_numeric_city_id_is_bad_request(client, auth_headers):
    assert client.delete("/cities/abc", headers=auth_headers).status_code == 400


# ---------- favorite ----------

def test_set_favorite_is_idempotent(client, auth_headers, london):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]

    first = client.patch(f"/cities/{city_id}/favorite", json={"isFavorite": True}, headers=auth_headers)
    second = client.patch(f"/cities/{city_id}/favorite", json={"isFavorite": True}, headers=auth_headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["isFavorite"] is True
    assert second.json() == first.json()
    assert client.get("/cities", headers=auth_headers).json()[0]["isFavorite"] is True


def test_favorite_missing_flag_means_false(client, auth_headers, london):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]
    client.patch(f"/cities/{city_id}/favorite", json={"isFavorite": True}, headers=auth_headers)

    r = client.patch(f"/cities/{city_id}/favorite", json={}, headers=auth_headers)

    assert r.status_code == 200
    assert r.json()["isFavorite"] is False


def test_favorite_without_body_means_false(client, auth_headers, london):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]
    client.patch(f"/cities/{city_id}/favorite", json={"isFavorite": True}, headers=auth_headers)

    r = client.patch(f"/cities/{city_id}/favorite", headers=auth_headers)

    assert r.status_code == 200
    assert r.json()["isFavorite"] is False


def test_favorite_other_users_city_is_not_found(client, login_as, london):
    alice = login_as("alice@example.com")
    bob = login_as("bob@example.com")
    city_id = client.post("/cities", json={"name": "London"}, headers=alice).json()["id"]

    r = client.patch(f"/cities/{city_id}/favorite", json={"isFavorite": True}, headers=bob)

    assert r.status_code == 404
    assert client.get("/cities", headers=alice).json()[0]["isFavorite"] is False


# ---------- weather ----------

def test_city_weather(client, auth_headers, london, weather):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]
    weather.temps["london"] = 11.25

    r = client.get(f"/cities/{city_id}/weather", headers=auth_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["cityName"] == "London"
    assert body["country"] == "GB"
    assert body["temperature"] == 11.25
    assert body["description"] == "clear sky"
    assert body["icon"] == "01d"


def test_city_weather_provider_errors(client, auth_headers, london, weather):
    city_id = client.post("/cities", json={"name": "London"}, headers=auth_headers).json()["id"]

    weather.errors["london"] = WeatherNotFoundError("gone")
    not_found = client.get(f"/cities/{city_id}/weather", headers=auth_headers)
    weather.errors["london"] = WeatherServiceError("boom")
    failed = client.get(f"/cities/{city_id}/weather", headers=auth_headers)

    assert not_found.status_code == 404
    assert not_found.json()["detail"] == (
        "Weather data not found for this city. Please check the name and country code."
    )
    assert failed.status_code == 502
    assert failed.json()["detail"] == "Failed to fetch weather data from provider"


def test_weather_for_unknown_city_is_not_found(client, auth_headers, weather):
    r = client.get("/cities/999/weather", headers=auth_headers)

    assert r.status_code == 404
    assert r.json()["detail"] == "City not found"
    assert weather.calls == []


# ---------- suggest ----------

def test_suggest_requires_name(client, auth_headers):
    r = client.get("/cities/suggest", headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "Query parameter 'name' is required"


def test_suggest_exact_matches_deduplicated(client, auth_headers, geo):
    geo.results = [loc("Springfield", "US"), loc("Springfield", "US"), loc("Springfield", "AU"),
                   loc("Springfield Gardens", "US")]

    r = client.get("/cities/suggest", params={"name": "springfield"}, headers=auth_headers)

    assert r.status_code == 200
    assert r.json() == [{"name": "Springfield", "country": "US"}, {"name": "Springfield", "country": "AU"}]


def test_suggest_filters_by_country(client, auth_headers, geo):
    geo.results = [loc("Springfield", "US"), loc("Springfield", "AU")]

    r = client.get("/cities/suggest", params={"name": "Springfield", "country": " au "}, headers=auth_headers)

    assert r.json() == [{"name": "Springfield", "country": "AU"}]
    assert geo.calls == [("Springfield", "AU")]


def test_suggest_rejects_bad_country(client, auth_headers, geo):
    r = client.get("/cities/suggest", params={"name": "Springfield", "country": "USA"}, headers=auth_headers)

    assert r.status_code == 400
    assert geo.calls == []
