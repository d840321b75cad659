from config.settings import Settings
from services.ai_service import AIService, get_ai_service
from services.errors import WeatherServiceError
from services.geo_service import ResolvedLocation


def add_city(client, headers, geo, name, country):
    geo.results = [ResolvedLocation(name=name, country=country)]
    r = client.post("/cities", json={"name": name}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_question_is_required(client, auth_headers):
    blank = client.post("/ai/insights", json={"question": "   "}, headers=auth_headers)
    missing = client.post("/ai/insights", json={}, headers=auth_headers)
    no_body = client.post("/ai/insights", headers=auth_headers)

    for r in (blank, missing, no_body):
        assert r.status_code == 400
        assert r.json()["detail"] == "Question is required"


def test_user_without_cities(client, auth_headers):
    r = client.post("/ai/insights", json={"question": "Where is it warm?"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["detail"] == "You don't have any cities yet. Add some cities first."


def test_insights_require_auth(client):
    assert client.post("/ai/insights", json={"question": "hi"}).status_code == 401


def test_heuristic_answer_without_ai_key(client, auth_headers, geo, weather):
    """With no Gemini key the answer is the coldest/warmest/average summary."""
    add_city(client, auth_headers, geo, "Oslo", "NO")
    add_city(client, auth_headers, geo, "Cairo", "EG")
    weather.temps.update({"oslo": -3.0, "cairo": 31.0})

    r = client.post("/ai/insights", json={"question": "Where is it warm?"}, headers=auth_headers)

    assert r.status_code == 200
    body = r.json()
    assert body["usedFallback"] is True
    assert "- Coldest city: Oslo at -3.0°C." in body["answer"]
    assert "- Warmest city: Cairo at 31.0°C." in body["answer"]
    assert "- Average temperature across your cities: 14.0°C." in body["answer"]


def test_cities_whose_weather_fails_are_skipped(client, auth_headers, geo, weather):
    add_city(client, auth_headers, geo, "Oslo", "NO")
    add_city(client, auth_headers, geo, "Cairo", "EG")
    weather.temps["oslo"] = 2.0
    weather.errors["cairo"] = WeatherServiceError("down")

    r = client.post("/ai/insights", json={"question": "Anything cold?"}, headers=auth_headers)

    answer = r.json()["answer"]
    assert "Coldest city: Oslo at 2.0°C." in answer
    assert "Warmest city: Oslo at 2.0°C." in answer
    assert "Cairo" not in answer


def test_no_weather_at_all_gives_no_data_answer(client, auth_headers, geo, weather):
    add_city(client, auth_headers, geo, "Oslo", "NO")
    weather.errors["oslo"] = WeatherServiceError("down")

    r = client.post("/ai/insights", json={"question": "Anything?"}, headers=auth_headers)

    assert r.status_code == 200
    assert r.json()["usedFallback"] is True
    assert r.json()["answer"].startswith("I don't have any weather data yet.")


def test_ai_provider_answer(client, app, auth_headers, geo, mocker):
    """With a key configured the provider's text is returned as-is."""
    add_city(client, auth_headers, geo, "Oslo", "NO")
    app.dependency_overrides[get_ai_service] = lambda: AIService(Settings(gemini_api_key="g-key"))
    resp = mocker.Mock(status_code=200)
    resp.json.return_value = {"candidates": [{"content": {"parts": [{"text": "Oslo is chilly."}]}}]}
    post = mocker.patch("services.ai_service.requests.post", return_value=resp)

    r = client.post("/ai/insights", json={"question": "How is Oslo?"}, headers=auth_headers)

    assert r.status_code == 200
    assert r.json() == {"answer": "Oslo is chilly.", "usedFallback": False}
    prompt = post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
    assert "City: Oslo (NO) | 20.0°C, clear sky" in prompt
    assert prompt.endswith("User question: How is Oslo?")


def test_unexpected_failure_is_500(client, app, auth_headers, geo, mocker):
    add_city(client, auth_headers, geo, "Oslo", "NO")
    broken = AIService(Settings(gemini_api_key=None))
    mocker.patch.object(broken, "get_ai_insight", side_effect=RuntimeError("boom"))
    app.dependency_overrides[get_ai_service] = lambda: broken

    r = client.post("/ai/insights", json={"question": "Hi"}, headers=auth_headers)

    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to generate AI insights"
