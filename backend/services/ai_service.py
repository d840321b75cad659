# backend/services/ai_service.py
import logging
import re
from typing import Iterable, List, Optional, Tuple

import requests
from sqlalchemy.orm import Session

from config.settings import Settings, get_settings
from queries import city_queries
from schemas.ai import AIInsightResponse
from services.errors import BadRequestError
from services.weather_service import WeatherService

logger = logging.getLogger(__name__)

# -------- messages --------
MSG_QUESTION_REQUIRED = "Question is required"
MSG_NO_CITIES = "You don't have any cities yet. Add some cities first."
MSG_EMPTY_ANSWER = "I couldn't generate insights right now."
MSG_NO_DATA = (
    "I don't have any weather data yet. Add cities and load their weather, "
    "then try asking for insights again."
)
FALLBACK_HEADER = "Here is a quick heuristic summary based on your cities:"
FALLBACK_NOTE = (
    "AI provider is not configured or not reachable, so this is a simple "
    "heuristic summary instead of a full AI answer."
)

# "City: Paris (FR) | 12.3°C, light rain"
_TEMP_LINE = re.compile(r"City: (.*?)(?: \((.*?)\))? \| (-?\d+(?:\.\d+)?)°C")

GEN_CONFIG = {"temperature": 0.5}


# -------- prompt / summary helpers --------
def build_prompt(question: str, weather_summary: str) -> str:
    return "\n".join([
        "Here is the user's saved cities and their current weather readings:",
        weather_summary,
        "",
        "Using ONLY this information, answer the user's question.",
        "If the question cannot be answered from this data, explain briefly what is missing.",
        "",
        f"User question: {question}",
    ])


def parse_temperatures(weather_summary: str) -> List[Tuple[str, float]]:
    temps: List[Tuple[str, float]] = []
    for line in weather_summary.splitlines():
        m = _TEMP_LINE.search(line.strip())
        if not m:
            continue
        city = m.group(1).strip()
        if not city:
            continue
        temps.append((city, float(m.group(3))))
    return temps


def heuristic_fallback(weather_summary: str) -> AIInsightResponse:
    """Coldest / warmest / average answer used when the AI provider can't help."""
    lines = [l.strip() for l in weather_summary.splitlines() if l.strip()]
    if not lines:
        return AIInsightResponse(answer=MSG_NO_DATA, usedFallback=True)

    summary = FALLBACK_HEADER
    temps = sorted(parse_temperatures(weather_summary), key=lambda t: t[1])
    if temps:
        coldest, warmest = temps[0], temps[-1]
        avg = sum(t for _, t in temps) / len(temps)
        summary += f"\n- Coldest city: {coldest[0]} at {coldest[1]:.1f}°C."
        summary += f"\n- Warmest city: {warmest[0]} at {warmest[1]:.1f}°C."
        summary += f"\n- Average temperature across your cities: {avg:.1f}°C."

    summary += "\n\n" + FALLBACK_NOTE
    return AIInsightResponse(answer=summary, usedFallback=True)


def build_weather_summary(cities: Iterable, weather: WeatherService) -> str:
    """One line per city whose weather loads; failures are skipped."""
    lines: List[str] = []
    for city in cities:
        try:
            w = weather.fetch_weather(city.name, city.country)
        except Exception as e:
            logger.warning(f"Skipping city id={getattr(city, 'id', '?')} in AI summary: {e}")
            continue
        lines.append(w.summary_line())
    return "\n".join(lines)


class AIService:
    """Gemini generateContent client with a heuristic fallback."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.api_key = settings.gemini_api_key
        self.base_url = settings.gemini_api_base_url.rstrip("/")
        self.model = settings.gemini_model
        self.timeout = settings.gemini_timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _generate(self, prompt: str) -> str:
        response = requests.post(
            f"{self.base_url}/v1beta/models/{self.model}:generateContent",
            params={"key": self.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": GEN_CONFIG,
            },
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json() or {}

        candidates = data.get("candidates") or []
        first = candidates[0] if candidates else {}
        parts = ((first or {}).get("content") or {}).get("parts") or []
        text = "\n\n".join(p.get("text") for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
        return text.strip()

    def get_ai_insight(self, question: str, weather_summary: str) -> AIInsightResponse:
        if not self.configured:
            logger.info("GEMINI_API_KEY not set, answering with heuristic summary")
            return heuristic_fallback(weather_summary)

        try:
            text = self._generate(build_prompt(question, weather_summary))
        except Exception as e:
            logger.error(f"AI provider call failed: {e}")
            return heuristic_fallback(weather_summary)

        return AIInsightResponse(answer=text or MSG_EMPTY_ANSWER, usedFallback=False)

    def insights_for_user(
        self, db: Session, weather: WeatherService, user_id: int, question: Optional[str]
    ) -> AIInsightResponse:
        question = (question or "").strip()
        if not question:
            raise BadRequestError(MSG_QUESTION_REQUIRED)

        cities = city_queries.list_cities(db, user_id)
        if not cities:
            raise BadRequestError(MSG_NO_CITIES)

        summary = build_weather_summary(cities, weather)
        logger.debug(f"AI summary for user {user_id}: {len(summary.splitlines())} line(s)")
        return self.get_ai_insight(question, summary)


def get_ai_service() -> AIService:
    return AIService()
