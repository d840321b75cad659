# frontend/services/ai_client.py
from typing import Tuple

from frontend.services.api_client import api_fetch

# Gemini can take a while; the server gives it 30s
AI_TIMEOUT = 45


def ask_ai(question: str) -> Tuple[str, bool]:
    """Returns (answer, used_fallback). Raises ApiError on 4xx/5xx."""
    data = api_fetch("POST", "/ai/insights", json={"question": question}, timeout=AI_TIMEOUT) or {}
    answer = data.get("answer") or ""
    return answer, bool(data.get("usedFallback"))
