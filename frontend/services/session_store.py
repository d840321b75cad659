# frontend/services/session_store.py
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

SESSION_FILE = "session.json"


def _home() -> Path:
    return Path(os.getenv("WEATHER_DASHBOARD_HOME", str(Path.home() / ".weather_dashboard")))

def _path() -> Path:
    return _home() / SESSION_FILE


def save(token: str, user: Dict[str, Any]) -> None:
    p = _path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")

def load() -> Optional[Dict[str, Any]]:
    p = _path()
    if not p.exists():
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict) or not data.get("token"):
        return None
    return data

def get_token() -> Optional[str]:
    data = load()
    return data["token"] if data else None

def clear() -> None:
    # concurrent 401s may all land here
    _path().unlink(missing_ok=True)
