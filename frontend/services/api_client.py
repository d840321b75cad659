# frontend/services/api_client.py
from typing import Any, Dict, Optional
import os, requests

from frontend.services import session_store

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
DEFAULT_TIMEOUT = 15


class ApiError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class UnauthorizedError(ApiError):
    """The session token was rejected; the stored session has been cleared."""


def _url(p: str) -> str:
    return f"{API_BASE_URL.rstrip('/')}{p}"

def _err(resp: requests.Response) -> str:
    try:
        j = resp.json()
        if isinstance(j, dict) and "detail" in j:
            return str(j["detail"])
        return str(j)
    except Exception:
        return resp.text or f"HTTP {resp.status_code}"


def api_fetch(
    method: str,
    path: str,
    json: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, Any]] = None,
    token: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Call the backend and return the decoded JSON body (None for 204).

    The stored session token is used when ``token`` is not given.
    """
    headers = {"Content-Type": "application/json"}
    token = token if token is not None else session_store.get_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        r = requests.request(method, _url(path), json=json, params=params, headers=headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise ApiError(f"Cannot reach the server: {e}") from e

    if r.status_code == 401:
        session_store.clear()
        raise UnauthorizedError(_err(r), 401)
    if r.status_code >= 400:
        raise ApiError(_err(r), r.status_code)

    if r.status_code == 204 or not r.content:
        return None
    return r.json()
