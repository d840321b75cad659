# frontend/services/auth_service.py
from typing import Any, Dict, Optional, Tuple

from frontend.services import session_store
from frontend.services.api_client import ApiError, api_fetch


class AuthService:
    # ---------- LOGIN ----------
    def login(self, email: str, password: str) -> Tuple[bool, Optional[Dict], Optional[str]]:
        try:
            data = api_fetch("POST", "/auth/login", json={"email": email, "password": password}, token="")
        except ApiError as e:
            return False, None, e.message

        session_store.save(data["token"], data["user"])
        return True, data["user"], None

    # ---------- SIGNUP ----------
    def register(self, name: str, email: str, password: str) -> Tuple[bool, Optional[Dict], Optional[str]]:
        try:
            user = api_fetch(
                "POST", "/auth/register",
                json={"name": name, "email": email, "password": password},
                token="",
            )
        except ApiError as e:
            return False, None, e.message
        return True, user, None

    # ---------- SESSION ----------
    def logout(self) -> None:
        session_store.clear()

    def current_session(self) -> Optional[Dict[str, Any]]:
        return session_store.load()
