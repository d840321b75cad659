# backend/dependencies/auth.py
import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from queries.user_queries import get_user_by_id
from services.auth_service import decode_access_token

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve ``Authorization: Bearer <jwt>`` to an existing user or answer 401."""
    if not authorization:
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise _unauthorized("Invalid Authorization header format")

    user_id = decode_access_token(parts[1])
    if user_id is None:
        raise _unauthorized("Unauthorized")

    user = get_user_by_id(db, user_id)
    if not user:
        logger.info(f"Token for unknown user id={user_id} rejected")
        raise _unauthorized("Unauthorized")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
