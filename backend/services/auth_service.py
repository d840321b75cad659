# backend/services/auth_service.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config.settings import Settings, get_settings
from models.user_model import User
from queries import user_queries
from services.errors import AuthConfigError, EmailTakenError, InvalidCredentialsError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # malformed hash in the DB
        return False


# ---------- tokens ----------

def create_access_token(user_id: int, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; cannot issue tokens")
        raise AuthConfigError("JWT_SECRET is not configured")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.jwt_expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Optional[int]:
    """Return the user id carried by a valid token, or None.

    Bad signature, expiry, a missing/non-numeric subject and a missing secret
    all come back as None so the guard can answer with one 401.
    """
    settings = settings or get_settings()
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting token")
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None

    sub = payload.get("sub")
    if sub is None:
        return None
    try:
        return int(sub)
    except (TypeError, ValueError):
        return None


# ---------- register / login ----------

def register(db: Session, name: str, email: str, password: str) -> User:
    email = normalize_email(email)
    if user_queries.email_exists(db, email):
        raise EmailTakenError("Email is already registered")

    try:
        user = user_queries.create_user(db, name=name.strip(), email=email, password_hash=hash_password(password))
    except IntegrityError:
        # lost a race with a concurrent register for the same email
        db.rollback()
        raise EmailTakenError("Email is already registered")

    logger.info(f"Registered user id={user.id}")
    return user


def login(db: Session, email: str, password: str, settings: Optional[Settings] = None) -> Tuple[str, User]:
    user = user_queries.get_user_by_email(db, normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid email or password")

    token = create_access_token(user.id, settings)
    logger.info(f"User id={user.id} logged in")
    return token, user
