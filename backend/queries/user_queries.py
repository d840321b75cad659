# backend/queries/user_queries.py
from typing import Optional

from sqlalchemy.orm import Session

from models.user_model import User


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def email_exists(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).count() > 0


def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    u = User(name=name, email=email, password_hash=password_hash)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
