# backend/queries/city_queries.py
from typing import List, Optional

from sqlalchemy.orm import Session

from models.city_model import City


def list_cities(db: Session, user_id: int) -> List[City]:
    """The owner's cities, newest first."""
    return (
        db.query(City)
        .filter(City.user_id == user_id)
        .order_by(City.created_at.desc(), City.id.desc())
        .all()
    )


def get_city(db: Session, user_id: int, city_id: int) -> Optional[City]:
    # always owner-scoped: another user's city looks exactly like a missing one
    return (
        db.query(City)
        .filter(City.id == city_id, City.user_id == user_id)
        .first()
    )


def find_duplicate(db: Session, user_id: int, name_normalized: str, country: Optional[str]) -> Optional[City]:
    q = db.query(City).filter(City.user_id == user_id, City.name_normalized == name_normalized)
    # NULL never equals NULL in SQL, so a missing country needs IS NULL
    if country is None:
        q = q.filter(City.country.is_(None))
    else:
        q = q.filter(City.country == country)
    return q.first()


def create_city(
    db: Session,
    user_id: int,
    name: str,
    name_normalized: str,
    country: Optional[str],
    api_city_id: Optional[str] = None,
) -> City:
    c = City(
        user_id=user_id,
        name=name,
        name_normalized=name_normalized,
        country=country,
        api_city_id=api_city_id,
        is_favorite=False,
    )
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


def delete_city(db: Session, city: City) -> None:
    db.delete(city)
    db.commit()


def set_favorite(db: Session, city: City, is_favorite: bool) -> City:
    city.is_favorite = bool(is_favorite)
    db.commit()
    db.refresh(city)
    return city
