# backend/models/city_model.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import String, Unicode

from database.session import Base


class City(Base):
    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("user_id", "name_normalized", "country", name="uq_city_owner_name_country"),
    )

    id              = Column(Integer, primary_key=True, index=True)
    user_id         = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name            = Column(Unicode(255), nullable=False)
    name_normalized = Column(Unicode(255), nullable=False)   # lowercased name, part of the unique key
    country         = Column(String(2), nullable=True)       # ISO 3166-1 alpha-2, uppercase
    api_city_id     = Column(String(64), nullable=True)
    is_favorite     = Column(Boolean, nullable=False, default=False)
    created_at      = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at      = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="cities")

    def __repr__(self) -> str:
        return f"City(id={self.id!r}, user_id={self.user_id!r}, name={self.name!r}, country={self.country!r})"
