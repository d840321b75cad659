# backend/models/user_model.py
from sqlalchemy import Column, DateTime, Integer, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class User(Base):
    __tablename__ = "users"

    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(Unicode(255), nullable=False)
    email         = Column(Unicode(255), unique=True, index=True, nullable=False)  # stored lowercased
    password_hash = Column(Unicode(255), nullable=False)
    created_at    = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at    = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    cities = relationship("City", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
