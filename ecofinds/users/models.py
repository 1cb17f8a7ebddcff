# ecofinds/users/models.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Uuid
from sqlalchemy.orm import relationship

from ..database.core import Base


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """
    SQLAlchemy model representing a marketplace user.
    """
    __tablename__ = 'users'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    username = Column(String(50), unique=True, nullable=True, index=True)
    bio = Column(Text, nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # --- Relationships ---
    products = relationship("Product", back_populates="owner")
    cart = relationship("Cart", back_populates="user", uselist=False)
    orders = relationship("Order", back_populates="user")

    def __repr__(self):
        return f"<User(email='{self.email}', username='{self.username}')>"
