"""User model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String

from app.database import Base

DEFAULT_ROLES = ["ROLE_USER"]


class User(Base):
    """Directory user, keyed externally by email."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    first_name = Column(String(256), nullable=False)
    last_name = Column(String(256), nullable=False, default="")
    phone_number = Column(String(64), nullable=False, default="")
    password_hash = Column(String(256), nullable=False)
    profile_picture_url = Column(String(1024), nullable=False)
    roles = Column(JSON, nullable=False, default=lambda: list(DEFAULT_ROLES))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
