"""User and Admin models."""

from sqlalchemy import Column, Integer, String

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """End user who keeps favorites, wishlists, allergies and chat history."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)


class Admin(Base, TimestampMixin):
    """Back office account for managing recipe content."""

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
