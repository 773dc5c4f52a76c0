"""Ingredient model."""

from sqlalchemy import JSON, Column, Integer, String

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class Ingredient(Base, TimestampMixin):
    """A bilingual ingredient shared across recipes."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name_en = Column(String(255), nullable=False, default="", index=True)
    name_bn = Column(String(255), nullable=False, default="")
    img = Column(String(1000), nullable=False, default="")
    phonetic = Column(JSON, nullable=False, default=list)  # Romanized aliases, lowercase
