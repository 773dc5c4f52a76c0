"""Recipe request and recipe report models."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class RecipeRequest(Base, TimestampMixin):
    """A user request to add a recipe (submitted, by ingredients, or by name)."""

    __tablename__ = "recipe_requests"

    id = Column(Integer, primary_key=True, index=True)
    request_type = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    user_email = Column(String(255), nullable=True)
    user_name = Column(String(255), nullable=True)
    recipe_data = Column(JSON, nullable=True)
    ingredients = Column(JSON, nullable=False, default=list)
    recipe_name = Column(String(255), nullable=True)
    youtube_url = Column(String(1000), nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    admin_notes = Column(Text, nullable=True)
    processed_by = Column(String(100), nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)


class RecipeReport(Base, TimestampMixin):
    """A problem report filed against a recipe."""

    __tablename__ = "recipe_reports"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    reporter_name = Column(String(255), nullable=True)
    reporter_email = Column(String(255), nullable=True)
    reason = Column(String(255), nullable=False)
    details = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="open")  # "open" | "reviewed" | "closed"

    recipe = relationship("Recipe")
