"""Per-user favorites, ingredient wishlist and allergy models."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class Favorite(Base, TimestampMixin):
    """A recipe the user has favorited."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)

    user = relationship("User", backref="favorites")
    recipe = relationship("Recipe")


class WishlistIngredient(Base, TimestampMixin):
    """An ingredient the user wants to buy or try."""

    __tablename__ = "wishlist_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=True)
    name_en = Column(String(255), nullable=False, default="")
    name_bn = Column(String(255), nullable=True)

    user = relationship("User", backref="wishlist")
    ingredient = relationship("Ingredient")


class UserAllergy(Base, TimestampMixin):
    """An ingredient the user is allergic to."""

    __tablename__ = "user_allergies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=True)
    name_en = Column(String(255), nullable=False, default="")
    name_bn = Column(String(255), nullable=True)

    user = relationship("User", backref="allergies")
    ingredient = relationship("Ingredient")
