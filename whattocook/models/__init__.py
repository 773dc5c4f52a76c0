"""SQLAlchemy models."""

from whattocook.models.chat_session import ChatSession
from whattocook.models.feedback import RecipeReport, RecipeRequest
from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import Recipe, RecipeBlog, RecipeIngredient, RecipeStep
from whattocook.models.user import Admin, User
from whattocook.models.user_lists import Favorite, UserAllergy, WishlistIngredient

__all__ = [
    "User",
    "Admin",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "RecipeStep",
    "RecipeBlog",
    "Favorite",
    "WishlistIngredient",
    "UserAllergy",
    "RecipeRequest",
    "RecipeReport",
    "ChatSession",
]
