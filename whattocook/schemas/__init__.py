"""Pydantic schemas for API requests and responses."""

from whattocook.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from whattocook.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from whattocook.schemas.recipe import (
    IngredientSearchRequest,
    IngredientSearchResponse,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeSummary,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "RecipeCreate",
    "RecipeSummary",
    "RecipeDetailResponse",
    "IngredientSearchRequest",
    "IngredientSearchResponse",
]
