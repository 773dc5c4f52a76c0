"""Favorites, wishlist and allergy schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FavoriteCreate(BaseModel):
    """Favorite a recipe."""

    recipe_id: int = Field(..., ge=1)


class FavoriteResponse(BaseModel):
    """Favorite entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    created_at: datetime


class UserIngredientCreate(BaseModel):
    """Add an ingredient to the wishlist or allergy list.

    Either an existing ``ingredient_id`` or an English name is required.
    """

    ingredient_id: int | None = None
    name_en: str | None = Field(None, max_length=255)
    name_bn: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def require_reference(self) -> "UserIngredientCreate":
        if not self.ingredient_id and not (self.name_en and self.name_en.strip()):
            raise ValueError("ingredient_id or name_en required")
        return self


class UserIngredientResponse(BaseModel):
    """Wishlist item or allergy."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ingredient_id: int | None
    name_en: str
    name_bn: str | None
    created_at: datetime
