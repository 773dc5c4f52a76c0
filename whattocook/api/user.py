"""Per-user favorites, wishlist and allergy endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whattocook.api.dependencies import get_current_user
from whattocook.database import get_db
from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import Recipe
from whattocook.models.user import User
from whattocook.models.user_lists import Favorite, UserAllergy, WishlistIngredient
from whattocook.schemas.user_lists import (
    FavoriteCreate,
    FavoriteResponse,
    UserIngredientCreate,
    UserIngredientResponse,
)
from whattocook.services.ingredient_service import find_or_create_ingredient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["user"])


def resolve_ingredient(db: Session, data: UserIngredientCreate) -> Ingredient:
    """Use the referenced ingredient if it exists, else find or create one by name."""
    if data.ingredient_id:
        ingredient = db.query(Ingredient).filter(Ingredient.id == data.ingredient_id).first()
        if ingredient:
            return ingredient
        if not data.name_en:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")

    ingredient, _ = find_or_create_ingredient(db, name_en=data.name_en, name_bn=data.name_bn)
    return ingredient


# --- Favorites ---


@router.get("/favorites", response_model=list[FavoriteResponse])
def list_favorites(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the recipes the user has favorited."""
    return (
        db.query(Favorite)
        .filter(Favorite.user_id == current_user.id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )


@router.post("/favorites", response_model=FavoriteResponse)
def add_favorite(
    data: FavoriteCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Favorite a recipe. Favoriting twice returns the existing entry."""
    if not db.query(Recipe).filter(Recipe.id == data.recipe_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

    existing = (
        db.query(Favorite)
        .filter(Favorite.user_id == current_user.id, Favorite.recipe_id == data.recipe_id)
        .first()
    )
    if existing:
        return existing

    favorite = Favorite(user_id=current_user.id, recipe_id=data.recipe_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent request won the insert
        db.rollback()
        return (
            db.query(Favorite)
            .filter(Favorite.user_id == current_user.id, Favorite.recipe_id == data.recipe_id)
            .one()
        )
    db.refresh(favorite)
    return favorite


@router.delete("/favorites/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a recipe from favorites."""
    db.query(Favorite).filter(
        Favorite.user_id == current_user.id, Favorite.recipe_id == recipe_id
    ).delete()
    db.commit()


# --- Wishlist ---


@router.get("/wishlist", response_model=list[UserIngredientResponse])
def list_wishlist(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the user's ingredient wishlist."""
    return (
        db.query(WishlistIngredient)
        .filter(WishlistIngredient.user_id == current_user.id)
        .order_by(WishlistIngredient.created_at.desc(), WishlistIngredient.id.desc())
        .all()
    )


@router.post("/wishlist", response_model=UserIngredientResponse)
def add_wishlist_item(
    data: UserIngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to the wishlist (no duplicates per ingredient)."""
    ingredient = resolve_ingredient(db, data)

    existing = (
        db.query(WishlistIngredient)
        .filter(
            WishlistIngredient.user_id == current_user.id,
            WishlistIngredient.ingredient_id == ingredient.id,
        )
        .first()
    )
    if existing:
        return existing

    item = WishlistIngredient(
        user_id=current_user.id,
        ingredient_id=ingredient.id,
        name_en=ingredient.name_en,
        name_bn=ingredient.name_bn or data.name_bn,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/wishlist/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_wishlist_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a wishlist item."""
    deleted = (
        db.query(WishlistIngredient)
        .filter(WishlistIngredient.id == item_id, WishlistIngredient.user_id == current_user.id)
        .delete()
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wishlist item not found")
    db.commit()


# --- Allergies ---


@router.get("/allergies", response_model=list[UserIngredientResponse])
def list_allergies(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the user's allergies."""
    return (
        db.query(UserAllergy)
        .filter(UserAllergy.user_id == current_user.id)
        .order_by(UserAllergy.id)
        .all()
    )


@router.post("/allergies", response_model=UserIngredientResponse)
def add_allergy(
    data: UserIngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Record an allergy, creating the ingredient if it is not yet known."""
    ingredient = resolve_ingredient(db, data)

    existing = (
        db.query(UserAllergy)
        .filter(UserAllergy.user_id == current_user.id, UserAllergy.ingredient_id == ingredient.id)
        .first()
    )
    if existing:
        return existing

    allergy = UserAllergy(
        user_id=current_user.id,
        ingredient_id=ingredient.id,
        name_en=ingredient.name_en,
        name_bn=ingredient.name_bn or data.name_bn,
    )
    db.add(allergy)
    db.commit()
    db.refresh(allergy)
    logger.info(f"User {current_user.id} added allergy to ingredient {ingredient.id}")
    return allergy


@router.delete("/allergies/{allergy_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_allergy(
    allergy_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an allergy."""
    deleted = (
        db.query(UserAllergy)
        .filter(UserAllergy.id == allergy_id, UserAllergy.user_id == current_user.id)
        .delete()
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Allergy not found")
    db.commit()
