"""Public recipe API endpoints."""

import logging
import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from whattocook.api.dependencies import get_optional_user, get_recipe_service
from whattocook.models.user import User
from whattocook.models.user_lists import UserAllergy
from whattocook.schemas.ingredient import Pagination
from whattocook.schemas.recipe import (
    AutocompleteResponse,
    CategoryStatsResponse,
    IngredientSearchRequest,
    IngredientSearchResponse,
    RecipeDetailResponse,
    RecipeListResponse,
    RecipeSummary,
    ScoredRecipeResponse,
)
from whattocook.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


# --- Static routes first (before /{slug}) ---


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    search: str = "",
    cuisine: str = "",
    category: str = "",
    difficulty: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 12,
):
    """Search and browse recipes, newest first."""
    recipes, total = service.list_recipes(
        search=search,
        cuisine=cuisine,
        category=category,
        difficulty=difficulty,
        page=page,
        limit=limit,
    )
    return RecipeListResponse(
        recipes=[RecipeSummary.model_validate(r) for r in recipes],
        pagination=Pagination(
            page=page, limit=limit, total=total, totalPages=math.ceil(total / limit)
        ),
    )


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    q: str | None = None,
):
    """Suggest categories and recipe titles for a partial query."""
    return {"suggestions": service.autocomplete(q)}


@router.get("/categories", response_model=CategoryStatsResponse)
async def category_stats(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Recipe counts per category and per food category."""
    return service.category_stats()


@router.post("/search-by-ingredients", response_model=IngredientSearchResponse)
async def search_by_ingredients(
    request: IngredientSearchRequest,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
):
    """Rank recipes by how much of each one the given ingredients cover.

    Full matches come first, then higher coverage, then fewer missing
    ingredients, then title. With ``excludeAllergies`` and a valid token,
    recipes containing one of the user's allergy ingredients are skipped.
    """
    if not request.ingredients:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide at least one ingredient",
        )

    exclude_ids: set[int] = set()
    if request.exclude_allergies and current_user is not None:
        exclude_ids = {
            a.ingredient_id
            for a in service.db.query(UserAllergy).filter(UserAllergy.user_id == current_user.id)
            if a.ingredient_id is not None
        }

    scored = service.search_by_ingredients(request.ingredients, exclude_ingredient_ids=exclude_ids)
    logger.info(f"Ingredient search for {len(request.ingredients)} items -> {len(scored)} recipes")

    return IngredientSearchResponse(
        recipes=[
            ScoredRecipeResponse(
                recipe=RecipeSummary.model_validate(s.recipe),
                match_percent=s.match_percent,
                matched_count=s.matched_count,
                total_ingredients=s.total_ingredients,
                missing_count=s.missing_count,
            )
            for s in scored
        ],
        total=len(scored),
        searched_ingredients=request.ingredients,
    )


# --- Dynamic routes ---


@router.get("/{slug}", response_model=RecipeDetailResponse)
async def get_recipe(
    slug: str,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a single recipe by slug."""
    recipe = service.get_by_slug(slug)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe
