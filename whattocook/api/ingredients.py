"""Public ingredient API endpoints."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from whattocook.database import get_db
from whattocook.schemas.ingredient import (
    IngredientFindOrCreate,
    IngredientListResponse,
    IngredientLookupResponse,
    IngredientResponse,
    Pagination,
)
from whattocook.services.ingredient_service import (
    find_ingredient_by_name,
    find_or_create_ingredient,
    search_ingredients,
)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


@router.get("", response_model=IngredientListResponse | IngredientLookupResponse)
def list_ingredients(
    db: Annotated[Session, Depends(get_db)],
    name: str | None = None,
    search: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    """Exact lookup when ``name`` is given, otherwise paginated partial search."""
    if name and name.strip():
        ingredient = find_ingredient_by_name(db, name)
        if not ingredient:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
        return IngredientLookupResponse(ingredient=IngredientResponse.model_validate(ingredient))

    ingredients, total = search_ingredients(db, search=search, page=page, limit=limit)
    return IngredientListResponse(
        ingredients=[IngredientResponse.model_validate(i) for i in ingredients],
        pagination=Pagination(
            page=page, limit=limit, total=total, totalPages=math.ceil(total / limit)
        ),
    )


@router.post("", response_model=IngredientLookupResponse)
def find_or_create(
    request: IngredientFindOrCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Find an ingredient by name, creating a minimal one if none exists."""
    name = request.lookup_name
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing 'name' in request body"
        )

    found = find_ingredient_by_name(db, name)
    if found:
        return IngredientLookupResponse(ingredient=IngredientResponse.model_validate(found))

    ingredient, _ = find_or_create_ingredient(db, name_en=name)
    payload = IngredientLookupResponse(
        ingredient=IngredientResponse.model_validate(ingredient), created=True
    )
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=payload.model_dump())
