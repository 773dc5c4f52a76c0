"""Public recipe request and recipe report endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from whattocook.database import get_db
from whattocook.models.feedback import RecipeReport, RecipeRequest
from whattocook.models.recipe import Recipe
from whattocook.schemas.feedback import (
    RecipeReportCreate,
    RecipeReportResponse,
    RecipeRequestCreate,
    RecipeRequestResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["feedback"])


@router.post(
    "/recipe-requests",
    response_model=RecipeRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_recipe_request(
    data: RecipeRequestCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Submit a recipe, or ask for one by ingredients or by name."""
    recipe_request = RecipeRequest(
        request_type=data.request_type,
        title=data.title,
        description=data.description,
        user_email=data.user_email,
        user_name=data.user_name,
        recipe_data=data.recipe_data,
        ingredients=[i.strip() for i in data.ingredients if i.strip()],
        recipe_name=data.recipe_name,
        youtube_url=data.youtube_url,
        status="pending",
    )
    db.add(recipe_request)
    db.commit()
    db.refresh(recipe_request)

    logger.info(f"New {data.request_type} recipe request {recipe_request.id}")
    return recipe_request


@router.post(
    "/reports",
    response_model=RecipeReportResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_report(
    data: RecipeReportCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Report a problem with a recipe."""
    recipe = db.query(Recipe).filter(Recipe.id == data.recipe_id).first()
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

    report = RecipeReport(
        recipe_id=recipe.id,
        reporter_name=data.reporter_name,
        reporter_email=data.reporter_email,
        reason=data.reason,
        details=data.details,
        status="open",
    )
    db.add(report)
    db.commit()
    db.refresh(report)

    logger.info(f"Recipe {recipe.id} reported: {data.reason}")
    return report
