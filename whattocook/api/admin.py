"""Back office API endpoints.

Everything except ``/login`` requires an admin-scoped bearer token.
"""

import logging
import math
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whattocook.api.dependencies import get_current_admin, get_recipe_service
from whattocook.celery_app import app as celery_app
from whattocook.database import get_db
from whattocook.models.feedback import RecipeReport, RecipeRequest
from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import RecipeIngredient
from whattocook.models.user import Admin
from whattocook.models.user_lists import UserAllergy, WishlistIngredient
from whattocook.schemas.admin import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    SyncResponse,
    TaskQueuedResponse,
    TaskStatusResponse,
    UrlCheckRequest,
    UrlCheckResult,
)
from whattocook.schemas.auth import (
    AdminAuthResponse,
    AdminCreate,
    AdminLogin,
    AdminResponse,
    AdminUpdate,
)
from whattocook.schemas.feedback import (
    RecipeReportResponse,
    RecipeReportUpdate,
    RecipeRequestListResponse,
    RecipeRequestResponse,
    RecipeRequestUpdate,
)
from whattocook.schemas.ingredient import (
    IngredientCreate,
    IngredientListResponse,
    IngredientResponse,
    IngredientUpdate,
    Pagination,
)
from whattocook.schemas.recipe import (
    AdminRecipeListResponse,
    RecipeCreate,
    RecipeDetailResponse,
)
from whattocook.services.auth import (
    authenticate_admin,
    create_admin,
    create_admin_token,
    get_password_hash,
)
from whattocook.services.github_sync import trigger_export_workflow
from whattocook.services.ingredient_service import search_ingredients
from whattocook.services.recipe_service import RecipeService
from whattocook.services.url_audit import audit_recipe
from whattocook.tasks.url_audit import audit_recipe_urls

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])

CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]


def _pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(page=page, limit=limit, total=total, totalPages=math.ceil(total / limit))


# --- Auth ---


@router.post("/login", response_model=AdminAuthResponse)
def login(
    credentials: AdminLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Log in to the back office."""
    admin = authenticate_admin(db, credentials.username, credentials.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"Admin '{admin.username}' logged in")
    return AdminAuthResponse(
        access_token=create_admin_token(admin.id, admin.username),
        admin=AdminResponse.model_validate(admin),
    )


# --- Recipes ---


def _check_ingredient_refs(service: RecipeService, data: RecipeCreate) -> None:
    missing = service.missing_ingredient_ids({i.ingredient_id for i in data.ingredients})
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown ingredient ids: {sorted(missing)}",
        )


@router.get("/recipes", response_model=AdminRecipeListResponse)
def list_recipes(
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    search: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List recipes with full nested content."""
    recipes, total = service.list_recipes(search=search, page=page, limit=limit)
    return AdminRecipeListResponse(
        recipes=[RecipeDetailResponse.model_validate(r) for r in recipes],
        pagination=_pagination(page, limit, total),
    )


@router.post(
    "/recipes/check-urls",
    response_model=TaskQueuedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def queue_url_audit(
    request: UrlCheckRequest,
    _admin: CurrentAdmin,
):
    """Queue a background URL audit over the whole catalog."""
    task = audit_recipe_urls.delay(fix=request.fix)
    logger.info(f"Queued URL audit task {task.id} (fix={request.fix})")
    return TaskQueuedResponse(task_id=task.id)


@router.post("/recipes/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete_recipes(
    request: BulkDeleteRequest,
    admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete several recipes at once; unknown ids are ignored."""
    deleted = service.delete_recipes(request.ids)
    logger.info(f"Admin '{admin.username}' deleted {deleted} recipes")
    return BulkDeleteResponse(deleted=deleted)


@router.get("/recipes/{recipe_id}", response_model=RecipeDetailResponse)
def get_recipe(
    recipe_id: int,
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    recipe = service.get_by_id(recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


@router.post("/recipes", response_model=RecipeDetailResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    data: RecipeCreate,
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a recipe with its ingredients, steps and blog content."""
    _check_ingredient_refs(service, data)
    try:
        return service.create_recipe(data.model_dump())
    except IntegrityError as e:
        service.db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Recipe with slug '{data.slug}' already exists",
        ) from e


@router.put("/recipes/{recipe_id}", response_model=RecipeDetailResponse)
def replace_recipe(
    recipe_id: int,
    data: RecipeCreate,
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Overwrite a recipe, rebuilding its ingredient and step lists."""
    recipe = service.get_by_id(recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    _check_ingredient_refs(service, data)
    try:
        return service.replace_recipe(recipe, data.model_dump())
    except IntegrityError as e:
        service.db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Recipe with slug '{data.slug}' already exists",
        ) from e


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    if not service.delete_recipes([recipe_id]):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")


@router.post("/recipes/{recipe_id}/check-urls", response_model=UrlCheckResult)
def check_recipe_urls(
    recipe_id: int,
    request: UrlCheckRequest,
    _admin: CurrentAdmin,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Check one recipe's image and YouTube links, fixing them if asked."""
    recipe = service.get_by_id(recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return audit_recipe(service.db, recipe, fix=request.fix)


def _task_result(result) -> Any:
    if not result.ready():
        return None
    # Failed tasks carry the exception instance
    if result.failed():
        return {"error": str(result.result)}
    return result.result


@router.get("/tasks/{task_id}", response_model=TaskStatusResponse)
def get_task_status(
    task_id: str,
    _admin: CurrentAdmin,
):
    """Poll a background task."""
    result = celery_app.AsyncResult(task_id)
    return TaskStatusResponse(
        task_id=task_id,
        status=result.status,
        result=_task_result(result),
    )


# --- Ingredients ---


def _get_ingredient_or_404(db: Session, ingredient_id: int) -> Ingredient:
    ingredient = db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
    if not ingredient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.get("/ingredients", response_model=IngredientListResponse)
def list_ingredients(
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    search: str = "",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    ingredients, total = search_ingredients(db, search=search, page=page, limit=limit)
    return IngredientListResponse(
        ingredients=[IngredientResponse.model_validate(i) for i in ingredients],
        pagination=_pagination(page, limit, total),
    )


@router.get("/ingredients/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(
    ingredient_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    return _get_ingredient_or_404(db, ingredient_id)


@router.post("/ingredients", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    data: IngredientCreate,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    ingredient = Ingredient(
        name_en=data.name_en.strip(),
        name_bn=data.name_bn.strip(),
        img=data.img,
        phonetic=[p.lower() for p in data.phonetic],
    )
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.patch("/ingredients/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: int,
    data: IngredientUpdate,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    ingredient = _get_ingredient_or_404(db, ingredient_id)

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("phonetic") is not None:
        update_data["phonetic"] = [p.lower() for p in update_data["phonetic"]]
    for field, value in update_data.items():
        if value is not None:
            setattr(ingredient, field, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an ingredient that no recipe uses."""
    ingredient = _get_ingredient_or_404(db, ingredient_id)

    in_use = (
        db.query(RecipeIngredient).filter(RecipeIngredient.ingredient_id == ingredient_id).count()
    )
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Ingredient is used by {in_use} recipe(s)",
        )

    # User lists keep their copied names
    for model in (WishlistIngredient, UserAllergy):
        db.query(model).filter(model.ingredient_id == ingredient_id).update({"ingredient_id": None})
    db.delete(ingredient)
    db.commit()


# --- Admin users ---


def _get_admin_or_404(db: Session, admin_id: int) -> Admin:
    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if not admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")
    return admin


@router.get("/users", response_model=list[AdminResponse])
def list_admins(
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    return db.query(Admin).order_by(Admin.id).all()


@router.post("/users", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
def create_admin_user(
    data: AdminCreate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Create another back office account."""
    username = data.username.strip()
    exists = db.query(Admin).filter(func.lower(Admin.username) == username.lower()).first()
    if exists:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")

    created = create_admin(db, username, data.password)
    logger.info(f"Admin '{admin.username}' created admin '{created.username}'")
    return created


@router.put("/users/{admin_id}", response_model=AdminResponse)
def update_admin_password(
    admin_id: int,
    data: AdminUpdate,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    target = _get_admin_or_404(db, admin_id)
    target.password_hash = get_password_hash(data.password)
    db.commit()
    db.refresh(target)
    return target


@router.delete("/users/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_admin_user(
    admin_id: int,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an admin account. The last remaining admin cannot be deleted."""
    target = _get_admin_or_404(db, admin_id)
    if db.query(Admin).count() <= 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete the last admin"
        )

    db.delete(target)
    db.commit()
    logger.info(f"Admin '{admin.username}' deleted admin {admin_id}")


# --- Recipe requests ---


def _get_request_or_404(db: Session, request_id: int) -> RecipeRequest:
    recipe_request = db.query(RecipeRequest).filter(RecipeRequest.id == request_id).first()
    if not recipe_request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Request not found")
    return recipe_request


@router.get("/recipe-requests", response_model=RecipeRequestListResponse)
def list_recipe_requests(
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    request_type: Annotated[str | None, Query(alias="type")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List recipe requests, newest first."""
    query = db.query(RecipeRequest)
    if status_filter:
        query = query.filter(RecipeRequest.status == status_filter)
    if request_type:
        query = query.filter(RecipeRequest.request_type == request_type)

    total = query.count()
    requests = (
        query.order_by(RecipeRequest.created_at.desc(), RecipeRequest.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return RecipeRequestListResponse(
        requests=[RecipeRequestResponse.model_validate(r) for r in requests],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/recipe-requests/{request_id}", response_model=RecipeRequestResponse)
def get_recipe_request(
    request_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    return _get_request_or_404(db, request_id)


@router.patch("/recipe-requests/{request_id}", response_model=RecipeRequestResponse)
def update_recipe_request(
    request_id: int,
    data: RecipeRequestUpdate,
    admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    """Approve or reject a request, stamping when and by whom."""
    recipe_request = _get_request_or_404(db, request_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(recipe_request, field, value)

    if "status" in update_data:
        recipe_request.processed_at = datetime.now(UTC)
        if not recipe_request.processed_by:
            recipe_request.processed_by = admin.username

    db.commit()
    db.refresh(recipe_request)
    return recipe_request


@router.delete("/recipe-requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe_request(
    request_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    db.delete(_get_request_or_404(db, request_id))
    db.commit()


# --- Reports ---


def _get_report_or_404(db: Session, report_id: int) -> RecipeReport:
    report = db.query(RecipeReport).filter(RecipeReport.id == report_id).first()
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    return report


@router.get("/reports", response_model=list[RecipeReportResponse])
def list_reports(
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
):
    """List reports, newest first, with the reported recipe."""
    query = db.query(RecipeReport)
    if status_filter:
        query = query.filter(RecipeReport.status == status_filter)
    return query.order_by(RecipeReport.created_at.desc(), RecipeReport.id.desc()).all()


@router.get("/reports/{report_id}", response_model=RecipeReportResponse)
def get_report(
    report_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    return _get_report_or_404(db, report_id)


@router.patch("/reports/{report_id}", response_model=RecipeReportResponse)
def update_report(
    report_id: int,
    data: RecipeReportUpdate,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    report = _get_report_or_404(db, report_id)
    report.status = data.status
    db.commit()
    db.refresh(report)
    return report


@router.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    _admin: CurrentAdmin,
    db: Annotated[Session, Depends(get_db)],
):
    db.delete(_get_report_or_404(db, report_id))
    db.commit()


# --- Catalog export ---


@router.post("/trigger-sync", response_model=SyncResponse)
async def trigger_sync(admin: CurrentAdmin):
    """Dispatch the GitHub workflow that exports the catalog."""
    result = await trigger_export_workflow()
    if not result["ok"]:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.get("detail") or "Failed to trigger sync",
        )
    logger.info(f"Admin '{admin.username}' triggered catalog export")
    return SyncResponse(ok=True)
