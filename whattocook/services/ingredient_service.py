"""Ingredient lookup and find-or-create helpers."""

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from whattocook.models.ingredient import Ingredient

logger = logging.getLogger(__name__)


def find_ingredient_by_name(db: Session, name: str) -> Ingredient | None:
    """Exact lookup by English name (case-insensitive), Bengali name or phonetic alias."""
    name = name.strip()
    if not name:
        return None

    ingredient = (
        db.query(Ingredient)
        .filter(
            or_(
                func.lower(Ingredient.name_en) == name.lower(),
                Ingredient.name_bn == name,
            )
        )
        .order_by(Ingredient.id)
        .first()
    )
    if ingredient:
        return ingredient

    # Phonetic aliases live in a JSON list, so match them in Python
    alias = name.lower()
    for candidate in db.query(Ingredient).order_by(Ingredient.id).all():
        if alias in (candidate.phonetic or []):
            return candidate
    return None


def find_or_create_ingredient(
    db: Session,
    name_en: str | None = None,
    name_bn: str | None = None,
    img: str | None = None,
    phonetic: list[str] | None = None,
) -> tuple[Ingredient, bool]:
    """Find an ingredient by either name, creating a minimal one if absent.

    Returns:
        (ingredient, created)
    """
    name_en = name_en.strip() if name_en else None
    name_bn = name_bn.strip() if name_bn else None

    conditions = []
    if name_en:
        conditions.append(func.lower(Ingredient.name_en) == name_en.lower())
        conditions.append(Ingredient.name_bn == name_en)
    if name_bn:
        conditions.append(Ingredient.name_bn == name_bn)
        conditions.append(func.lower(Ingredient.name_en) == name_bn.lower())

    if conditions:
        found = db.query(Ingredient).filter(or_(*conditions)).order_by(Ingredient.id).first()
        if found:
            return found, False

    ingredient = Ingredient(
        name_en=name_en or "",
        name_bn=name_bn or "",
        img=img or "",
        phonetic=[p.lower() for p in phonetic or []],
    )
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    logger.info(f"Created ingredient {ingredient.id}: '{ingredient.name_en}' / '{ingredient.name_bn}'")
    return ingredient, True


def search_ingredients(
    db: Session, search: str = "", page: int = 1, limit: int = 50
) -> tuple[list[Ingredient], int]:
    """Partial name search over both languages, paginated by English name."""
    query = db.query(Ingredient)
    if search:
        query = query.filter(
            or_(
                Ingredient.name_en.ilike(f"%{search}%"),
                Ingredient.name_bn.contains(search),
            )
        )
    total = query.count()
    ingredients = (
        query.order_by(Ingredient.name_en, Ingredient.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ingredients, total
