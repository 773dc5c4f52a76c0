"""Recipe catalog queries shared by the public API, admin API and chat tools."""

import logging
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import Recipe, RecipeBlog, RecipeIngredient, RecipeStep
from whattocook.services.matching import ScoredRecipe, candidates_from_recipes, score_recipes

logger = logging.getLogger(__name__)

# Static suggestions offered by autocomplete alongside recipe titles
AUTOCOMPLETE_CATEGORIES = [
    "Savory",
    "Sweet",
    "Spicy",
    "Sour",
    "Dessert",
    "Drinks",
    "Appetizer",
    "Soup",
    "Salad",
]


class RecipeService:
    """Service for recipe catalog operations."""

    def __init__(self, db: Session):
        self.db = db

    # --- Lookup ---

    def get_by_slug(self, slug: str) -> Recipe | None:
        return (
            self.db.query(Recipe)
            .options(
                selectinload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient),
                selectinload(Recipe.steps),
                selectinload(Recipe.blog_content),
            )
            .filter(Recipe.slug == slug)
            .first()
        )

    def get_by_id(self, recipe_id: int) -> Recipe | None:
        return self.db.query(Recipe).filter(Recipe.id == recipe_id).first()

    def list_recipes(
        self,
        search: str = "",
        cuisine: str = "",
        category: str = "",
        difficulty: str = "",
        page: int = 1,
        limit: int = 12,
    ) -> tuple[list[Recipe], int]:
        """Filter and paginate recipes, newest first."""
        query = self.db.query(Recipe)
        if search:
            query = query.filter(
                or_(Recipe.title_en.ilike(f"%{search}%"), Recipe.title_bn.contains(search))
            )
        if cuisine:
            query = query.filter(Recipe.cuisine == cuisine)
        if category:
            query = query.filter(Recipe.category == category)
        if difficulty:
            query = query.filter(Recipe.difficulty == difficulty)

        total = query.count()
        recipes = (
            query.order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return recipes, total

    def autocomplete(self, q: str | None) -> list[dict[str, Any]]:
        """Category and recipe-title suggestions for a partial query."""
        if not q or len(q) < 2:
            return []

        recipes = (
            self.db.query(Recipe)
            .filter(or_(Recipe.title_en.ilike(f"%{q}%"), Recipe.title_bn.ilike(f"%{q}%")))
            .order_by(Recipe.id)
            .limit(5)
            .all()
        )

        suggestions: list[dict[str, Any]] = [
            {"type": "category", "label": c}
            for c in AUTOCOMPLETE_CATEGORIES
            if q.lower() in c.lower()
        ]
        suggestions.extend(
            {"type": "recipe", "label": r.title_en, "label_bn": r.title_bn, "slug": r.slug}
            for r in recipes
        )
        return suggestions

    def category_stats(self) -> dict[str, list[dict[str, Any]]]:
        """Recipe counts per category and per food category, largest first."""

        def grouped(column) -> list[dict[str, Any]]:
            rows = self.db.query(column, func.count(Recipe.id)).group_by(column).all()
            out = [
                {"name": name, "count": count}
                for name, count in rows
                if name and str(name).strip()
            ]
            return sorted(out, key=lambda c: (-c["count"], c["name"]))

        return {
            "categories": grouped(Recipe.category),
            "foodCategories": grouped(Recipe.food_category),
        }

    # --- Ingredient matching ---

    def load_catalog(self, exclude_ingredient_ids: set[int] | None = None) -> list[Recipe]:
        """Fetch every recipe with its ingredients, optionally dropping any
        recipe that uses one of ``exclude_ingredient_ids``."""
        recipes = (
            self.db.query(Recipe)
            .options(selectinload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient))
            .order_by(Recipe.id)
            .all()
        )
        if not exclude_ingredient_ids:
            return recipes
        return [
            r
            for r in recipes
            if not any(ri.ingredient_id in exclude_ingredient_ids for ri in r.ingredients)
        ]

    def search_by_ingredients(
        self,
        ingredients: list[str],
        exclude_ingredient_ids: set[int] | None = None,
    ) -> list[ScoredRecipe]:
        """Rank the whole catalog against a pantry."""
        recipes = self.load_catalog(exclude_ingredient_ids)
        if not recipes:
            logger.info("Ingredient search ran against an empty catalog")
        return score_recipes(ingredients, candidates_from_recipes(recipes))

    # --- Admin writes ---

    def create_recipe(self, data: dict[str, Any]) -> Recipe:
        """Create a recipe with nested ingredients, steps and blog content."""
        ingredients = data.pop("ingredients", None) or []
        steps = data.pop("steps", None) or []
        blog = data.pop("blog_content", None)

        recipe = Recipe(**data)
        self._set_children(recipe, ingredients, steps, blog)
        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id} ({recipe.slug})")
        return recipe

    def replace_recipe(self, recipe: Recipe, data: dict[str, Any]) -> Recipe:
        """Overwrite recipe fields and rebuild its ingredients and steps."""
        ingredients = data.pop("ingredients", None) or []
        steps = data.pop("steps", None) or []
        blog = data.pop("blog_content", None)

        for key, value in data.items():
            setattr(recipe, key, value)

        recipe.ingredients.clear()
        recipe.steps.clear()
        # Flush deletes before re-inserting so unique step numbers don't collide
        self.db.flush()
        self._set_children(recipe, ingredients, steps, blog)
        self.db.commit()
        self.db.refresh(recipe)
        return recipe

    def delete_recipes(self, ids: list[int]) -> int:
        recipes = self.db.query(Recipe).filter(Recipe.id.in_(ids)).all()
        for recipe in recipes:
            self.db.delete(recipe)
        self.db.commit()
        return len(recipes)

    def _set_children(
        self,
        recipe: Recipe,
        ingredients: list[dict[str, Any]],
        steps: list[dict[str, Any]],
        blog: dict[str, Any] | None,
    ) -> None:
        for ing in ingredients:
            recipe.ingredients.append(RecipeIngredient(**ing))
        for step in steps:
            recipe.steps.append(RecipeStep(**step))
        if blog is not None:
            if recipe.blog_content is None:
                recipe.blog_content = RecipeBlog(**blog)
            else:
                for key, value in blog.items():
                    setattr(recipe.blog_content, key, value)

    def missing_ingredient_ids(self, ids: set[int]) -> set[int]:
        """Return the subset of ``ids`` with no Ingredient row."""
        if not ids:
            return set()
        found = {i for (i,) in self.db.query(Ingredient.id).filter(Ingredient.id.in_(ids)).all()}
        return ids - found
