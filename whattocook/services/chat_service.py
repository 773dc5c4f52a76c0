"""Cooking assistant: Gemini conversation with database-backed tools."""

import json
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from whattocook.config import get_settings
from whattocook.models.chat_session import ChatSession
from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import Recipe
from whattocook.services.llm import LLMService, extract_function_call, extract_text
from whattocook.services.llm_prompts import CHAT_TOOLS, get_chat_system_prompt
from whattocook.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


class ChatService:
    """Runs one assistant turn, letting the model call catalog tools."""

    def __init__(self, db: Session, llm_service: LLMService | None = None):
        self.db = db
        self.llm_service = llm_service or LLMService()
        self.settings = get_settings()
        self.recipes = RecipeService(db)
        self.tools: dict[str, Callable[[dict[str, Any]], Any]] = {
            "findRecipesByIngredients": lambda args: self.find_recipes_by_ingredients(
                args.get("ingredients") or []
            ),
            "getRecipeDetails": lambda args: self.get_recipe_details(args.get("slug") or ""),
            "searchRecipes": self.search_recipes,
            "getAppMetadata": lambda args: self.get_app_metadata(),
            "searchIngredientsByName": lambda args: self.search_ingredients_by_name(
                args.get("name") or ""
            ),
        }

    async def reply(self, messages: list[dict[str, str]], language: str | None = "en") -> str:
        """Answer the last message of ``messages``, using earlier ones as history."""
        contents = [
            {
                "role": "user" if m["role"] == "user" else "model",
                "parts": [{"text": m["content"]}],
            }
            for m in messages
        ]
        system_prompt = get_chat_system_prompt(language)

        for _ in range(self.settings.chat_max_tool_rounds):
            content = await self.llm_service.generate_content(
                contents, system_prompt=system_prompt, tools=CHAT_TOOLS
            )
            call = extract_function_call(content)
            if call is None:
                return extract_text(content)

            name = call.get("name", "")
            result = self.run_tool(name, call.get("args") or {})
            contents.append(content)
            contents.append(
                {
                    "role": "user",
                    "parts": [{"functionResponse": {"name": name, "response": {"result": result}}}],
                }
            )

        # Out of tool rounds: ask for a plain answer from what was gathered
        content = await self.llm_service.generate_content(contents, system_prompt=system_prompt)
        return extract_text(content)

    def run_tool(self, name: str, args: dict[str, Any]) -> Any:
        """Execute a tool call from the model and return a JSON-safe result."""
        tool = self.tools.get(name)
        if tool is None:
            logger.warning(f"Model requested unknown tool '{name}'")
            return {"error": f"Unknown tool: {name}"}
        logger.info(f"Chat tool call: {name}({json.dumps(args, ensure_ascii=False)})")
        return tool(args)

    # --- Tools ---

    def find_recipes_by_ingredients(self, ingredients: list[str] | str) -> list[dict[str, Any]]:
        # A bare string would otherwise be ranked character by character
        if isinstance(ingredients, str):
            ingredients = [ingredients]
        scored = self.recipes.search_by_ingredients([str(i) for i in ingredients])
        return [
            {
                "title_en": s.recipe.title_en,
                "title_bn": s.recipe.title_bn,
                "slug": s.recipe.slug,
                "matchCount": s.matched_count,
                "totalIngredients": s.total_ingredients,
                "matchPercent": s.match_percent,
            }
            for s in scored[: self.settings.chat_tool_result_limit]
        ]

    def get_recipe_details(self, slug: str) -> dict[str, Any]:
        recipe = self.recipes.get_by_slug(slug)
        if not recipe:
            return {"error": "Recipe not found"}

        ingredients = []
        for ri in recipe.ingredients:
            line = " ".join(p for p in (ri.quantity, ri.unit_en, ri.ingredient.name_en) if p)
            ingredients.append(line)

        return {
            "title_en": recipe.title_en,
            "title_bn": recipe.title_bn,
            "cuisine": recipe.cuisine,
            "prep_time": recipe.prep_time,
            "cook_time": recipe.cook_time,
            "ingredients": ingredients,
            "steps": [
                {"step": s.step_number, "instruction": s.instruction_en, "timestamp": s.timestamp}
                for s in recipe.steps
            ],
            "youtube_url": recipe.youtube_url,
        }

    def search_recipes(self, filters: dict[str, Any]) -> list[dict[str, Any]] | dict[str, str]:
        max_time = filters.get("maxTime")
        if max_time:
            try:
                max_time = float(max_time)
            except (TypeError, ValueError):
                return {"error": f"maxTime must be a number of minutes, got {max_time!r}"}

        query = self.db.query(Recipe)
        if filters.get("cuisine"):
            query = query.filter(Recipe.cuisine.ilike(f"%{filters['cuisine']}%"))
        if filters.get("category"):
            query = query.filter(Recipe.category.ilike(f"%{filters['category']}%"))
        if filters.get("foodCategory"):
            query = query.filter(Recipe.food_category.ilike(f"%{filters['foodCategory']}%"))
        if filters.get("difficulty"):
            query = query.filter(Recipe.difficulty == filters["difficulty"])

        recipes = query.order_by(Recipe.id).limit(10).all()

        if max_time:
            recipes = [r for r in recipes if (r.prep_time or 0) + (r.cook_time or 0) <= max_time]

        return [{"title": r.title_en, "slug": r.slug, "cuisine": r.cuisine} for r in recipes]

    def get_app_metadata(self) -> dict[str, Any]:
        cuisines = self.db.query(Recipe.cuisine).distinct().order_by(Recipe.cuisine).all()
        categories = self.db.query(Recipe.category).distinct().order_by(Recipe.category).all()
        ingredients = self.db.query(Ingredient.name_en).order_by(Ingredient.id).limit(20).all()
        return {
            "cuisines": [c for (c,) in cuisines if c],
            "categories": [c for (c,) in categories if c],
            "sampleIngredients": [name for (name,) in ingredients],
        }

    def search_ingredients_by_name(self, name: str) -> list[dict[str, str]]:
        ingredients = (
            self.db.query(Ingredient)
            .filter(
                or_(
                    Ingredient.name_en.ilike(f"%{name}%"),
                    Ingredient.name_bn.ilike(f"%{name}%"),
                )
            )
            .order_by(Ingredient.id)
            .limit(5)
            .all()
        )
        return [{"name_en": i.name_en, "name_bn": i.name_bn} for i in ingredients]


class ChatHistoryService:
    """Persists chat transcripts per user."""

    def __init__(self, db: Session):
        self.db = db
        self.limit = get_settings().chat_history_limit

    def get(self, user_id: int) -> ChatSession | None:
        return self.db.query(ChatSession).filter(ChatSession.user_id == user_id).first()

    def save(self, user_id: int, messages: list[dict[str, Any]], delta: bool = False) -> ChatSession:
        """Replace the transcript, or append to it when ``delta`` is set.

        Either way only the most recent ``chat_history_limit`` messages are kept.
        """
        session = self.get(user_id)
        if session is None:
            session = ChatSession(user_id=user_id, messages=[])
            self.db.add(session)

        if delta:
            messages = list(session.messages or []) + list(messages)
        # Reassign so the JSON column is flagged dirty
        session.messages = list(messages)[-self.limit :]

        self.db.commit()
        self.db.refresh(session)
        return session
