"""Ingredient matching and recipe ranking.

Both the search-by-ingredients endpoint and the chat assistant's
``findRecipesByIngredients`` tool rank recipes through this module. It is pure:
callers fetch the catalog, convert it with :func:`candidates_from_recipes`, and
apply their own truncation to the result of :func:`score_recipes`.
"""

import re
import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

_STRIP_CHARS = re.compile(r"""[.,()\[\]"']""")
_DASHES = re.compile(r"[–—]")
_WHITESPACE = re.compile(r"\s+")
_BENGALI_DIGITS = str.maketrans("০১২৩৪৫৬৭৮৯", "0123456789")


@dataclass(frozen=True)
class IngredientNames:
    """English and Bengali display names of one recipe ingredient."""

    name_en: str | None = ""
    name_bn: str | None = ""


@dataclass
class RecipeCandidate:
    """A recipe reduced to what the ranker needs.

    ``recipe`` is carried through untouched so callers can project whatever
    fields they serialize.
    """

    recipe: Any
    title_en: str
    ingredients: list[IngredientNames] = field(default_factory=list)


@dataclass
class ScoredRecipe:
    """Match statistics for one recipe against a pantry."""

    recipe: Any
    title_en: str
    matched_count: int
    total_ingredients: int
    missing_count: int
    match_percent: float

    @property
    def is_full_match(self) -> bool:
        return self.match_percent == 1


def normalize_ingredient_name(value: str | None) -> str:
    """Canonicalize an ingredient name for comparison.

    Lower-cases, trims, drops ``. , ( ) [ ] " '``, turns en/em dashes into
    ``-``, collapses whitespace and maps Bengali digits to Latin ones, in that
    order, then trims once more. Never raises; ``None`` and ``""`` give ``""``.
    """
    if not value:
        return ""
    out = value.lower().strip()
    out = _STRIP_CHARS.sub("", out)
    out = _DASHES.sub("-", out)
    out = _WHITESPACE.sub(" ", out)
    # Stripping punctuation can expose edge whitespace ("salt ." -> "salt ")
    return out.translate(_BENGALI_DIGITS).strip()


def tokens_match(a: str, b: str) -> bool:
    """Return True if either normalized token contains the other.

    Empty tokens never match. This is containment, not equality: "chili"
    matches "green chili" both ways, and "oil" also matches "boiled".
    """
    if not a or not b:
        return False
    return a in b or b in a


def normalize_pantry(pantry: Iterable[str | None]) -> list[str]:
    """Normalize raw pantry entries, dropping empties and duplicates (order kept)."""
    tokens: list[str] = []
    seen: set[str] = set()
    for raw in pantry:
        token = normalize_ingredient_name(raw)
        if token and token not in seen:
            seen.add(token)
            tokens.append(token)
    return tokens


def title_sort_key(title: str | None) -> tuple[str, str]:
    """Case- and accent-insensitive ordering key for recipe titles."""
    title = title or ""
    decomposed = unicodedata.normalize("NFKD", title)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return (folded, title)


def score_recipe(pantry_tokens: Sequence[str], candidate: RecipeCandidate) -> ScoredRecipe | None:
    """Score one recipe against already-normalized pantry tokens.

    Returns None for a recipe without ingredients.
    """
    total = len(candidate.ingredients)
    if total == 0:
        return None

    recipe_tokens = [
        (normalize_ingredient_name(ing.name_en), normalize_ingredient_name(ing.name_bn))
        for ing in candidate.ingredients
    ]

    matched = 0
    for token in pantry_tokens:
        for name_en, name_bn in recipe_tokens:
            if tokens_match(name_en, token) or tokens_match(name_bn, token):
                matched += 1
                break

    # Overlapping pantry entries ("chili", "green chili") can both hit one ingredient
    matched = min(matched, total)

    return ScoredRecipe(
        recipe=candidate.recipe,
        title_en=candidate.title_en or "",
        matched_count=matched,
        total_ingredients=total,
        missing_count=total - matched,
        match_percent=matched / total,
    )


def rank_key(scored: ScoredRecipe) -> tuple:
    """Sort key: full matches, higher percent, fewer missing, then title."""
    return (
        0 if scored.is_full_match else 1,
        -scored.match_percent,
        scored.missing_count,
        title_sort_key(scored.title_en),
    )


def score_recipes(
    pantry: Iterable[str | None],
    recipes: Iterable[RecipeCandidate],
) -> list[ScoredRecipe]:
    """Score and rank recipes against a pantry.

    Recipes with no overlap or no ingredients are left out. The result is
    not truncated.
    """
    pantry_tokens = normalize_pantry(pantry)
    if not pantry_tokens:
        return []

    scored = []
    for candidate in recipes:
        result = score_recipe(pantry_tokens, candidate)
        if result is not None and result.match_percent > 0:
            scored.append(result)

    scored.sort(key=rank_key)
    return scored


def candidates_from_recipes(recipes: Iterable[Any]) -> list[RecipeCandidate]:
    """Build ranker input from Recipe ORM rows with loaded ingredients."""
    candidates = []
    for recipe in recipes:
        names = []
        for recipe_ingredient in recipe.ingredients:
            ingredient = recipe_ingredient.ingredient
            if ingredient is None:
                continue
            names.append(IngredientNames(name_en=ingredient.name_en, name_bn=ingredient.name_bn))
        candidates.append(RecipeCandidate(recipe=recipe, title_en=recipe.title_en, ingredients=names))
    return candidates
