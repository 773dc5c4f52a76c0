"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from whattocook.schemas.ingredient import IngredientBrief, Pagination

# --- Nested parts ---


class RecipeIngredientCreate(BaseModel):
    """Attach an ingredient to a recipe."""

    ingredient_id: int
    quantity: str | None = Field(None, max_length=50)
    unit_en: str | None = Field(None, max_length=50)
    unit_bn: str | None = Field(None, max_length=50)
    notes_en: str | None = Field(None, max_length=500)
    notes_bn: str | None = Field(None, max_length=500)


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ingredient_id: int
    quantity: str | None
    unit_en: str | None
    unit_bn: str | None
    notes_en: str | None
    notes_bn: str | None
    ingredient: IngredientBrief


class RecipeStepCreate(BaseModel):
    """A cooking step."""

    step_number: int = Field(..., ge=1)
    instruction_en: str = Field(..., min_length=1)
    instruction_bn: str = ""
    timestamp: str | None = Field(None, max_length=20)


class RecipeStepResponse(RecipeStepCreate):
    """Cooking step response."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class RecipeBlogContent(BaseModel):
    """Long-form recipe article, both languages."""

    model_config = ConfigDict(from_attributes=True)

    intro_en: str | None = None
    intro_bn: str | None = None
    what_makes_it_special_en: str | None = None
    what_makes_it_special_bn: str | None = None
    cooking_tips_en: str | None = None
    cooking_tips_bn: str | None = None
    serving_en: str | None = None
    serving_bn: str | None = None
    storage_en: str | None = None
    storage_bn: str | None = None
    full_blog_en: str | None = None
    full_blog_bn: str | None = None


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create or replace a recipe (admin)."""

    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9][a-z0-9-]*$")
    title_en: str = Field(..., min_length=1, max_length=255)
    title_bn: str = Field("", max_length=255)
    image: str | None = Field(None, max_length=1000)
    youtube_url: str | None = Field(None, max_length=1000)
    youtube_id: str | None = Field(None, max_length=20)
    cuisine: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    food_category: str | None = Field(None, max_length=100)
    difficulty: str | None = Field(None, max_length=20)
    prep_time: int = Field(0, ge=0)
    cook_time: int = Field(0, ge=0)
    servings: int | None = Field(None, ge=1)
    ingredients: list[RecipeIngredientCreate] = []
    steps: list[RecipeStepCreate] = []
    blog_content: RecipeBlogContent | None = None


class RecipeSummary(BaseModel):
    """Recipe card fields used by listings and search results."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    slug: str
    title_en: str
    title_bn: str
    image: str | None
    cuisine: str | None
    category: str | None
    difficulty: str | None
    prep_time: int
    cook_time: int
    servings: int | None
    created_at: datetime = Field(..., serialization_alias="createdAt")


class RecipeDetailResponse(BaseModel):
    """Full recipe with ingredients, steps and blog."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title_en: str
    title_bn: str
    image: str | None
    youtube_url: str | None
    youtube_id: str | None
    cuisine: str | None
    category: str | None
    food_category: str | None
    difficulty: str | None
    prep_time: int
    cook_time: int
    servings: int | None
    ingredients: list[RecipeIngredientResponse]
    steps: list[RecipeStepResponse]
    blog_content: RecipeBlogContent | None
    created_at: datetime
    updated_at: datetime


class RecipeListResponse(BaseModel):
    """Paginated recipe listing."""

    recipes: list[RecipeSummary]
    pagination: Pagination


class AdminRecipeListResponse(BaseModel):
    """Paginated admin listing with full recipe payloads."""

    recipes: list[RecipeDetailResponse]
    pagination: Pagination


class AutocompleteSuggestion(BaseModel):
    """A category or recipe suggestion."""

    type: str
    label: str
    label_bn: str | None = None
    slug: str | None = None


class AutocompleteResponse(BaseModel):
    suggestions: list[AutocompleteSuggestion]


class CategoryCount(BaseModel):
    name: str
    count: int


class CategoryStatsResponse(BaseModel):
    categories: list[CategoryCount]
    foodCategories: list[CategoryCount]


# --- Search by ingredients ---


class IngredientSearchRequest(BaseModel):
    """Pantry for search-by-ingredients; validated by the endpoint."""

    ingredients: list[str] | None = None
    exclude_allergies: bool = Field(False, alias="excludeAllergies")

    model_config = ConfigDict(populate_by_name=True)


class ScoredRecipeResponse(BaseModel):
    """A ranked recipe with its match statistics."""

    recipe: RecipeSummary
    match_percent: float = Field(..., serialization_alias="matchPercent")
    matched_count: int = Field(..., serialization_alias="matchedCount")
    total_ingredients: int = Field(..., serialization_alias="totalIngredients")
    missing_count: int = Field(..., serialization_alias="missingCount")


class IngredientSearchResponse(BaseModel):
    """Ranked search-by-ingredients result."""

    recipes: list[ScoredRecipeResponse]
    total: int
    searched_ingredients: list[str] = Field(..., serialization_alias="searchedIngredients")
