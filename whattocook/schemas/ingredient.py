"""Ingredient schemas."""

from pydantic import BaseModel, ConfigDict, Field


class IngredientCreate(BaseModel):
    """Create an ingredient (admin)."""

    name_en: str = Field(..., min_length=1, max_length=255)
    name_bn: str = Field("", max_length=255)
    img: str = Field("", max_length=1000)
    phonetic: list[str] = []


class IngredientUpdate(BaseModel):
    """Update an ingredient (admin)."""

    name_en: str | None = Field(None, min_length=1, max_length=255)
    name_bn: str | None = Field(None, max_length=255)
    img: str | None = Field(None, max_length=1000)
    phonetic: list[str] | None = None


class IngredientFindOrCreate(BaseModel):
    """Public find-or-create request; any one name is enough."""

    name: str | None = Field(None, max_length=255)
    name_en: str | None = Field(None, max_length=255)
    name_bn: str | None = Field(None, max_length=255)

    @property
    def lookup_name(self) -> str:
        return (self.name or self.name_en or self.name_bn or "").strip()


class IngredientResponse(BaseModel):
    """Ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name_en: str
    name_bn: str
    img: str
    phonetic: list[str] = []


class IngredientBrief(BaseModel):
    """Ingredient as embedded in recipe payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name_en: str
    name_bn: str
    img: str


class IngredientLookupResponse(BaseModel):
    """Result of an exact or find-or-create lookup."""

    ingredient: IngredientResponse
    created: bool = False


class Pagination(BaseModel):
    """Page metadata for paginated listings."""

    page: int
    limit: int
    total: int
    totalPages: int


class IngredientListResponse(BaseModel):
    """Paginated ingredient search."""

    ingredients: list[IngredientResponse]
    pagination: Pagination
