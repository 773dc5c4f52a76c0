"""Recipe request and recipe report schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

RequestType = Literal["submit", "by-ingredients", "by-name"]
RequestStatus = Literal["pending", "approved", "rejected"]
ReportStatus = Literal["open", "reviewed", "closed"]


class RecipeRequestCreate(BaseModel):
    """Submit a recipe request."""

    request_type: RequestType
    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    user_email: EmailStr | None = None
    user_name: str | None = Field(None, max_length=255)
    recipe_data: dict[str, Any] | None = None
    ingredients: list[str] = []
    recipe_name: str | None = Field(None, max_length=255)
    youtube_url: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_by_type(self) -> "RecipeRequestCreate":
        if self.request_type == "submit" and not self.recipe_data:
            raise ValueError("Recipe data is required for submit type")
        if self.request_type == "by-ingredients" and not any(i.strip() for i in self.ingredients):
            raise ValueError("At least one ingredient is required")
        if self.request_type == "by-name" and not self.recipe_name and not self.youtube_url:
            raise ValueError("Recipe name or YouTube URL is required")
        return self


class RecipeRequestUpdate(BaseModel):
    """Admin update of a recipe request."""

    status: RequestStatus | None = None
    admin_notes: str | None = Field(None, max_length=5000)
    processed_by: str | None = Field(None, max_length=100)


class RecipeRequestResponse(BaseModel):
    """Recipe request response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    request_type: str
    title: str | None
    description: str | None
    user_email: str | None
    user_name: str | None
    recipe_data: dict[str, Any] | None
    ingredients: list[str]
    recipe_name: str | None
    youtube_url: str | None
    status: str
    admin_notes: str | None
    processed_by: str | None
    processed_at: datetime | None
    created_at: datetime


class RecipeRequestListResponse(BaseModel):
    requests: list[RecipeRequestResponse]
    total: int
    page: int
    limit: int


class RecipeReportCreate(BaseModel):
    """File a report against a recipe."""

    recipe_id: int = Field(..., ge=1)
    reporter_name: str | None = Field(None, max_length=255)
    reporter_email: EmailStr | None = None
    reason: str = Field(..., min_length=1, max_length=255)
    details: str | None = Field(None, max_length=5000)


class RecipeReportUpdate(BaseModel):
    """Admin status change for a report."""

    status: ReportStatus


class ReportedRecipe(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title_en: str
    title_bn: str


class RecipeReportResponse(BaseModel):
    """Recipe report response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    reporter_name: str | None
    reporter_email: str | None
    reason: str
    details: str | None
    status: str
    created_at: datetime
    recipe: ReportedRecipe | None = None
