"""Recipe, RecipeIngredient, RecipeStep and RecipeBlog models."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Bilingual recipe with ingredients, steps and blog content."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title_en = Column(String(255), nullable=False)
    title_bn = Column(String(255), nullable=False, default="")
    image = Column(String(1000), nullable=True)
    youtube_url = Column(String(1000), nullable=True)
    youtube_id = Column(String(20), nullable=True)
    cuisine = Column(String(100), nullable=True, index=True)
    category = Column(String(100), nullable=True, index=True)
    food_category = Column(String(100), nullable=True)  # "Savory", "Sweet", "Spicy", ...
    difficulty = Column(String(20), nullable=True)  # "Easy" | "Medium" | "Hard"
    prep_time = Column(Integer, nullable=False, default=0)  # minutes
    cook_time = Column(Integer, nullable=False, default=0)  # minutes
    servings = Column(Integer, nullable=True)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeStep.step_number",
    )
    blog_content = relationship(
        "RecipeBlog", back_populates="recipe", cascade="all, delete-orphan", uselist=False
    )


class RecipeIngredient(Base, TimestampMixin):
    """Join between a recipe and an ingredient, with recipe-specific amounts."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(String(50), nullable=True)
    unit_en = Column(String(50), nullable=True)
    unit_bn = Column(String(50), nullable=True)
    notes_en = Column(String(500), nullable=True)
    notes_bn = Column(String(500), nullable=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")


class RecipeStep(Base, TimestampMixin):
    """A numbered cooking step, optionally pinned to a video timestamp."""

    __tablename__ = "recipe_steps"
    __table_args__ = (UniqueConstraint("recipe_id", "step_number", name="uq_recipe_step_number"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    instruction_en = Column(Text, nullable=False)
    instruction_bn = Column(Text, nullable=False, default="")
    timestamp = Column(String(20), nullable=True)  # "mm:ss" into the recipe video

    recipe = relationship("Recipe", back_populates="steps")


class RecipeBlog(Base, TimestampMixin):
    """Long-form article content for a recipe page."""

    __tablename__ = "recipe_blogs"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    intro_en = Column(Text, nullable=True)
    intro_bn = Column(Text, nullable=True)
    what_makes_it_special_en = Column(Text, nullable=True)
    what_makes_it_special_bn = Column(Text, nullable=True)
    cooking_tips_en = Column(Text, nullable=True)
    cooking_tips_bn = Column(Text, nullable=True)
    serving_en = Column(Text, nullable=True)
    serving_bn = Column(Text, nullable=True)
    storage_en = Column(Text, nullable=True)
    storage_bn = Column(Text, nullable=True)
    full_blog_en = Column(Text, nullable=True)
    full_blog_bn = Column(Text, nullable=True)

    recipe = relationship("Recipe", back_populates="blog_content")
