"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *timestamps(),
    )

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name_en", sa.String(255), nullable=False, server_default="", index=True),
        sa.Column("name_bn", sa.String(255), nullable=False, server_default=""),
        sa.Column("img", sa.String(1000), nullable=False, server_default=""),
        sa.Column("phonetic", sa.JSON(), nullable=False),
        *timestamps(),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("slug", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("title_en", sa.String(255), nullable=False),
        sa.Column("title_bn", sa.String(255), nullable=False, server_default=""),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("youtube_url", sa.String(1000), nullable=True),
        sa.Column("youtube_id", sa.String(20), nullable=True),
        sa.Column("cuisine", sa.String(100), nullable=True, index=True),
        sa.Column("category", sa.String(100), nullable=True, index=True),
        sa.Column("food_category", sa.String(100), nullable=True),
        sa.Column("difficulty", sa.String(20), nullable=True),
        sa.Column("prep_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cook_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("servings", sa.Integer(), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column(
            "ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False, index=True
        ),
        sa.Column("quantity", sa.String(50), nullable=True),
        sa.Column("unit_en", sa.String(50), nullable=True),
        sa.Column("unit_bn", sa.String(50), nullable=True),
        sa.Column("notes_en", sa.String(500), nullable=True),
        sa.Column("notes_bn", sa.String(500), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "recipe_steps",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("instruction_en", sa.Text(), nullable=False),
        sa.Column("instruction_bn", sa.Text(), nullable=False, server_default=""),
        sa.Column("timestamp", sa.String(20), nullable=True),
        *timestamps(),
        sa.UniqueConstraint("recipe_id", "step_number", name="uq_recipe_step_number"),
    )

    op.create_table(
        "recipe_blogs",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        *[
            sa.Column(f"{field}_{lang}", sa.Text(), nullable=True)
            for field in (
                "intro",
                "what_makes_it_special",
                "cooking_tips",
                "serving",
                "storage",
                "full_blog",
            )
            for lang in ("en", "bn")
        ],
        *timestamps(),
    )

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *timestamps(),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),
    )

    for table in ("wishlist_ingredients", "user_allergies"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, index=True),
            sa.Column(
                "user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True
            ),
            sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=True),
            sa.Column("name_en", sa.String(255), nullable=False, server_default=""),
            sa.Column("name_bn", sa.String(255), nullable=True),
            *timestamps(),
        )

    op.create_table(
        "recipe_requests",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("request_type", sa.String(20), nullable=False, index=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("user_email", sa.String(255), nullable=True),
        sa.Column("user_name", sa.String(255), nullable=True),
        sa.Column("recipe_data", sa.JSON(), nullable=True),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("recipe_name", sa.String(255), nullable=True),
        sa.Column("youtube_url", sa.String(1000), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending", index=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("processed_by", sa.String(100), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )

    op.create_table(
        "recipe_reports",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("reporter_name", sa.String(255), nullable=True),
        sa.Column("reporter_email", sa.String(255), nullable=True),
        sa.Column("reason", sa.String(255), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        *timestamps(),
    )

    op.create_table(
        "chat_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, unique=True),
        sa.Column("messages", sa.JSON(), nullable=False),
        *timestamps(),
    )


def downgrade() -> None:
    op.drop_table("chat_sessions")
    op.drop_table("recipe_reports")
    op.drop_table("recipe_requests")
    op.drop_table("user_allergies")
    op.drop_table("wishlist_ingredients")
    op.drop_table("favorites")
    op.drop_table("recipe_blogs")
    op.drop_table("recipe_steps")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("ingredients")
    op.drop_table("admins")
    op.drop_table("users")
