"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from whattocook.database import Base, get_db
from whattocook.main import app
from whattocook.models.ingredient import Ingredient
from whattocook.models.recipe import Recipe, RecipeIngredient, RecipeStep
from whattocook.services.auth import create_admin


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/whattocook", "/whattocook_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "test@example.com", "password": "testpass123", "name": "Test User"},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]
    user_id = data["user"]["id"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id)


@pytest.fixture
def admin_headers(client, db):
    """Create an admin account and return admin auth headers."""
    create_admin(db, "chef", "secret123")
    response = client.post(
        "/api/v1/admin/login", json={"username": "chef", "password": "secret123"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def make_recipe(db, slug: str, title_en: str, ingredients: list, title_bn: str = "", **fields):
    """Insert a recipe whose ingredients are given as (name_en, name_bn) pairs or names."""
    recipe = Recipe(slug=slug, title_en=title_en, title_bn=title_bn or title_en, **fields)
    for entry in ingredients:
        name_en, name_bn = entry if isinstance(entry, tuple) else (entry, "")
        ingredient = db.query(Ingredient).filter(Ingredient.name_en == name_en).first()
        if ingredient is None:
            ingredient = Ingredient(name_en=name_en, name_bn=name_bn, img="", phonetic=[])
            db.add(ingredient)
            db.flush()
        recipe.ingredients.append(RecipeIngredient(ingredient_id=ingredient.id, quantity="1"))
    recipe.steps.append(RecipeStep(step_number=1, instruction_en="Cook it.", instruction_bn=""))
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


@pytest.fixture
def sample_recipes(db):
    """Three-recipe catalog used by the ingredient search scenarios."""
    return {
        "aloo-bhaji": make_recipe(
            db,
            "aloo-bhaji",
            "Aloo Bhaji",
            [("Potato", "আলু"), ("Onion", "পেঁয়াজ"), ("Salt", "লবণ")],
            title_bn="আলু ভাজি",
            cuisine="Bangladeshi",
            category="Savory",
            difficulty="easy",
            prep_time=10,
            cook_time=15,
        ),
        "omelette": make_recipe(
            db,
            "omelette",
            "Omelette",
            [("Egg", "ডিম"), ("Onion", "পেঁয়াজ")],
            title_bn="ওমলেট",
            cuisine="Bangladeshi",
            category="Savory",
            difficulty="easy",
            prep_time=5,
            cook_time=5,
        ),
        "garlic-rice": make_recipe(
            db,
            "garlic-rice",
            "Garlic Rice",
            [("Rice", "চাল"), ("Garlic", "রসুন"), ("Oil", "তেল"), ("Salt", "লবণ")],
            title_bn="রসুন ভাত",
            cuisine="Fusion",
            category="Rice",
            difficulty="medium",
            prep_time=10,
            cook_time=25,
        ),
    }


@pytest.fixture
def recipe_factory(db):
    """Return a helper that inserts recipes into the test session."""

    def factory(slug: str, title_en: str, ingredients: list, **fields):
        return make_recipe(db, slug, title_en, ingredients, **fields)

    return factory
