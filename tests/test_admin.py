"""Back office API tests."""

from unittest.mock import AsyncMock, MagicMock, patch

from whattocook.models.feedback import RecipeReport, RecipeRequest
from whattocook.models.ingredient import Ingredient
from whattocook.models.user import Admin


def recipe_payload(ingredient_ids: list[int], slug: str = "dal-tadka", **overrides) -> dict:
    payload = {
        "slug": slug,
        "title_en": "Dal Tadka",
        "title_bn": "ডাল তড়কা",
        "cuisine": "Bangladeshi",
        "category": "Lentils",
        "prep_time": 10,
        "cook_time": 30,
        "ingredients": [
            {"ingredient_id": i, "quantity": "1", "unit_en": "cup"} for i in ingredient_ids
        ],
        "steps": [
            {"step_number": 1, "instruction_en": "Boil the lentils."},
            {"step_number": 2, "instruction_en": "Temper with garlic.", "timestamp": "02:15"},
        ],
        "blog_content": {"intro_en": "Comfort food.", "intro_bn": "আরামের খাবার।"},
    }
    payload.update(overrides)
    return payload


def add_ingredients(db, *names) -> list[int]:
    ids = []
    for name in names:
        ingredient = Ingredient(name_en=name, name_bn="", img="", phonetic=[])
        db.add(ingredient)
        db.flush()
        ids.append(ingredient.id)
    db.commit()
    return ids


# --- Auth ---


def test_admin_login_is_case_insensitive(client, admin_headers):
    response = client.post("/api/v1/admin/login", json={"username": "CHEF", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["admin"]["username"] == "chef"
    assert "password_hash" not in response.json()["admin"]


def test_admin_login_wrong_password(client, admin_headers):
    response = client.post("/api/v1/admin/login", json={"username": "chef", "password": "nope"})
    assert response.status_code == 401


def test_admin_routes_reject_user_tokens(client, auth_headers):
    response = client.get("/api/v1/admin/recipes", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


# --- Recipes ---


def test_create_and_get_recipe(client, admin_headers, db):
    ids = add_ingredients(db, "Lentils", "Garlic")

    response = client.post("/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload(ids))
    assert response.status_code == 201
    data = response.json()
    assert [i["ingredient"]["name_en"] for i in data["ingredients"]] == ["Lentils", "Garlic"]
    assert [s["step_number"] for s in data["steps"]] == [1, 2]
    assert data["blog_content"]["intro_bn"] == "আরামের খাবার।"

    response = client.get(f"/api/v1/admin/recipes/{data['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["slug"] == "dal-tadka"

    # Visible on the public API too
    assert client.get("/api/v1/recipes/dal-tadka").status_code == 200


def test_create_recipe_duplicate_slug(client, admin_headers, db):
    ids = add_ingredients(db, "Lentils")
    client.post("/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload(ids))

    response = client.post("/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload(ids))
    assert response.status_code == 409


def test_create_recipe_unknown_ingredient(client, admin_headers):
    response = client.post(
        "/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload([12345])
    )
    assert response.status_code == 400
    assert "12345" in response.json()["detail"]


def test_create_recipe_invalid_slug(client, admin_headers):
    response = client.post(
        "/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload([], slug="Not A Slug")
    )
    assert response.status_code == 422


def test_replace_recipe_rebuilds_children(client, admin_headers, db):
    lentils, garlic, chili = add_ingredients(db, "Lentils", "Garlic", "Chili")
    created = client.post(
        "/api/v1/admin/recipes", headers=admin_headers, json=recipe_payload([lentils, garlic])
    ).json()

    payload = recipe_payload(
        [chili],
        title_en="Spicy Dal",
        steps=[{"step_number": 1, "instruction_en": "Just add chili."}],
    )
    response = client.put(
        f"/api/v1/admin/recipes/{created['id']}", headers=admin_headers, json=payload
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title_en"] == "Spicy Dal"
    assert [i["ingredient"]["name_en"] for i in data["ingredients"]] == ["Chili"]
    assert [s["instruction_en"] for s in data["steps"]] == ["Just add chili."]


def test_replace_missing_recipe(client, admin_headers):
    response = client.put("/api/v1/admin/recipes/999", headers=admin_headers, json=recipe_payload([]))
    assert response.status_code == 404


def test_list_and_delete_recipes(client, admin_headers, sample_recipes):
    response = client.get("/api/v1/admin/recipes", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 3

    omelette_id = sample_recipes["omelette"].id
    response = client.delete(f"/api/v1/admin/recipes/{omelette_id}", headers=admin_headers)
    assert response.status_code == 204
    response = client.delete(f"/api/v1/admin/recipes/{omelette_id}", headers=admin_headers)
    assert response.status_code == 404


def test_bulk_delete_recipes(client, admin_headers, sample_recipes):
    ids = [sample_recipes["omelette"].id, sample_recipes["garlic-rice"].id, 999]
    response = client.post(
        "/api/v1/admin/recipes/bulk-delete", headers=admin_headers, json={"ids": ids}
    )
    assert response.status_code == 200
    assert response.json() == {"deleted": 2}

    remaining = client.get("/api/v1/recipes").json()["recipes"]
    assert [r["slug"] for r in remaining] == ["aloo-bhaji"]


def test_bulk_delete_requires_ids(client, admin_headers):
    response = client.post("/api/v1/admin/recipes/bulk-delete", headers=admin_headers, json={"ids": []})
    assert response.status_code == 422


# --- URL audit ---


def test_check_recipe_urls_fix(client, admin_headers, recipe_factory, db):
    recipe = recipe_factory(
        "fish-curry",
        "Fish Curry",
        ["Fish"],
        youtube_url="https://www.google.com/url?q=https://www.youtube.com/watch?v%3DabcDEF12345",
        image="[photo](https://example.com/fish.jpg)",
    )

    response = client.post(
        f"/api/v1/admin/recipes/{recipe.id}/check-urls", headers=admin_headers, json={"fix": True}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["fixed"] is True
    assert data["changes"] == {
        "youtube_url": "https://www.youtube.com/watch?v=abcDEF12345",
        "youtube_id": "abcDEF12345",
        "image": "https://example.com/fish.jpg",
    }

    db.refresh(recipe)
    assert recipe.youtube_id == "abcDEF12345"
    assert recipe.image == "https://example.com/fish.jpg"


def test_check_recipe_urls_clean(client, admin_headers, recipe_factory):
    recipe = recipe_factory(
        "clean",
        "Clean",
        ["Fish"],
        youtube_url="https://youtu.be/abcDEF12345",
        youtube_id="abcDEF12345",
        image="https://example.com/clean.jpg",
    )
    response = client.post(
        f"/api/v1/admin/recipes/{recipe.id}/check-urls", headers=admin_headers, json={}
    )
    assert response.json() == {
        "id": recipe.id,
        "slug": "clean",
        "fixed": False,
        "changes": None,
        "issues": [],
    }


def test_queue_url_audit(client, admin_headers):
    with patch("whattocook.tasks.url_audit.audit_recipe_urls.delay") as mock_task:
        mock_task.return_value = MagicMock(id="task-123")
        response = client.post(
            "/api/v1/admin/recipes/check-urls", headers=admin_headers, json={"fix": True}
        )
    assert response.status_code == 202
    assert response.json() == {"task_id": "task-123", "status": "queued"}
    mock_task.assert_called_once_with(fix=True)


def test_task_status(client, admin_headers):
    result = MagicMock(status="SUCCESS", result={"ok": True, "results": []})
    result.ready.return_value = True
    result.failed.return_value = False
    with patch("whattocook.api.admin.celery_app.AsyncResult", return_value=result):
        response = client.get("/api/v1/admin/tasks/task-123", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "task_id": "task-123",
        "status": "SUCCESS",
        "result": {"ok": True, "results": []},
    }


def test_task_status_failed(client, admin_headers):
    result = MagicMock(status="FAILURE", result=TimeoutError("Task exceeded time limit"))
    result.ready.return_value = True
    result.failed.return_value = True
    with patch("whattocook.api.admin.celery_app.AsyncResult", return_value=result):
        response = client.get("/api/v1/admin/tasks/task-456", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "task_id": "task-456",
        "status": "FAILURE",
        "result": {"error": "Task exceeded time limit"},
    }


def test_task_status_pending(client, admin_headers):
    result = MagicMock(status="PENDING")
    result.ready.return_value = False
    with patch("whattocook.api.admin.celery_app.AsyncResult", return_value=result):
        response = client.get("/api/v1/admin/tasks/task-789", headers=admin_headers)
    assert response.json()["result"] is None


# --- Ingredients ---


def test_ingredient_crud(client, admin_headers, db):
    response = client.post(
        "/api/v1/admin/ingredients",
        headers=admin_headers,
        json={"name_en": "Turmeric", "name_bn": "হলুদ", "phonetic": ["Holud"]},
    )
    assert response.status_code == 201
    ingredient_id = response.json()["id"]
    assert response.json()["phonetic"] == ["holud"]

    response = client.patch(
        f"/api/v1/admin/ingredients/{ingredient_id}",
        headers=admin_headers,
        json={"img": "https://example.com/turmeric.png"},
    )
    assert response.json()["img"] == "https://example.com/turmeric.png"
    assert response.json()["name_bn"] == "হলুদ"

    response = client.get("/api/v1/admin/ingredients", headers=admin_headers, params={"search": "turm"})
    assert response.json()["pagination"]["total"] == 1

    response = client.delete(f"/api/v1/admin/ingredients/{ingredient_id}", headers=admin_headers)
    assert response.status_code == 204
    assert client.get(
        f"/api/v1/admin/ingredients/{ingredient_id}", headers=admin_headers
    ).status_code == 404


def test_delete_ingredient_in_use(client, admin_headers, sample_recipes):
    potato_id = sample_recipes["aloo-bhaji"].ingredients[0].ingredient_id
    response = client.delete(f"/api/v1/admin/ingredients/{potato_id}", headers=admin_headers)
    assert response.status_code == 409


# --- Admin users ---


def test_admin_user_management(client, admin_headers, db):
    response = client.post(
        "/api/v1/admin/users", headers=admin_headers, json={"username": "sous", "password": "short1"}
    )
    assert response.status_code == 201
    sous_id = response.json()["id"]

    response = client.post(
        "/api/v1/admin/users", headers=admin_headers, json={"username": "SOUS", "password": "another1"}
    )
    assert response.status_code == 400

    response = client.put(
        f"/api/v1/admin/users/{sous_id}", headers=admin_headers, json={"password": "newpass1"}
    )
    assert response.status_code == 200
    login = client.post("/api/v1/admin/login", json={"username": "sous", "password": "newpass1"})
    assert login.status_code == 200

    response = client.get("/api/v1/admin/users", headers=admin_headers)
    assert [a["username"] for a in response.json()] == ["chef", "sous"]

    response = client.delete(f"/api/v1/admin/users/{sous_id}", headers=admin_headers)
    assert response.status_code == 204


def test_admin_password_too_short(client, admin_headers):
    response = client.post(
        "/api/v1/admin/users", headers=admin_headers, json={"username": "x", "password": "12345"}
    )
    assert response.status_code == 422


def test_cannot_delete_last_admin(client, admin_headers, db):
    chef = db.query(Admin).one()
    response = client.delete(f"/api/v1/admin/users/{chef.id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete the last admin"


# --- Recipe requests and reports ---


def test_recipe_request_review(client, admin_headers, db):
    db.add_all(
        [
            RecipeRequest(request_type="by-name", recipe_name="Biryani", ingredients=[]),
            RecipeRequest(request_type="by-ingredients", ingredients=["egg"]),
        ]
    )
    db.commit()

    response = client.get(
        "/api/v1/admin/recipe-requests", headers=admin_headers, params={"type": "by-name"}
    )
    assert response.json()["total"] == 1
    request_id = response.json()["requests"][0]["id"]

    response = client.patch(
        f"/api/v1/admin/recipe-requests/{request_id}",
        headers=admin_headers,
        json={"status": "approved", "admin_notes": "Queued for filming"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "approved"
    assert data["processed_by"] == "chef"
    assert data["processed_at"] is not None

    response = client.get(
        "/api/v1/admin/recipe-requests", headers=admin_headers, params={"status": "pending"}
    )
    assert response.json()["total"] == 1

    response = client.delete(f"/api/v1/admin/recipe-requests/{request_id}", headers=admin_headers)
    assert response.status_code == 204
    assert db.query(RecipeRequest).count() == 1


def test_report_review(client, admin_headers, sample_recipes, db):
    db.add(RecipeReport(recipe_id=sample_recipes["omelette"].id, reason="Typo"))
    db.commit()

    reports = client.get("/api/v1/admin/reports", headers=admin_headers).json()
    assert len(reports) == 1
    assert reports[0]["recipe"]["slug"] == "omelette"

    report_id = reports[0]["id"]
    response = client.patch(
        f"/api/v1/admin/reports/{report_id}", headers=admin_headers, json={"status": "closed"}
    )
    assert response.json()["status"] == "closed"

    response = client.patch(
        f"/api/v1/admin/reports/{report_id}", headers=admin_headers, json={"status": "deleted"}
    )
    assert response.status_code == 422

    assert client.delete(f"/api/v1/admin/reports/{report_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/admin/reports/{report_id}", headers=admin_headers).status_code == 404


# --- Catalog export ---


def test_trigger_sync(client, admin_headers):
    with patch(
        "whattocook.api.admin.trigger_export_workflow", new=AsyncMock(return_value={"ok": True})
    ):
        response = client.post("/api/v1/admin/trigger-sync", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["ok"] is True


def test_trigger_sync_without_token(client, admin_headers):
    response = client.post("/api/v1/admin/trigger-sync", headers=admin_headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Server missing GitHub token"
