"""Chat assistant tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from whattocook.api.dependencies import get_llm_service
from whattocook.main import app
from whattocook.services.chat_service import ChatHistoryService, ChatService
from whattocook.services.llm import LLMError, LLMService, extract_function_call, extract_text


def text_content(text: str) -> dict:
    return {"role": "model", "parts": [{"text": text}]}


def call_content(name: str, args: dict) -> dict:
    return {"role": "model", "parts": [{"functionCall": {"name": name, "args": args}}]}


@pytest.fixture
def mock_llm(client):
    """Replace the Gemini client for the duration of a test."""
    llm = MagicMock(spec=LLMService)
    llm.generate_content = AsyncMock()
    app.dependency_overrides[get_llm_service] = lambda: llm
    yield llm
    app.dependency_overrides.pop(get_llm_service, None)


# --- Response parsing ---


def test_extract_text_and_function_call():
    assert extract_text({"parts": [{"text": "Hello "}, {"text": "there"}]}) == "Hello there"
    assert extract_function_call(text_content("hi")) is None

    call = extract_function_call(call_content("getAppMetadata", {}))
    assert call == {"name": "getAppMetadata", "args": {}}


@pytest.mark.asyncio
async def test_generate_content_requires_api_key():
    service = LLMService()
    service.api_key = None
    with pytest.raises(LLMError):
        await service.generate_content([{"role": "user", "parts": [{"text": "hi"}]}])
    assert await service.health_check() is False


# --- Tool loop ---


@pytest.mark.asyncio
async def test_reply_plain_text(db):
    llm = MagicMock(spec=LLMService)
    llm.generate_content = AsyncMock(return_value=text_content("Try an omelette!"))

    service = ChatService(db, llm_service=llm)
    reply = await service.reply([{"role": "user", "content": "Breakfast idea?"}], language="bn")

    assert reply == "Try an omelette!"
    contents = llm.generate_content.call_args.args[0]
    assert contents == [{"role": "user", "parts": [{"text": "Breakfast idea?"}]}]
    assert "Bengali" in llm.generate_content.call_args.kwargs["system_prompt"]


@pytest.mark.asyncio
async def test_reply_runs_tool_and_sends_result(db, sample_recipes):
    llm = MagicMock(spec=LLMService)
    llm.generate_content = AsyncMock(
        side_effect=[
            call_content("findRecipesByIngredients", {"ingredients": ["egg", "onion"]}),
            text_content("You can make an Omelette."),
        ]
    )

    service = ChatService(db, llm_service=llm)
    reply = await service.reply([{"role": "user", "content": "I have eggs and onions"}])

    assert reply == "You can make an Omelette."
    second_contents = llm.generate_content.call_args_list[1].args[0]
    function_response = second_contents[-1]["parts"][0]["functionResponse"]
    assert second_contents[-1]["role"] == "user"
    assert function_response["name"] == "findRecipesByIngredients"
    assert function_response["response"]["result"][0]["slug"] == "omelette"


@pytest.mark.asyncio
async def test_reply_stops_after_max_tool_rounds(db):
    llm = MagicMock(spec=LLMService)
    llm.generate_content = AsyncMock(return_value=call_content("getAppMetadata", {}))

    service = ChatService(db, llm_service=llm)
    await service.reply([{"role": "user", "content": "loop"}])

    rounds = service.settings.chat_max_tool_rounds
    assert llm.generate_content.call_count == rounds + 1
    # The final call is made without tools
    assert "tools" not in llm.generate_content.call_args.kwargs


# --- Tools ---


def test_find_recipes_tool_projection(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))
    results = service.run_tool(
        "findRecipesByIngredients", {"ingredients": ["potato", "onion", "garlic"]}
    )

    assert [r["slug"] for r in results] == ["aloo-bhaji", "omelette", "garlic-rice"]
    assert results[0] == {
        "title_en": "Aloo Bhaji",
        "title_bn": "আলু ভাজি",
        "slug": "aloo-bhaji",
        "matchCount": 2,
        "totalIngredients": 3,
        "matchPercent": results[0]["matchPercent"],
    }


def test_find_recipes_tool_is_limited(db, recipe_factory):
    for i in range(8):
        recipe_factory(f"salty-{i}", f"Salty {i}", ["Salt", f"Thing {i}"])

    service = ChatService(db, llm_service=MagicMock(spec=LLMService))
    results = service.find_recipes_by_ingredients(["salt"])
    assert len(results) == service.settings.chat_tool_result_limit


def test_recipe_details_tool(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))

    details = service.run_tool("getRecipeDetails", {"slug": "omelette"})
    assert details["title_en"] == "Omelette"
    assert details["ingredients"] == ["1 Egg", "1 Onion"]
    assert details["steps"][0]["instruction"] == "Cook it."

    assert service.run_tool("getRecipeDetails", {"slug": "nope"}) == {"error": "Recipe not found"}


def test_search_recipes_tool(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))

    results = service.run_tool("searchRecipes", {"cuisine": "bangla"})
    assert {r["slug"] for r in results} == {"aloo-bhaji", "omelette"}

    results = service.run_tool("searchRecipes", {"cuisine": "bangla", "maxTime": 15})
    assert [r["slug"] for r in results] == ["omelette"]


def test_find_recipes_tool_accepts_single_ingredient_string(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))
    results = service.run_tool("findRecipesByIngredients", {"ingredients": "egg"})
    assert [r["slug"] for r in results] == ["omelette"]
    assert results[0]["matchCount"] == 1


def test_search_recipes_tool_coerces_max_time(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))

    results = service.run_tool("searchRecipes", {"cuisine": "bangla", "maxTime": "15"})
    assert [r["slug"] for r in results] == ["omelette"]

    results = service.run_tool("searchRecipes", {"maxTime": "soon"})
    assert "error" in results


def test_metadata_and_ingredient_tools(db, sample_recipes):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))

    metadata = service.run_tool("getAppMetadata", {})
    assert metadata["cuisines"] == ["Bangladeshi", "Fusion"]
    assert "Potato" in metadata["sampleIngredients"]

    hits = service.run_tool("searchIngredientsByName", {"name": "রসুন"})
    assert hits == [{"name_en": "Garlic", "name_bn": "রসুন"}]


def test_unknown_tool(db):
    service = ChatService(db, llm_service=MagicMock(spec=LLMService))
    assert service.run_tool("deleteEverything", {}) == {"error": "Unknown tool: deleteEverything"}


# --- API ---


def test_chat_endpoint(client, mock_llm):
    mock_llm.generate_content.return_value = text_content("Hello, chef!")

    response = client.post(
        "/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}], "language": "en"}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Hello, chef!"}


def test_chat_endpoint_requires_messages(client, mock_llm):
    response = client.post("/api/v1/chat", json={"messages": []})
    assert response.status_code == 400
    mock_llm.generate_content.assert_not_called()


def test_chat_endpoint_llm_failure(client, mock_llm):
    mock_llm.generate_content.side_effect = LLMError("quota exceeded")

    response = client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert response.status_code == 502


# --- History ---


def test_chat_history_roundtrip(client, auth_headers):
    response = client.get("/api/v1/chat/history", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["messages"] == []

    messages = [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello"}]
    response = client.post("/api/v1/chat/history", headers=auth_headers, json={"messages": messages})
    assert response.status_code == 200

    response = client.post(
        "/api/v1/chat/history",
        headers=auth_headers,
        json={"messages": [{"role": "user", "content": "More"}], "delta": True},
    )
    assert [m["content"] for m in response.json()["messages"]] == ["Hi", "Hello", "More"]

    response = client.get("/api/v1/chat/history", headers=auth_headers)
    assert len(response.json()["messages"]) == 3


def test_chat_history_requires_auth(client):
    assert client.get("/api/v1/chat/history").status_code in (401, 403)


def test_chat_history_compaction(db, auth_headers):
    history = ChatHistoryService(db)
    history.limit = 5

    history.save(auth_headers.user_id, [{"n": i} for i in range(4)])
    session = history.save(auth_headers.user_id, [{"n": i} for i in range(4, 8)], delta=True)
    assert [m["n"] for m in session.messages] == [3, 4, 5, 6, 7]

    session = history.save(auth_headers.user_id, [{"n": i} for i in range(10)])
    assert [m["n"] for m in session.messages] == [5, 6, 7, 8, 9]
