"""Prompt templates and tool declarations for the cooking assistant."""

CHAT_SYSTEM_PROMPT = """You are an expert culinary assistant for 'What to Cook' (whattocook).

PRIMARY GOALS:
1. Helping users find recipes based on what they have (using findRecipesByIngredients).
2. Providing detailed instructions for recipes (using getRecipeDetails).
3. Suggesting substitutions for missing ingredients (Expert Chef mode).
4. Navigating the app's cuisines/categories (using searchRecipes and getAppMetadata).

GUIDELINES:
- User Language: {language_name}. Respond in this language.
- Formatting: Use Markdown for bolding, lists, and links.
- Links: ALWAYS format recipe links as: [Recipe Title](/recipes/slug).
- Ingredients: If suggesting a recipe, mention matching ingredients vs missing ones.
- Be professional, warm, and helpful like a personal chef.
- If you use a tool, explain the results naturally to the user."""

LANGUAGE_NAMES = {
    "en": "English",
    "bn": "Bengali (বাংলা)",
}


def get_chat_system_prompt(language: str | None) -> str:
    """Build the assistant system prompt for the user's UI language."""
    language_name = LANGUAGE_NAMES.get(language or "en", LANGUAGE_NAMES["en"])
    return CHAT_SYSTEM_PROMPT.format(language_name=language_name)


CHAT_TOOLS = [
    {
        "name": "findRecipesByIngredients",
        "description": "Search for recipes based on a list of ingredients user has.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "ingredients": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "List of ingredients.",
                }
            },
            "required": ["ingredients"],
        },
    },
    {
        "name": "getRecipeDetails",
        "description": "Get details for a specific recipe using its slug.",
        "parameters": {
            "type": "OBJECT",
            "properties": {"slug": {"type": "STRING"}},
            "required": ["slug"],
        },
    },
    {
        "name": "searchRecipes",
        "description": "Flexible search for recipes based on cuisine, category, or time.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "cuisine": {"type": "STRING"},
                "category": {"type": "STRING"},
                "foodCategory": {"type": "STRING"},
                "difficulty": {"type": "STRING"},
                "maxTime": {"type": "NUMBER"},
            },
        },
    },
    {
        "name": "getAppMetadata",
        "description": (
            "Get available cuisines, categories, and some ingredient names "
            "to better understand the app's database."
        ),
        "parameters": {"type": "OBJECT", "properties": {}},
    },
    {
        "name": "searchIngredientsByName",
        "description": "Search for specific ingredients in our database to see what we have.",
        "parameters": {
            "type": "OBJECT",
            "properties": {"name": {"type": "STRING"}},
            "required": ["name"],
        },
    },
]
