"""LLM service for the Gemini generateContent API."""

import logging
from typing import Any

import httpx

from whattocook.config import get_settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when the model cannot be reached or returns nothing usable."""


class LLMService:
    """Service for interacting with Gemini over its REST API."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.base_url = self.settings.gemini_base_url.rstrip("/")
        self.model = self.settings.llm_model
        self.api_key = self.settings.gemini_api_key
        self.timeout = 60.0

    async def generate_content(
        self,
        contents: list[dict[str, Any]],
        system_prompt: str | None = None,
        tools: list[dict[str, Any]] | None = None,
        temperature: float = 0.4,
        max_tokens: int = 1000,
    ) -> dict[str, Any]:
        """Send a conversation to the model and return the first candidate's content.

        The returned dict has Gemini's ``{"role": "model", "parts": [...]}`` shape;
        parts carry either ``text`` or a ``functionCall``.
        """
        if not self.api_key:
            raise LLMError("GEMINI_API_KEY is not configured")

        body: dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if tools:
            body["tools"] = [{"functionDeclarations": tools}]

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={"x-goog-api-key": self.api_key},
                    json=body,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Gemini: {e}")
            raise LLMError(str(e)) from e

        candidates = data.get("candidates") or []
        if not candidates or "content" not in candidates[0]:
            logger.warning(f"Gemini returned no candidates: {data}")
            raise LLMError("Model returned no candidates")
        content = candidates[0]["content"]
        content.setdefault("role", "model")
        content.setdefault("parts", [])
        return content

    async def health_check(self) -> bool:
        """Check if Gemini is reachable and the configured model exists."""
        if not self.api_key:
            return False
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(
                    f"{self.base_url}/models/{self.model}",
                    headers={"x-goog-api-key": self.api_key},
                )
                return response.status_code == 200
        except httpx.HTTPError:
            return False


def extract_text(content: dict[str, Any]) -> str:
    """Join the text parts of a model response."""
    return "".join(part.get("text", "") for part in content.get("parts", []))


def extract_function_call(content: dict[str, Any]) -> dict[str, Any] | None:
    """Return the first ``functionCall`` part of a model response, if any."""
    for part in content.get("parts", []):
        call = part.get("functionCall")
        if call:
            return call
    return None