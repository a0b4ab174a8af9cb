"""Recipe and image extraction through the LLM proxy.

The pipeline only depends on the ``ExtractionCollaborator`` protocol; the
LLM-backed client here is the default implementation and can be swapped for
anything that honours the same text-in/text-out contract.
"""

import logging
from typing import Dict, Optional, Protocol

import httpx

from recipe_extractor.app.core.config import get_settings
from recipe_extractor.app.services.errors import ExtractionError
from recipe_extractor.app.services.recipe_metadata import (
    METADATA_END,
    METADATA_START,
    NOT_A_RECIPE,
)

logger = logging.getLogger(__name__)

NO_IMAGE_FOUND = "no image found"

RECIPE_SYSTEM_PROMPT = f"""You are a recipe extraction specialist. Your task is to:
1. Analyze the provided markdown content for recipe information
2. If you find a recipe, extract ONLY the recipe data including: title, ingredients, instructions, cooking time, servings, etc.
3. Remove all website noise like advertisements, navigation, comments, related articles, etc.
4. PRESERVE recipe images that show the dish, ingredients, or cooking steps in markdown format ![alt](url)
5. Convert the recipe to the specified language if provided (translate all text including title, ingredients, and instructions)
6. Convert ingredient measurements to the specified units if provided
7. Format the recipe in clean, structured markdown with structured metadata
8. If no recipe is found in the content, respond with exactly: "{NOT_A_RECIPE}"

You MUST start your response with a structured metadata section using this exact format:

{METADATA_START}
NAME: [Recipe Name]
TIME_MINUTES: [Total time in minutes as a number]
SERVES_PEOPLE: [Number of people served as a number]
MAKES_ITEMS: [Number of individual items made, or "N/A" if not applicable]
LANGUAGE: [Target language requested by user, or "N/A" if not specified]
UNITS_LENGTH: [Target length units requested by user, or "N/A" if not specified]
UNITS_LIQUID: [Target liquid units requested by user, or "N/A" if not specified]
UNITS_WEIGHT: [Target weight units requested by user, or "N/A" if not specified]
{METADATA_END}

Then follow with the full recipe in markdown format:
- Include "**Serves:** X people" after the title, estimating if the source does not say
- If the recipe makes individual items (cupcakes, cookies, ...), also include "**Makes:** X items"
- Place the main recipe image near the top, after the title and serving information
- Keep image URLs unchanged; translate alt text along with the rest of the recipe
- Be accurate with unit conversions (1 cup flour ~ 120g, 1 tablespoon ~ 15ml)"""

IMAGE_SYSTEM_PROMPT = f"""You are an image extraction specialist. Find the main recipe photo in the markdown.
- Image references look like ![alt text](image_url) or ![](image_url)
- Prefer images near the recipe title, ingredients or instructions, with food-related alt text or file names
- Ignore logos, advertisements, author photos, social sharing images and navigation elements
- Return ONLY the image URL, no other text or formatting
- If no suitable recipe image is found, respond with exactly: "{NO_IMAGE_FOUND}"
"""


class ExtractionCollaborator(Protocol):
    async def extract_recipe(
        self, markdown: str, language: Optional[str] = None, units: Optional[str] = None
    ) -> str:
        ...

    async def extract_image(self, markdown: str) -> str:
        ...


def build_recipe_prompt(markdown: str, language: Optional[str] = None, units: Optional[str] = None) -> str:
    prompt = (
        "Please analyze the following markdown content and extract any recipe information. "
        "Remove all website noise and focus only on the recipe data:\n\n"
        f"{markdown}"
    )
    if language:
        prompt += (
            "\n\nIMPORTANT: Please translate the entire recipe (title, ingredients, "
            f"instructions, and all text) to {language}."
        )
    if units:
        prompt += (
            "\n\nIMPORTANT: Please convert all measurements and temperatures in the recipe "
            f'according to these units: "{units}". Use accurate conversion factors '
            "(e.g., 1 cup flour ≈ 120g, 1 tablespoon ≈ 15ml, 350°F = 175°C, 200°C = 400°F). "
            "If the user didn't specify certain unit types, keep the recipe's original units "
            "for those measurements."
        )
    return prompt


def build_image_prompt(markdown: str) -> str:
    return (
        "Please analyze the following markdown content and extract the main recipe image URL:\n\n"
        f"{markdown}"
    )


def _message_content(data) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    content = None
    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        message = choices[0].get("message")
        if isinstance(message, dict):
            content = message.get("content")
    if not content and isinstance(data.get("message"), dict):
        content = data["message"].get("content")
    if not content and "content" in data:
        content = data.get("content")
    return content if isinstance(content, str) else None


class LlmExtractionClient:
    """ExtractionCollaborator backed by an OpenAI-compatible chat endpoint."""

    def __init__(
        self,
        base_url: str,
        recipe_model: str,
        image_model: str,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        timeout_seconds: float = 90.0,
        max_tokens: int = 4000,
    ):
        self.base_url = base_url.rstrip("/")
        self.recipe_model = recipe_model
        self.image_model = image_model
        self.app_id = app_id
        self.app_key = app_key
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.app_id and self.app_key:
            headers["X-Jarvis-App-Id"] = self.app_id
            headers["X-Jarvis-App-Key"] = self.app_key
        return headers

    async def _complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "model": model,
            "temperature": 0.0,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": self.max_tokens,
            "stream": False,
        }
        timeout = httpx.Timeout(self.timeout_seconds, connect=10.0)
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.post(
                    f"{self.base_url}/v1/chat/completions", json=payload, headers=self._headers()
                )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise ExtractionError("LLM request timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise ExtractionError(f"LLM proxy returned status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise ExtractionError(f"LLM request failed: {exc}") from exc
        except ValueError as exc:
            raise ExtractionError("LLM proxy returned invalid JSON") from exc

        if isinstance(data, dict) and "error" in data:
            error_info = data["error"] if isinstance(data["error"], dict) else {"message": str(data["error"])}
            error_type = error_info.get("type", "unknown_error")
            error_message = error_info.get("message", "Unknown error")
            logger.error("LLM proxy returned error: type=%s, message=%s", error_type, error_message[:500])
            raise ExtractionError(f"LLM proxy error ({error_type}): {error_message}")

        content = _message_content(data)
        if not content:
            raise ExtractionError("LLM response missing assistant content")
        return content.strip()

    async def extract_recipe(
        self, markdown: str, language: Optional[str] = None, units: Optional[str] = None
    ) -> str:
        content = await self._complete(
            self.recipe_model, RECIPE_SYSTEM_PROMPT, build_recipe_prompt(markdown, language, units)
        )
        logger.info("Recipe extraction returned %d characters", len(content))
        return content

    async def extract_image(self, markdown: str) -> str:
        return await self._complete(self.image_model, IMAGE_SYSTEM_PROMPT, build_image_prompt(markdown))


def get_extraction_client() -> Optional[LlmExtractionClient]:
    """Build the configured client, or None when LLM_BASE_URL is unset."""
    settings = get_settings()
    if not settings.llm_base_url:
        return None
    return LlmExtractionClient(
        base_url=settings.llm_base_url,
        recipe_model=settings.llm_recipe_model_name,
        image_model=settings.llm_image_model_name,
        app_id=settings.llm_app_id,
        app_key=settings.llm_app_key,
        timeout_seconds=settings.extraction_timeout_seconds,
        max_tokens=settings.llm_max_tokens,
    )
