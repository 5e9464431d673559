"""Paid AI tier for content generation using Google GenAI.

Only ever called by the generation orchestrator, which owns caching, timeouts
and fallback. Every failure surfaces as AIServiceError so the orchestrator can
degrade to the free tiers without inspecting provider exceptions.
"""

import json
import logging
from typing import List, Optional

from google.genai import Client
from google.genai import types

from models.generation import ContentKind
from services.prompts import (
    DESCRIPTION_GENERATOR_V1,
    HASHTAG_GENERATOR_V1,
    TAG_GENERATOR_V1,
    TITLE_GENERATOR_V1,
    format_bullets,
    strip_markdown_code_blocks,
)
from utils.errors import AIServiceError

logger = logging.getLogger(__name__)

# Per-kind prompt and sampling temperature
_PROMPTS = {
    ContentKind.TITLES: (TITLE_GENERATOR_V1, 0.8),
    ContentKind.HASHTAGS: (HASHTAG_GENERATOR_V1, 0.6),
    ContentKind.TAGS: (TAG_GENERATOR_V1, 0.5),
    ContentKind.DESCRIPTION: (DESCRIPTION_GENERATOR_V1, 0.7),
}


def parse_item_list(text: str) -> List[str]:
    """Parse a JSON string array out of a model response.

    Args:
        text: Raw response text, possibly wrapped in markdown code fences

    Returns:
        Non-empty stripped strings from the array

    Raises:
        AIServiceError: If the text is not a JSON array
    """
    cleaned = strip_markdown_code_blocks(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # Models sometimes add prose around the array
        start, end = cleaned.find("["), cleaned.rfind("]")
        if start == -1 or end <= start:
            raise AIServiceError("AI response is not a JSON array")
        try:
            data = json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError as e:
            raise AIServiceError(f"AI response is not a JSON array: {e}") from e

    if not isinstance(data, list):
        raise AIServiceError("AI response is not a JSON array")
    return [str(item).strip() for item in data if str(item).strip()]


class AIService:
    """Service for paid content generation using Gemini."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-2.5-flash",
    ):
        """Initialize Google GenAI client.

        Args:
            api_key: Google GenAI API key (None or empty disables the tier)
            model_name: Gemini model to use
        """
        self.api_key = api_key
        self.model_name = model_name
        self.client = Client(api_key=api_key) if api_key else None

        if self.client:
            logger.info(f"Initialized AI service with model: {model_name}")
        else:
            logger.info("AI service disabled: GEMINI_API_KEY not set")

    def is_configured(self) -> bool:
        return self.client is not None

    def build_prompt(self, kind: ContentKind, params: dict, count: int) -> str:
        """Fill the prompt template for a content kind."""
        template, _ = _PROMPTS[kind]
        return template.format(
            count=count,
            subject=params.get("subject", ""),
            niche=params.get("niche") or "general",
            description=params.get("description") or "(none)",
            bullets=format_bullets(params.get("bullets") or []),
        )

    async def generate(self, kind: ContentKind, params: dict, count: int) -> List[str]:
        """Generate content items with Gemini.

        Args:
            kind: What to generate
            params: Prompt parameters (subject, niche, description, bullets)
            count: Number of items requested

        Returns:
            Generated items; descriptions come back as a single-element list

        Raises:
            AIServiceError: If the tier is unconfigured, the call fails, or the
                response is empty or unparseable
        """
        if not self.client:
            raise AIServiceError("AI service is not configured")

        prompt = self.build_prompt(kind, params, count)
        _, temperature = _PROMPTS[kind]

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=temperature),
            )
        except Exception as e:
            raise AIServiceError(f"Gemini request failed: {e}") from e

        if not response.text:
            raise AIServiceError("AI response is empty")

        if kind is ContentKind.DESCRIPTION:
            text = strip_markdown_code_blocks(response.text)
            if not text:
                raise AIServiceError("AI response is empty")
            return [text]

        items = parse_item_list(response.text)
        if not items:
            raise AIServiceError("AI response contained no items")

        logger.debug(f"Gemini generated {len(items)} {kind.value}")
        return items[:count]
