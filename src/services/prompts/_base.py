"""Helpers shared by the prompt templates and the code that parses model replies."""

import re

# Opening fence with an optional language tag (```json, ```text, ...)
_OPENING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")


def strip_markdown_code_blocks(text: str) -> str:
    """Remove a surrounding markdown code fence from a model reply.

    Args:
        text: Raw reply text, fenced or not

    Returns:
        The reply body with the fence and outer whitespace removed
    """
    text = (text or "").strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def format_bullets(bullets: list[str] | tuple[str, ...]) -> str:
    """Render optional bullet points as a prompt line, or an empty string."""
    cleaned = [b.strip() for b in bullets if b and b.strip()]
    if not cleaned:
        return ""
    return f"\nCover: {', '.join(cleaned)}\n"
