"""Prompts module - centralized prompt templates for the paid AI tier.

Re-exports all prompt constants and utilities for easy importing:
    from services.prompts import PROMPT_VERSIONS, strip_markdown_code_blocks
    from services.prompts import TITLE_GENERATOR_V1, DESCRIPTION_GENERATOR_V1
"""

from services.prompts._base import format_bullets, strip_markdown_code_blocks
from services.prompts.generation import (
    DESCRIPTION_GENERATOR_V1,
    HASHTAG_GENERATOR_V1,
    TAG_GENERATOR_V1,
    TITLE_GENERATOR_V1,
)

# Prompt version identifiers, part of the generation cache key
# IMPORTANT: Increment these when prompts change to invalidate stale cached responses
PROMPT_VERSIONS = {
    "titles": "v1",
    "hashtags": "v1",
    "tags": "v1",
    "description": "v1",
}

__all__ = [
    # Utilities
    "format_bullets",
    "strip_markdown_code_blocks",
    # Version tracking
    "PROMPT_VERSIONS",
    # Generation prompts
    "TITLE_GENERATOR_V1",
    "HASHTAG_GENERATOR_V1",
    "TAG_GENERATOR_V1",
    "DESCRIPTION_GENERATOR_V1",
]
