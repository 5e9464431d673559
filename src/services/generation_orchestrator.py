"""Generation orchestrator: paid AI -> economy templates -> rule-based templates.

Tiers are awaited one after another and the first non-empty output wins. A
failing paid tier never fails the request; the result instead reports which
tier produced the items and why the paid tier was bypassed.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from models.generation import (
    BypassReason,
    ContentKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
)
from services.ai_service import AIService
from services.free_generators import free_description, free_hashtags, free_tags, free_titles
from services.prompts import PROMPT_VERSIONS
from services.templates import (
    rule_based_description,
    rule_based_hashtags,
    rule_based_tags,
    rule_based_titles,
    truncate_title,
)
from utils.cache import GENERATION_TTL, ResultCache, compute_content_hash

logger = logging.getLogger(__name__)

DEFAULT_AI_TIMEOUT = 20.0


class GenerationTier(ABC):
    """One generation tier."""

    mode: GenerationMode

    @abstractmethod
    async def attempt(self, request: GenerationRequest) -> List[str]:
        """Produce items for a request (may be empty)."""

    def is_available(self) -> bool:
        return True


class AITier(GenerationTier):
    """Paid AI generation, bounded by a timeout."""

    mode = GenerationMode.AI

    def __init__(self, ai_service: Optional[AIService], timeout: float = DEFAULT_AI_TIMEOUT):
        self.ai_service = ai_service
        self.timeout = timeout

    def is_available(self) -> bool:
        return self.ai_service is not None and self.ai_service.is_configured()

    async def attempt(self, request: GenerationRequest) -> List[str]:
        return await asyncio.wait_for(
            self.ai_service.generate(request.kind, request.prompt_params(), request.max_results),
            timeout=self.timeout,
        )


class EconomyTier(GenerationTier):
    """Free template generation with content-type analysis."""

    mode = GenerationMode.ECONOMY

    async def attempt(self, request: GenerationRequest) -> List[str]:
        if request.kind is ContentKind.TITLES:
            return free_titles(request.subject, request.max_results)
        if request.kind is ContentKind.HASHTAGS:
            return free_hashtags(request.subject, request.niche, request.max_results)
        if request.kind is ContentKind.TAGS:
            return free_tags(f"{request.subject} {request.description}", request.max_results)
        description = free_description(request.subject, request.bullets)
        return [description] if description else []


class RuleBasedTier(GenerationTier):
    """Deterministic rule-based templates."""

    mode = GenerationMode.RULE_BASED

    async def attempt(self, request: GenerationRequest) -> List[str]:
        if request.kind is ContentKind.TITLES:
            return rule_based_titles(request.subject)
        if request.kind is ContentKind.HASHTAGS:
            return rule_based_hashtags(request.subject, request.niche, request.max_results)
        if request.kind is ContentKind.TAGS:
            return rule_based_tags(request.subject, request.description, request.max_results)
        if not request.subject.strip():
            return []
        return [rule_based_description(request.subject, request.bullets)]


def generation_cache_key(request: GenerationRequest) -> str:
    """Stable cache key for AI output of a request."""
    payload = json.dumps(
        {
            "version": PROMPT_VERSIONS[request.kind.value],
            "kind": request.kind.value,
            "count": request.max_results,
            **request.prompt_params(),
        },
        sort_keys=True,
    )
    return f"gen:{request.kind.value}:{compute_content_hash(payload)}"


class GenerationOrchestrator:
    """Run a generation request through the tier chain."""

    def __init__(
        self,
        ai_service: Optional[AIService],
        cache: ResultCache,
        ai_timeout: float = DEFAULT_AI_TIMEOUT,
    ):
        """Initialize the orchestrator.

        Args:
            ai_service: Paid AI collaborator (None disables the paid tier)
            cache: Shared result cache for AI output
            ai_timeout: Timeout for the paid tier in seconds
        """
        self.ai_tier = AITier(ai_service, timeout=ai_timeout)
        self.economy_tier = EconomyTier()
        self.rule_based_tier = RuleBasedTier()
        self.cache = cache

    def _finalize(self, items: List[str], request: GenerationRequest) -> List[str]:
        items = [item for item in items if item][: request.max_results]
        if request.kind is ContentKind.TITLES:
            items = [truncate_title(item) for item in items]
        return items

    async def _attempt_ai(self, request: GenerationRequest, result: GenerationResult) -> List[str]:
        key = generation_cache_key(request)
        cached = self.cache.get(key)
        if cached is not None:
            result.cached = True
            return list(cached)

        result.ai_attempted = True
        try:
            items = self._finalize(await self.ai_tier.attempt(request), request)
        except asyncio.TimeoutError:
            logger.warning(f"AI {request.kind.value} generation timed out after {self.ai_tier.timeout}s")
            result.notes.append("ai timed out")
            return []
        except Exception as e:
            logger.warning(f"AI {request.kind.value} generation failed: {e}")
            result.notes.append(f"ai failed: {e}")
            return []

        if items:
            self.cache.put(key, items, ttl=GENERATION_TTL)
        else:
            result.notes.append("ai returned nothing")
        return items

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate content, degrading through the tiers.

        Args:
            request: What to generate and the requested mode

        Returns:
            GenerationResult whose ``mode`` names the tier that produced the items
        """
        result = GenerationResult(
            items=[], mode=GenerationMode.RULE_BASED, requested_mode=request.mode
        )
        tiers, result.bypass_reason = self.plan(request.mode)

        for tier in tiers:
            if tier is self.ai_tier:
                items = await self._attempt_ai(request, result)
                if not items:
                    result.bypass_reason = BypassReason.AI_FAILED
                    continue
            else:
                items = self._finalize(await tier.attempt(request), request)

            if items:
                result.items, result.mode = items, tier.mode
                return result

        logger.info(f"No {request.kind.value} generated for empty subject")
        return result

    def plan(self, mode: GenerationMode) -> tuple[List[GenerationTier], Optional[BypassReason]]:
        """Tiers to try for a requested mode, in order, and why the paid tier is skipped.

        rule-based runs only the rule-based tier. ai and economy try the paid
        tier first when it is configured, falling back to economy then
        rule-based. Without a paid tier, ai drops straight to rule-based while
        economy keeps the economy tier.
        """
        if mode is GenerationMode.RULE_BASED:
            return [self.rule_based_tier], BypassReason.NOT_REQUESTED
        if self.ai_tier.is_available():
            return [self.ai_tier, self.economy_tier, self.rule_based_tier], None
        if mode is GenerationMode.AI:
            return [self.rule_based_tier], BypassReason.NOT_CONFIGURED
        return [self.economy_tier, self.rule_based_tier], BypassReason.NOT_CONFIGURED
