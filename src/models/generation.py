"""Content generation request/result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class GenerationMode(str, Enum):
    """Generation tiers, most to least expensive."""

    AI = "ai"
    ECONOMY = "economy"
    RULE_BASED = "rule-based"

    @classmethod
    def parse(cls, value: "str | GenerationMode") -> "GenerationMode":
        """Parse a mode, accepting the short ``rb`` alias for rule-based."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("rb", "rule_based", "rules"):
            return cls.RULE_BASED
        return cls(normalized)


class ContentKind(str, Enum):
    """What a generation request produces."""

    TITLES = "titles"
    HASHTAGS = "hashtags"
    TAGS = "tags"
    DESCRIPTION = "description"


class BypassReason(str, Enum):
    """Why the paid tier did not produce the result."""

    NOT_REQUESTED = "not_requested"
    NOT_CONFIGURED = "not_configured"
    AI_FAILED = "ai_failed"


@dataclass(frozen=True)
class GenerationRequest:
    """One content generation request.

    ``subject`` is the topic/title text; ``niche`` is a category hint used by
    hashtag generation; ``description`` and ``bullets`` feed tag and description
    generation. ``max_results`` bounds the final output no matter what any tier
    returns.
    """

    kind: ContentKind
    subject: str
    mode: GenerationMode = GenerationMode.RULE_BASED
    max_results: int = 25
    niche: str = ""
    description: str = ""
    bullets: tuple[str, ...] = ()

    def prompt_params(self) -> dict:
        return {
            "subject": self.subject,
            "niche": self.niche,
            "description": self.description,
            "bullets": list(self.bullets),
        }


@dataclass
class GenerationResult:
    """Items produced for a request and the tier that actually produced them."""

    items: list[str]
    mode: GenerationMode
    requested_mode: GenerationMode
    ai_attempted: bool = False
    bypass_reason: Optional[BypassReason] = None
    cached: bool = False
    notes: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when a cheaper tier than requested produced the items."""
        return self.mode != self.requested_mode

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "mode": self.mode.value,
            "requested_mode": self.requested_mode.value,
            "ai_attempted": self.ai_attempted,
            "bypass_reason": self.bypass_reason.value if self.bypass_reason else None,
            "degraded": self.degraded,
        }
