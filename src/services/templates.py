"""Rule-based content generators.

Deterministic, no network calls, never fail on string input. These are the
last tier of the generation fallback chain, so every function returns a
well-formed (possibly degenerate) result for empty input.
"""

import re
from enum import Enum

from services.text_analysis import rank_by_frequency, tokenize

MAX_TITLE_LENGTH = 70
TITLE_COUNT = 5

NICHE_HASHTAGS: dict[str, list[str]] = {
    "horror": ["#scary", "#creepy", "#nightmare", "#spooky", "#thriller", "#dark", "#fear", "#suspense"],
    "gaming": ["#gaming", "#gamer", "#gameplay", "#streamer", "#twitch", "#youtube", "#live"],
    "tech": ["#technology", "#tech", "#gadgets", "#innovation", "#digital", "#software"],
    "cooking": ["#cooking", "#recipe", "#food", "#chef", "#kitchen", "#delicious"],
    "fitness": ["#fitness", "#workout", "#gym", "#health", "#training", "#exercise"],
    "travel": ["#travel", "#adventure", "#explore", "#vacation", "#wanderlust"],
    "music": ["#music", "#song", "#artist", "#musician", "#beats", "#sound"],
    "fashion": ["#fashion", "#style", "#outfit", "#trendy", "#look", "#ootd"],
    "art": ["#art", "#artist", "#creative", "#drawing", "#painting", "#design"],
}

GENERIC_HASHTAGS = [
    "#viral", "#trending", "#new", "#best", "#top", "#amazing", "#cool", "#awesome",
    "#epic", "#must", "#watch", "#see", "#check", "#follow", "#like", "#share",
    "#subscribe", "#content", "#creator", "#video",
]


class ContentCategory(Enum):
    """Title categories, declared in match priority order.

    Each member carries the keywords that select it and its title templates.
    ``{subject}`` is the raw subject, ``{topic}`` has a leading "how to" removed.
    """

    HORROR = (
        "horror",
        ("horror", "scary", "ghost"),
        (
            "👻 The Terrifying {subject}",
            "{subject}: A Horror Story 💀",
            "🌙 {subject} - You Won't Sleep Tonight",
            "The Haunting {subject} 🔮",
            "👁️ {subject}: Real Horror Experience",
        ),
    )
    ROMANCE = (
        "romance",
        ("love", "romance", "heart"),
        (
            "💕 The Beautiful {subject}",
            "{subject}: A Love Story 💖",
            "🌹 {subject} - Pure Romance",
            "The Perfect {subject} 💝",
            "✨ {subject}: Heart-Melting Moments",
        ),
    )
    MYSTERY = (
        "mystery",
        ("mystery", "secret", "hidden"),
        (
            "🔍 The {subject} Mystery Solved",
            "{subject}: Secrets Revealed 🗝️",
            "👁️ {subject} - What They Don't Want You to Know",
            "The Hidden Truth About {subject} 🔮",
            "⚡ {subject}: Mystery Finally Exposed",
        ),
    )
    EDUCATIONAL = (
        "educational",
        ("how to", "tutorial", "guide", "learn"),
        (
            "💡 How to {topic}",
            "{subject}: Complete Guide 📚",
            "⚙️ Master {subject} Quickly",
            "{subject}: Step-by-Step Tutorial 🚀",
            "🔧 {subject} - Pro Tips",
        ),
    )
    GENERAL = (
        "general",
        (),
        (
            "🔥 {subject} - Must See!",
            "{subject}: You Won't Believe This ✨",
            "🚀 Amazing {subject}",
            "{subject}: This Changes Everything 💥",
            "🌟 {subject} - Viral Content",
        ),
    )

    def __init__(self, label: str, keywords: tuple[str, ...], templates: tuple[str, ...]):
        self.label = label
        self.keywords = keywords
        self.templates = templates

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)


_HOW_TO_PREFIX = re.compile(r"^how to\s*", re.IGNORECASE)


def classify_subject(subject: str) -> ContentCategory:
    """Pick the first category whose keywords appear in the subject."""
    for category in ContentCategory:
        if category is not ContentCategory.GENERAL and category.matches(subject):
            return category
    return ContentCategory.GENERAL


def truncate_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Ellipsize a title so it stays within the display limit."""
    if len(title) <= max_length:
        return title
    return title[: max_length - 3] + "..."


def rule_based_titles(subject: str) -> list[str]:
    """Five category-specific titles with the subject interpolated."""
    subject = (subject or "").strip()
    category = classify_subject(subject)
    topic = _HOW_TO_PREFIX.sub("", subject)
    return [
        truncate_title(template.format(subject=subject, topic=topic))
        for template in category.templates[:TITLE_COUNT]
    ]


def rule_based_hashtags(subject: str, niche: str = "", count: int = 25) -> list[str]:
    """Ranked hashtags from subject and niche, then curated niche tags, then generic padding."""
    if count <= 0:
        return []

    ranked = rank_by_frequency(tokenize(f"{subject} {niche}"), count)
    hashtags = ["#" + re.sub(r"\s+", "", word) for word in ranked]

    # Curated niche tags always make it in; ranked tags give way when space is short
    curated = NICHE_HASHTAGS.get((niche or "").strip().lower(), [])
    ranked_only = [tag for tag in hashtags if tag not in curated]
    hashtags = ranked_only[: max(count - len(curated), 0)] + curated

    for tag in GENERIC_HASHTAGS:
        if len(hashtags) >= count:
            break
        if tag not in hashtags:
            hashtags.append(tag)

    return hashtags[:count]


def rule_based_tags(title: str, description: str = "", count: int = 25) -> list[str]:
    """Most frequent words of title and description, hyphenated, at most ``count``."""
    ranked = rank_by_frequency(tokenize(f"{title} {description}"), count)
    return [re.sub(r"\s+", "-", word) for word in ranked]


def rule_based_description(title: str, bullets: list[str] | tuple[str, ...] = ()) -> str:
    """Fixed narrative description: hook, optional bullets, call to action, hashtags."""
    title = (title or "").strip()
    bullets = [b.strip() for b in bullets if b and b.strip()]

    description = f"In this video, we dive deep into {title.lower()}. "
    description += "This comprehensive guide covers everything you need to know.\n\n"

    if bullets:
        description += "What you'll learn:\n"
        description += "".join(f"• {bullet}\n" for bullet in bullets)
        description += "\n"

    description += "Don't forget to like and subscribe for more content like this!\n\n"
    title_tag = "".join(title.split())
    hashtag_line = "#tutorial #guide #howto #tips"
    description += f"#{title_tag} {hashtag_line}" if title_tag else hashtag_line

    return description
