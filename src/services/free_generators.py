"""Economy-tier generators: richer than the rule-based templates, still free.

No network calls and no randomness. Where a template needs a choice (emoji,
hook line, intensifier) it is picked from a stable hash of the subject, so the
same input always produces the same output.
"""

import hashlib
import logging
import re
from datetime import date

from services.templates import MAX_TITLE_LENGTH, truncate_title
from services.text_analysis import rank_by_frequency, tokenize

logger = logging.getLogger(__name__)

MAX_TAGS = 25
MAX_TITLES = 5
MAX_HASHTAGS = 25

EMOJI_SETS = {
    "sports": ["⚽", "🏏", "🏆", "🥇", "⚡", "🔥", "💥"],
    "gaming": ["🎮", "🕹️", "🏆", "⚔️", "🎯", "🔥", "⚡"],
    "music": ["🎵", "🎶", "🎤", "🎧", "🔥", "✨", "🌟"],
    "food": ["🍳", "🍽️", "👨‍🍳", "🔥", "✨", "😋", "💯"],
    "tech": ["💻", "📱", "⚙️", "🔧", "⚡", "🚀", "💡"],
    "news": ["📺", "📰", "⚡", "🔥", "💥", "🚨", "📢"],
    "reaction": ["😱", "🤯", "😂", "🔥", "💯", "⚡", "✨"],
    "general": ["🔥", "⚡", "✨", "💯", "🚀", "💥", "🎯"],
}

_EMOJI_TOPICS = [
    ("sports", ("cricket", "football", "match", "sport")),
    ("gaming", ("game", "gaming", "player")),
    ("music", ("song", "music", "band")),
    ("food", ("recipe", "cooking", "food")),
    ("tech", ("tech", "coding", "programming")),
]

INTENSIFIERS = ["Epic", "Incredible", "Amazing", "Insane", "Unbelievable", "Mind-Blowing"]
DESCRIPTORS = ["Best", "Top", "Ultimate", "Perfect", "Complete", "Full"]

# (content type, marker substrings), in priority order
CONTENT_TYPES = [
    ("tutorial", ("how to", "tutorial", "guide", "learn")),
    ("review", ("review", "honest", "experience")),
    ("comparison", ("vs ", " vs", " v ")),
    ("challenge", ("challenge", "dare", "attempt")),
    ("highlights", ("highlights", "best moments", "compilation", "match", "game", "final")),
    ("news", ("news", "breaking", "latest", "update")),
    ("reaction", ("reaction", "reacting", "react")),
    ("list", ("top ", "best ", "list")),
    ("live", ("live", "stream", "streaming")),
]

CONTEXTUAL_TEMPLATES = {
    "tutorial": [
        "{e} How to {topic} [Complete Guide]",
        "{base}: Step-by-Step Tutorial {e}",
        "{e} {base} - Master it in Minutes",
        "{base} for Beginners {e}",
        "{e} {base}: Pro Tips & Tricks",
        "{base} - Everything You Need to Know {e}",
    ],
    "review": [
        "{e} {base}: Honest Review",
        "{base} - Is It Worth It? {e}",
        "{e} {base}: My Real Experience",
        "{base}: The Good, Bad & Ugly {e}",
        "{e} {base} - Before You Buy",
        "{base} - What They Don't Tell You {e}",
    ],
    "comparison": [
        "{e} {base}: The Ultimate Showdown",
        "{base} - Who's Better? {e}",
        "{e} {base}: Head to Head Battle",
        "{base}: The Final Verdict {e}",
        "{e} {base} - Epic Face-Off",
    ],
    "challenge": [
        "{e} {base} Challenge",
        "{base}: Can I Do It? {e}",
        "{e} Attempting {base}",
        "{base} - Will I Survive? {e}",
        "{base}: The Ultimate Test {e}",
    ],
    "highlights": [
        "{e} {descriptor} {base}",
        "{intensifier} {base} {e}",
        "{e} {base} - All the Best Moments",
        "{base}: You Have to See This {e}",
        "{e} {base} [HD Highlights]",
    ],
    "news": [
        "{e} {base}: Breaking News",
        "{base} - Latest Update {e}",
        "{e} {base}: What Just Happened",
        "{base}: Live Coverage {e}",
        "{e} {base} - Full Story",
    ],
    "reaction": [
        "{e} Reacting to {base}",
        "{base}: My Honest Reaction {e}",
        "{e} {base} - I Can't Believe This",
        "{e} Watching {base} for the First Time",
    ],
    "list": [
        "{e} {descriptor} {base}",
        "{base} - Ranked & Explained {e}",
        "{e} {base} [Complete List]",
        "{base}: The Definitive Ranking {e}",
        "{e} {base} [{year} Edition]",
    ],
    "live": [
        "{e} {base} - LIVE",
        "{base}: Live Stream {e}",
        "{e} LIVE: {base}",
        "{base} - Join Me Live {e}",
    ],
    "general": [
        "{e} {intensifier} {base}",
        "{base}: You Won't Believe This {e}",
        "{e} {base} - Must Watch",
        "{base} That Changed Everything {e}",
        "{e} {base} - Everyone's Talking About It",
    ],
}

VIRAL_TEMPLATES = [
    "POV: {base} {e}",
    "Nobody: Me with {base}: {e}",
    "Plot twist: {base} is actually insane {e}",
    "When {base} hits different {e}",
    "Not me getting obsessed with {base} {e}",
]

ENGAGEMENT_TEMPLATES = [
    "Is {base} Worth the Hype? (My Honest Opinion)",
    "Rating {base} from 1-10 (You'll Be Surprised)",
    "I Tried {base} for 30 Days (Results)",
    "{base} Tier List (Controversial Takes)",
    "{base}: Expectations vs Reality 😅",
]

CURIOSITY_TEMPLATES = [
    "What if {base} Never Existed?",
    "How {base} Actually Works (Mind-Blown)",
    "Why Is {base} So Addictive?",
    "What Makes {base} So Special?",
    "What's the Real Story Behind {base}?",
]

FREE_NICHE_HASHTAGS = {
    "tech": ["#technology", "#coding", "#programming", "#software", "#developer"],
    "gaming": ["#gaming", "#gamer", "#gameplay", "#esports", "#streaming"],
    "cooking": ["#cooking", "#recipe", "#food", "#chef", "#kitchen"],
    "fitness": ["#fitness", "#workout", "#health", "#gym", "#training"],
    "travel": ["#travel", "#adventure", "#vacation", "#wanderlust", "#explore"],
    "music": ["#music", "#musician", "#song", "#beats", "#audio"],
    "fashion": ["#fashion", "#style", "#outfit", "#trendy", "#ootd"],
    "art": ["#art", "#creative", "#design", "#artist", "#drawing"],
    "horror": ["#horror", "#scary", "#creepy", "#spooky", "#thriller"],
}

# (marker substrings, hashtags added when any marker is present)
CONTEXTUAL_HASHTAGS = [
    (("tutorial", "how to", "guide"), ["#tutorial", "#howto", "#guide", "#learn", "#stepbystep"]),
    (("review", "unbox"), ["#review", "#unboxing", "#honest", "#detailed"]),
    (("vs", "compare"), ["#comparison", "#versus", "#whichisbetter"]),
    (("free", "budget"), ["#free", "#budget", "#cheap", "#affordable"]),
    (("best", "top"), ["#best", "#top", "#recommended"]),
    (("beginner", "start"), ["#beginner", "#starter", "#basics", "#introduction"]),
    (("advanced", "pro"), ["#advanced", "#pro", "#expert", "#professional"]),
    (("tip", "hack", "trick"), ["#tips", "#hacks", "#tricks", "#secrets"]),
]

GENERIC_FALLBACK_HASHTAGS = ["#viral", "#trending", "#content", "#creator", "#youtube"]

DESCRIPTION_HOOKS = [
    "Learn {topic} with this clear, step-by-step guide.",
    "Master {topic} quickly with these proven techniques.",
    "Everything you need to know about {topic} in one place.",
    "Get started with {topic} using this complete walkthrough.",
]


def _stable_pick(options: list[str], seed: str) -> str:
    digest = hashlib.md5(seed.encode("utf-8")).hexdigest()
    return options[int(digest, 16) % len(options)]


def detect_content_type(text: str) -> str:
    """Classify a subject into a content type (first match wins)."""
    lowered = f" {text.lower()} "
    for content_type, markers in CONTENT_TYPES:
        if any(marker in lowered for marker in markers):
            return content_type
    if re.search(r"\d+\s+\w", lowered):
        return "list"
    return "general"


def _emoji_set(text: str, content_type: str) -> list[str]:
    lowered = text.lower()
    for topic, markers in _EMOJI_TOPICS:
        if any(marker in lowered for marker in markers):
            return EMOJI_SETS[topic]
    return EMOJI_SETS.get(content_type, EMOJI_SETS["general"])


def _select_diverse(titles: list[str], count: int) -> list[str]:
    """Prefer titles that do not share a leading word or opening pair of words."""
    selected: list[str] = []
    used_patterns: set[str] = set()
    for title in titles:
        if len(selected) >= count:
            break
        words = title.lower().split()
        pattern = " ".join(words[:2])
        start_word = words[0] if words else ""
        if pattern not in used_patterns and start_word not in used_patterns:
            selected.append(title)
            used_patterns.update((pattern, start_word))

    for title in titles:
        if len(selected) >= count:
            break
        if title not in selected:
            selected.append(title)
    return selected


def free_titles(subject: str, count: int = MAX_TITLES) -> list[str]:
    """Creative titles built from content-type aware templates.

    Args:
        subject: Topic text
        count: Number of titles wanted

    Returns:
        Up to ``count`` distinct titles, each within the display length
    """
    base = (subject or "").strip().rstrip(".")
    if not base or count <= 0:
        return []

    content_type = detect_content_type(base)
    emojis = _emoji_set(base, content_type)
    fields = {
        "base": base,
        "topic": re.sub(r"^how to\s*", "", base, flags=re.IGNORECASE),
        "year": date.today().year,
        "intensifier": _stable_pick(INTENSIFIERS, f"intensifier:{base}"),
        "descriptor": _stable_pick(DESCRIPTORS, f"descriptor:{base}"),
    }

    candidates = []
    templates = (
        CONTEXTUAL_TEMPLATES[content_type] + VIRAL_TEMPLATES + ENGAGEMENT_TEMPLATES + CURIOSITY_TEMPLATES
    )
    for index, template in enumerate(templates):
        emoji = _stable_pick(emojis, f"{index}:{base}")
        candidates.append(template.format(e=emoji, **fields).strip())

    unique = [
        title
        for title in dict.fromkeys(candidates)
        if len(title) <= MAX_TITLE_LENGTH and title.lower() != base.lower()
    ]
    if not unique:
        # Subject too long for any template to fit: fall back to ellipsized ones
        unique = [truncate_title(title) for title in dict.fromkeys(candidates)]

    titles = _select_diverse(unique, count)
    logger.debug(f"Generated {len(titles)} economy titles ({content_type}) for '{base}'")
    return titles


def _with_curated(ranked: list[str], curated: list[str], count: int) -> list[str]:
    """Append curated tags, shrinking the ranked part so every curated tag fits."""
    ranked_only = [tag for tag in ranked if tag not in curated]
    room = max(count - len(curated), 0)
    return (ranked_only[:room] + curated)[:count]


def free_hashtags(text: str, niche: str = "", count: int = MAX_HASHTAGS) -> list[str]:
    """Hashtags from the words of the text, the niche table and content cues.

    Args:
        text: Subject text (title, optionally with niche/description)
        niche: Category hint, matched case-insensitively
        count: Maximum hashtags

    Returns:
        At most ``count`` distinct hashtags
    """
    if count <= 0:
        return []

    words = dict.fromkeys(w for w in tokenize(text) if 2 < len(w) < 20)
    hashtags = _with_curated(
        [f"#{w}" for w in words],
        FREE_NICHE_HASHTAGS.get((niche or "").strip().lower(), []),
        count,
    )

    lowered = (text or "").lower()
    extras = []
    for markers, tags in CONTEXTUAL_HASHTAGS:
        if any(marker in lowered for marker in markers):
            extras.extend(tags)
    if hashtags or extras:
        extras.extend(GENERIC_FALLBACK_HASHTAGS)

    for tag in extras:
        if len(hashtags) >= count:
            break
        if tag not in hashtags:
            hashtags.append(tag)

    return hashtags[:count]


def free_tags(text: str, count: int = MAX_TAGS) -> list[str]:
    """Ranked keywords plus hyphenated long-tail pairs.

    Args:
        text: Source text (title and description)
        count: Maximum tags

    Returns:
        At most ``count`` distinct tags
    """
    if count <= 0:
        return []

    ranked = [w for w in rank_by_frequency(tokenize(text), MAX_TAGS * 2) if len(w) > 2]

    combos = []
    for first, second in zip(ranked, ranked[1:]):
        if len(combos) >= 10:
            break
        combo = f"{first}-{second}"[:40]
        if len(combo) > 5:
            combos.append(combo)

    return list(dict.fromkeys(ranked + combos))[:count]


def free_description(
    title: str,
    bullets: list[str] | tuple[str, ...] = (),
) -> str:
    """Template description with a deterministic hook line.

    Args:
        title: Video title or topic
        bullets: Key points; the first five are listed

    Returns:
        Description text, or "" for an empty title
    """
    topic = (title or "").strip()
    if not topic:
        return ""

    bullets = [b.strip() for b in bullets if b and b.strip()]

    description = _stable_pick(DESCRIPTION_HOOKS, topic).format(topic=topic) + "\n\n"

    if bullets:
        points = "\n".join(f"• {bullet}" for bullet in bullets[:5])
        description += f"What you'll learn:\n{points}\n\n"

    description += "If this helped, like & subscribe for more!\n\n"
    description += f"#{''.join(topic.split())} #tutorial #guide #howto #tips"
    return description
