"""Text analysis helpers: tokenizing, frequency ranking and keyword density.

Pure functions with no I/O or shared state. Everything downstream (tag and
hashtag generation, the keyword density endpoint) ranks words through here so
the same stopword rules apply everywhere.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

STOPWORDS = frozenset(
    [
        "the", "a", "an", "and", "or", "to", "of", "in", "on", "for", "with",
        "from", "by", "at", "is", "it", "this", "that", "are", "be", "as",
        "was", "were", "will", "you", "your", "we", "our",
    ]
)

DENSITY_LIMIT = 30

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_HASHTAG = re.compile(r"#\w+")


def tokenize(text: str | None, extra_stopwords: Iterable[str] = ()) -> list[str]:
    """Split text into lowercase alphanumeric tokens with stopwords removed.

    Args:
        text: Input text (None is treated as empty)
        extra_stopwords: Caller-supplied stopwords, unioned with STOPWORDS

    Returns:
        Tokens in input order, duplicates kept
    """
    if not text:
        return []
    stopwords = STOPWORDS.union(w.strip().lower() for w in extra_stopwords)
    words = _NON_ALNUM.sub(" ", text.lower()).split()
    return [w for w in words if w and w not in stopwords]


def rank_by_frequency(tokens: Iterable[str], limit: int) -> list[str]:
    """Distinct tokens by descending count, ties broken by first appearance.

    Args:
        tokens: Token sequence (typically from tokenize)
        limit: Maximum number of tokens to return

    Returns:
        Ranked distinct tokens, at most ``limit`` long
    """
    if limit <= 0:
        return []
    # Counter keeps first-seen order and sorted() is stable
    counts = Counter(tokens)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [word for word, _ in ranked[:limit]]


@dataclass(frozen=True)
class KeywordDensity:
    """One row of a keyword density report."""

    word: str
    count: int
    percentage: float

    def to_dict(self) -> dict:
        return {"word": self.word, "count": self.count, "density": round(self.percentage, 2)}


def keyword_density(
    text: str | None,
    extra_stopwords: Iterable[str] = (),
    limit: Optional[int] = DENSITY_LIMIT,
) -> list[KeywordDensity]:
    """Compute per-word density over the stopword-filtered words.

    Percentages divide by the filtered word count, not the raw token count, so
    they agree with the word list the caller sees.

    Args:
        text: Input text
        extra_stopwords: Additional stopwords
        limit: Truncate to this many rows (None keeps every word)

    Returns:
        Rows sorted by descending count
    """
    words = tokenize(text, extra_stopwords)
    filtered_word_count = len(words)
    if filtered_word_count == 0:
        return []

    ranked = sorted(Counter(words).items(), key=lambda item: -item[1])
    if limit is not None:
        ranked = ranked[:limit]
    return [
        KeywordDensity(word=word, count=count, percentage=count / filtered_word_count * 100)
        for word, count in ranked
    ]


@dataclass
class DensityReport:
    """Keyword density analysis with both word counts kept apart.

    ``raw_word_count`` counts whitespace-separated words including stopwords;
    ``filtered_word_count`` is the denominator used for every percentage.
    """

    raw_word_count: int
    filtered_word_count: int
    unique_words: int
    keywords: list[KeywordDensity] = field(default_factory=list)

    @property
    def high_density(self) -> int:
        return sum(1 for k in self.keywords if k.percentage > 3)

    @property
    def medium_density(self) -> int:
        return sum(1 for k in self.keywords if 1 < k.percentage <= 3)

    @property
    def low_density(self) -> int:
        return sum(1 for k in self.keywords if k.percentage <= 1)

    def to_dict(self) -> dict:
        return {
            "raw_word_count": self.raw_word_count,
            "filtered_word_count": self.filtered_word_count,
            "unique_words": self.unique_words,
            "keywords": [k.to_dict() for k in self.keywords],
            "analysis": {
                "high_density": self.high_density,
                "medium_density": self.medium_density,
                "low_density": self.low_density,
            },
        }


def analyze_density(text: str | None, extra_stopwords: Iterable[str] = ()) -> DensityReport:
    """Build a full density report for the keyword density endpoint."""
    extra = list(extra_stopwords)
    words = tokenize(text, extra)
    return DensityReport(
        raw_word_count=len((text or "").split()),
        filtered_word_count=len(words),
        unique_words=len(set(words)),
        keywords=keyword_density(text, extra),
    )


def extract_hashtags(text: str | None) -> list[str]:
    """Pull ``#hashtags`` out of free text, lowercased and de-duplicated in order."""
    if not text:
        return []
    seen = dict.fromkeys(tag.lower() for tag in _HASHTAG.findall(text))
    return list(seen)
