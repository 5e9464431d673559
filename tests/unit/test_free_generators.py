"""Unit tests for the economy-tier generators."""

import pytest

from services.free_generators import (
    GENERIC_FALLBACK_HASHTAGS,
    detect_content_type,
    free_description,
    free_hashtags,
    free_tags,
    free_titles,
)
from services.templates import MAX_TITLE_LENGTH


class TestContentType:
    """Tests for detect_content_type."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("How to train your puppy", "tutorial"),
            ("iPhone 15 honest review", "review"),
            ("Messi vs Ronaldo", "comparison"),
            ("24 hour silence challenge", "challenge"),
            ("Champions league final highlights", "highlights"),
            ("Breaking news today", "news"),
            ("My reaction to the trailer", "reaction"),
            ("10 places to visit", "list"),
            ("Late night stream", "live"),
            ("Sunset over the lake", "general"),
        ],
    )
    def test_detection(self, text, expected):
        assert detect_content_type(text) == expected


class TestFreeTitles:
    """Tests for free_titles."""

    def test_count_and_length(self):
        titles = free_titles("How to make cold brew coffee", 5)
        assert len(titles) == 5
        assert len(set(titles)) == 5
        assert all(len(title) <= MAX_TITLE_LENGTH for title in titles)

    def test_deterministic(self):
        assert free_titles("Minecraft speedrun", 5) == free_titles("Minecraft speedrun", 5)

    def test_diverse_openings(self):
        titles = free_titles("Street food in Bangkok", 5)
        openings = [" ".join(title.lower().split()[:2]) for title in titles]
        assert len(set(openings)) == len(openings)

    def test_empty(self):
        assert free_titles("", 5) == []
        assert free_titles("topic", 0) == []


class TestFreeHashtags:
    """Tests for free_hashtags."""

    def test_gaming_niche_always_included(self):
        text = " ".join(f"keyword{i}" for i in range(60))
        hashtags = free_hashtags(text, "gaming", 10)
        assert "#gaming" in hashtags
        assert len(hashtags) == 10

    def test_contextual_and_fallback(self):
        hashtags = free_hashtags("Beginner guide to watercolor", "", 25)
        assert hashtags[:3] == ["#beginner", "#guide", "#watercolor"]
        assert "#tutorial" in hashtags
        assert "#basics" in hashtags
        assert GENERIC_FALLBACK_HASHTAGS[0] in hashtags
        assert len(set(hashtags)) == len(hashtags)

    def test_short_words_skipped(self):
        assert "#ai" not in free_hashtags("AI art tools", "", 25)

    def test_empty(self):
        assert free_hashtags("", "", 25) == []
        assert free_hashtags("anything", "", 0) == []


class TestFreeTags:
    """Tests for free_tags."""

    def test_ranked_words_then_pairs(self):
        tags = free_tags("python tutorial python basics for beginners", 25)
        assert tags[:4] == ["python", "tutorial", "basics", "beginners"]
        assert "python-tutorial" in tags
        assert len(set(tags)) == len(tags)

    def test_limit(self):
        text = " ".join(f"word{i}" for i in range(40))
        assert len(free_tags(text, 7)) == 7


class TestFreeDescription:
    """Tests for free_description."""

    def test_bullets_capped_at_five(self):
        text = free_description("Knife skills", [f"point {i}" for i in range(8)])
        assert "• point 4" in text
        assert "• point 5" not in text
        assert "Knife skills" in text

    def test_deterministic(self):
        assert free_description("Knife skills") == free_description("Knife skills")

    def test_empty_title(self):
        assert free_description("   ") == ""

    def test_sections_in_order(self):
        text = free_description("Knife skills", ["Dicing"])
        learn = text.index("What you'll learn:")
        cta = text.index("like & subscribe")
        assert learn < cta
        assert "Resources:" not in text
        assert text.endswith("#Knifeskills #tutorial #guide #howto #tips")
