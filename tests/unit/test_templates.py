"""Unit tests for the rule-based template generators."""

import pytest

from services.templates import (
    GENERIC_HASHTAGS,
    MAX_TITLE_LENGTH,
    ContentCategory,
    classify_subject,
    rule_based_description,
    rule_based_hashtags,
    rule_based_tags,
    rule_based_titles,
    truncate_title,
)


class TestClassification:
    """Tests for ContentCategory dispatch."""

    @pytest.mark.parametrize(
        "subject,expected",
        [
            ("A scary night in the woods", ContentCategory.HORROR),
            ("Love letters from Paris", ContentCategory.ROMANCE),
            ("The secret of the pyramids", ContentCategory.MYSTERY),
            ("How to bake bread", ContentCategory.EDUCATIONAL),
            ("My weekend vlog", ContentCategory.GENERAL),
        ],
    )
    def test_classify(self, subject, expected):
        assert classify_subject(subject) is expected

    def test_priority_order(self):
        """Horror outranks mystery when both match."""
        assert classify_subject("Hidden ghost stories") is ContentCategory.HORROR


class TestTitles:
    """Tests for rule_based_titles and truncate_title."""

    def test_five_titles_with_subject(self):
        titles = rule_based_titles("Sourdough Bread")
        assert len(titles) == 5
        assert all("Sourdough Bread" in title for title in titles)

    def test_educational_strips_how_to(self):
        titles = rule_based_titles("How to bake bread")
        assert titles[0] == "💡 How to bake bread"

    def test_long_subject_truncated(self):
        titles = rule_based_titles("x" * 120)
        assert all(len(title) <= MAX_TITLE_LENGTH for title in titles)
        assert all(title.endswith("...") for title in titles)

    def test_truncate_title(self):
        assert truncate_title("short") == "short"
        assert truncate_title("a" * 70) == "a" * 70
        assert truncate_title("a" * 71) == "a" * 67 + "..."

    def test_empty_subject_does_not_raise(self):
        assert len(rule_based_titles("")) == 5


class TestHashtags:
    """Tests for rule_based_hashtags."""

    def test_gaming_niche_always_included(self):
        """Curated tags survive even when ranked tokens fill the budget."""
        subject = " ".join(f"topic{i}" for i in range(40))
        hashtags = rule_based_hashtags(subject, "gaming", 10)
        assert "#gaming" in hashtags
        assert len(hashtags) == 10

    def test_ranked_then_curated_then_generic(self):
        hashtags = rule_based_hashtags("speedrun speedrun tips", "gaming", 25)
        assert hashtags[:2] == ["#speedrun", "#tips"]
        assert "#gaming" in hashtags
        assert GENERIC_HASHTAGS[0] in hashtags
        assert len(hashtags) == 25
        assert len(set(hashtags)) == len(hashtags)

    def test_never_exceeds_count(self):
        assert len(rule_based_hashtags("a b c", "", 5)) == 5
        assert rule_based_hashtags("anything", "gaming", 0) == []


class TestTags:
    """Tests for rule_based_tags."""

    def test_ranked_title_and_description(self):
        tags = rule_based_tags("Web development tutorial", "web design and web hosting", 3)
        assert tags == ["web", "development", "tutorial"]

    def test_empty(self):
        assert rule_based_tags("", "", 10) == []


class TestDescription:
    """Tests for rule_based_description."""

    def test_sections(self):
        text = rule_based_description("Python Basics", ["Variables", " ", "Loops"])
        assert text.startswith("In this video, we dive deep into python basics.")
        assert "What you'll learn:\n• Variables\n• Loops\n" in text
        assert "like and subscribe" in text
        assert text.endswith("#PythonBasics #tutorial #guide #howto #tips")

    def test_without_bullets(self):
        assert "What you'll learn" not in rule_based_description("Python Basics")

    def test_empty_title_is_well_formed(self):
        assert rule_based_description("").endswith("#tutorial #guide #howto #tips")
