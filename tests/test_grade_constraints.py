"""Tests for phonics_story.education.grade_constraints."""

import pytest

from phonics_story.education.grade_constraints import (
    GRADE_CONSTRAINTS,
    VALID_GRADES,
    constraints_for,
    estimate_syllables,
    example_sentences,
    grade_display,
    grade_summary,
    is_structure_appropriate,
    normalize_grade,
    validate_sentence,
    validate_story,
)
from phonics_story.models import Story


def make_story(*paragraphs) -> Story:
    return Story.from_dict({
        "title": "Test",
        "paragraphs": [{"sentences": [{"sentence": s} for s in p]} for p in paragraphs],
    })


# ---------------------------------------------------------------------------
# Grade lookup
# ---------------------------------------------------------------------------


class TestGradeLookup:
    def test_table_covers_every_grade(self):
        assert set(GRADE_CONSTRAINTS) == set(VALID_GRADES)

    @pytest.mark.parametrize("raw,expected", [(0, "K"), ("k", "K"), ("K", "K"), (3, "3"), ("4", "4")])
    def test_normalize_grade(self, raw, expected):
        assert normalize_grade(raw) == expected

    def test_grade_display(self):
        assert grade_display("K") == "Kindergarten"
        assert grade_display(0) == "Kindergarten"
        assert grade_display(2) == "Grade 2"

    def test_known_grade(self):
        c = constraints_for("2")
        assert (c.min_words, c.max_words, c.max_syllables) == (5, 10, 3)
        assert c.lexile_range == "400L-650L"

    def test_kindergarten(self):
        c = constraints_for(0)
        assert (c.min_words, c.max_words, c.max_syllables) == (3, 6, 2)

    def test_unknown_grade_defaults_to_first(self):
        assert constraints_for("9") == GRADE_CONSTRAINTS["1"]
        assert constraints_for("college") == GRADE_CONSTRAINTS["1"]

    def test_word_limits_grow_with_grade(self):
        maxima = [GRADE_CONSTRAINTS[g].max_words for g in VALID_GRADES]
        assert maxima == sorted(maxima)

    def test_example_sentences(self):
        assert "I see a dog." in example_sentences("K")


# ---------------------------------------------------------------------------
# Syllable estimation
# ---------------------------------------------------------------------------


class TestEstimateSyllables:
    @pytest.mark.parametrize("word,expected", [
        ("the", 1),
        ("elephant", 3),
        ("time", 1),
        ("little", 2),
        ("beautiful", 3),
        ("cat", 1),
        ("happy", 2),
    ])
    def test_known_words(self, word, expected):
        assert estimate_syllables(word) == expected

    def test_punctuation_is_ignored(self):
        assert estimate_syllables("elephant!") == 3

    def test_never_below_one(self):
        assert estimate_syllables("") == 1
        assert estimate_syllables("----") == 1
        assert estimate_syllables("rhythm") >= 1


# ---------------------------------------------------------------------------
# Sentence and story validation
# ---------------------------------------------------------------------------


class TestValidateSentence:
    def test_valid_sentence(self):
        result = validate_sentence("The fish swam to the shop.", "2")
        assert result.is_valid
        assert result.issues == []
        assert result.word_count == 6

    def test_too_few_words(self):
        result = validate_sentence("I ran.", "2")
        assert not result.is_valid
        assert any("Too few words" in issue for issue in result.issues)

    def test_too_many_words(self):
        result = validate_sentence("We ran and ran and ran to the big red shop today.", "K")
        assert not result.is_valid
        assert any("Too many words" in issue for issue in result.issues)

    def test_complex_words(self):
        result = validate_sentence("The unbelievably big dog ran home.", "2")
        assert not result.is_valid
        assert result.complex_words == ["unbelievably"]


class TestValidateStory:
    def test_all_valid(self):
        story = make_story(
            ["The fish swam to the shop.", "She had a red ship."],
            ["They went home at night."],
        )
        result = validate_story(story, "2")
        assert result.is_valid
        assert result.stats["total_sentences"] == 3
        assert result.stats["valid_sentences"] == 3
        assert result.stats["pass_rate"] == 100
        assert result.stats["lexile_range"] == "400L-650L"

    def test_issue_locations(self):
        story = make_story(["The fish swam to the shop."], ["Hi.", "She had a red ship."])
        result = validate_story(story, "2")
        assert not result.is_valid
        assert len(result.issues) == 1
        assert result.issues[0].location == "Paragraph 2, Sentence 1"
        assert result.issues[0].sentence == "Hi."
        assert result.stats["valid_sentences"] == 2

    def test_average_word_count(self):
        story = make_story(["one two three four five", "one two three four five six seven"])
        assert validate_story(story, "2").stats["average_word_count"] == 6.0

    def test_story_without_paragraphs(self):
        result = validate_story(Story(title="Empty"), "2")
        assert not result.is_valid
        assert result.issues[0].issues == ["No paragraphs found"]
        assert result.stats["total_sentences"] == 0


# ---------------------------------------------------------------------------
# Sentence structure
# ---------------------------------------------------------------------------


class TestStructure:
    def test_kindergarten_simple_only(self):
        assert is_structure_appropriate("I see a dog.", "K")
        assert not is_structure_appropriate("The cat and dog run.", "K")

    def test_conjunctions_match_whole_words(self):
        assert is_structure_appropriate("Andy sees a band.", "K")

    def test_first_grade_allows_and(self):
        assert is_structure_appropriate("We read and play games.", "1")
        assert not is_structure_appropriate("I like cake but not pie.", "1")
        assert not is_structure_appropriate("We play because it is fun.", "1")

    def test_second_grade_rejects_subordinators(self):
        assert is_structure_appropriate("We read but they play.", "2")
        assert not is_structure_appropriate("When it rains we read.", "2")

    def test_upper_grades_allow_anything(self):
        assert is_structure_appropriate("When it rains, we play inside.", "3")


class TestGradeSummary:
    def test_summary_fields(self):
        summary = grade_summary("K")
        assert summary["display_name"] == "Kindergarten"
        assert summary["word_range"] == "3-6 words per sentence"
        assert summary["syllable_limit"] == "Maximum 2 syllables per word"
        assert summary["lexile_range"] == "BR-200L"
        assert "sight words" in summary["key_focus"]
