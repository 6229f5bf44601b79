"""
Unit tests for the scoring module.

The score is a lexical heuristic; these tests pin its thresholds and
weights, not any notion of analysis quality.
"""

import pytest

from analyzer.agents.scoring import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    calculate_score,
    count_words,
)


def _words(n: int, word: str = "word") -> str:
    return " ".join([word] * n)


class TestCountWords:
    """Tests for the count_words function."""

    def test_single_spaces(self):
        assert count_words("one two three") == 3

    def test_empty_string_counts_one(self):
        """Splitting on spaces yields one empty piece."""
        assert count_words("") == 1

    def test_double_spaces_count_empty_pieces(self):
        assert count_words("a  b") == 3


class TestLengthBonus:
    """Length bonuses apply on open intervals."""

    def test_short_text_gets_base_only(self):
        assert calculate_score("hello") == pytest.approx(0.3)

    def test_exactly_100_words_gets_no_bonus(self):
        assert calculate_score(_words(100)) == pytest.approx(0.3)

    def test_101_words_gets_length_bonus(self):
        assert calculate_score(_words(101)) == pytest.approx(0.5)

    def test_exactly_300_words_gets_no_tight_bonus(self):
        assert calculate_score(_words(300)) == pytest.approx(0.5)

    def test_301_words_gets_both_bonuses(self):
        assert calculate_score(_words(301)) == pytest.approx(0.6)

    def test_exactly_1500_words_loses_tight_bonus(self):
        assert calculate_score(_words(1500)) == pytest.approx(0.5)

    def test_1999_words_keeps_length_bonus(self):
        assert calculate_score(_words(1999)) == pytest.approx(0.5)

    def test_exactly_2000_words_gets_no_bonus(self):
        assert calculate_score(_words(2000)) == pytest.approx(0.3)


class TestQualityIndicators:
    """Keyword coverage adds up to 0.3."""

    def test_three_indicators(self):
        score = calculate_score("analysis evidence methodology")
        assert score == pytest.approx(0.3 + 3 / 15 * 0.3)

    def test_indicators_are_case_insensitive(self):
        assert calculate_score("ANALYSIS Evidence") == calculate_score(
            "analysis evidence"
        )

    def test_indicators_match_substrings(self):
        """'specifically' contains 'specific'."""
        assert calculate_score("specifically") == pytest.approx(0.3 + 0.3 / 15)

    def test_repeated_indicator_counts_once(self):
        assert calculate_score("analysis analysis analysis") == calculate_score(
            "analysis"
        )

    def test_all_indicators_in_tight_range_scores_0_9(self):
        text = " ".join(DEFAULT_SCORING_CONFIG.QUALITY_INDICATORS * 25)
        assert calculate_score(text) == pytest.approx(0.9)


class TestFailurePenalty:
    """Text mentioning 'error' or 'failed' loses 0.3, floored at 0."""

    def test_error_word_floors_at_zero(self):
        assert calculate_score("error") == 0.0

    def test_failed_word_case_insensitive(self):
        assert calculate_score("The run FAILED") == 0.0

    def test_penalty_subtracts_from_higher_score(self):
        text = _words(301) + " error"
        assert calculate_score(text) == pytest.approx(0.3)

    def test_penalty_with_indicator(self):
        assert calculate_score("analysis error") == pytest.approx(0.3 / 15)

    def test_substring_triggers_penalty(self):
        """'errors' contains 'error'."""
        assert calculate_score("several errors") == 0.0


class TestScoreProperties:
    """Range and purity."""

    def test_identical_text_identical_score(self):
        text = "A detailed analysis with evidence and a clear recommendation."
        assert calculate_score(text) == calculate_score(text)

    @pytest.mark.parametrize(
        "text",
        ["", "error failed", _words(5000), " ".join(["analysis"] * 400)],
    )
    def test_score_in_unit_interval(self, text):
        assert 0.0 <= calculate_score(text) <= 1.0

    def test_custom_config_is_respected(self):
        config = ScoringConfig(BASE_SCORE=0.5)
        assert calculate_score("hello", config) == pytest.approx(0.5)

    def test_score_clamped_to_one(self):
        config = ScoringConfig(BASE_SCORE=0.95)
        assert calculate_score(_words(400), config) == 1.0
