"""
Heuristic quality scoring for agent analyses.

The score is a lexical proxy: it looks at length and at the presence of
a fixed vocabulary of "quality" words, not at meaning.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ScoringConfig:
    """
    Weights and thresholds for calculate_score.

    Length bonuses apply on open intervals: a word count equal to a bound
    gets no bonus.
    """

    BASE_SCORE: float = 0.3

    # Length bonus (word count strictly inside the range)
    LENGTH_RANGE: Tuple[int, int] = (100, 2000)
    LENGTH_BONUS: float = 0.2
    TIGHT_LENGTH_RANGE: Tuple[int, int] = (300, 1500)
    TIGHT_LENGTH_BONUS: float = 0.1

    # Keyword coverage, scaled by the fraction of indicators found
    QUALITY_INDICATORS: Tuple[str, ...] = (
        "specific",
        "detailed",
        "comprehensive",
        "rigorous",
        "methodology",
        "evidence",
        "analysis",
        "recommendation",
        "improvement",
        "strength",
        "weakness",
        "observation",
        "conclusion",
        "framework",
        "approach",
    )
    INDICATOR_WEIGHT: float = 0.3

    # Failure wording penalty
    FAILURE_TERMS: Tuple[str, ...] = ("error", "failed")
    FAILURE_PENALTY: float = 0.3


DEFAULT_SCORING_CONFIG = ScoringConfig()


def count_words(text: str) -> int:
    """Count words as the pieces between single spaces."""
    return len(text.split(" "))


def calculate_score(
    analysis: str, config: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> float:
    """
    Score an analysis text in [0, 1].

    Formula:
        0.3 base
        + 0.2 if 100 < words < 2000
        + 0.1 if 300 < words < 1500
        + 0.3 * (indicators found / indicators total)
        - 0.3 if the text mentions "error" or "failed" (floored at 0)

    Pure function: the same text always yields the same score.

    Args:
        analysis: The model's analysis text
        config: Scoring configuration

    Returns:
        Score clamped to [0, 1]
    """
    score = config.BASE_SCORE

    word_count = count_words(analysis)
    low, high = config.LENGTH_RANGE
    if low < word_count < high:
        score += config.LENGTH_BONUS
    low, high = config.TIGHT_LENGTH_RANGE
    if low < word_count < high:
        score += config.TIGHT_LENGTH_BONUS

    lowered = analysis.lower()
    found = sum(1 for term in config.QUALITY_INDICATORS if term in lowered)
    score += (found / len(config.QUALITY_INDICATORS)) * config.INDICATOR_WEIGHT

    if any(term in lowered for term in config.FAILURE_TERMS):
        score = max(0.0, score - config.FAILURE_PENALTY)

    return min(1.0, max(0.0, score))
