import math
from fractions import Fraction
from typing import Iterable, Optional, Union
from app.domain.entities.question import Question
from app.domain.entities.quiz import NormalizationPolicy
from app.domain.errors import ValidationError


MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: Union[Fraction, int, float]) -> int:
    # Exact for Fractions, so 2.5 -> 3 and 12.5 -> 13 regardless of float representation
    return math.floor(Fraction(value) + Fraction(1, 2))


def clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def percentage(raw: int, denominator: int) -> int:
    if denominator <= 0:
        return MIN_SCORE
    return clamp(round_half_up(Fraction(raw * 100, denominator)))


def theoretical_max(questions: Iterable[Question]) -> int:
    """
    Highest score a single category can reach given the weight table of the quiz.

    For every question only the heaviest option of a category counts, since a respondent
    picks one option per question. The result is the maximum of these per-category sums.
    """
    reachable = {}
    for question in questions:
        best = {}
        for option in question.options:
            best[option.category] = max(best.get(option.category, 0), option.weight)
        for category, weight in best.items():
            reachable[category] = reachable.get(category, 0) + weight
    return max(reachable.values(), default=0)


def normalize(raw: dict[str, int], policy: NormalizationPolicy, *,
              total_questions: Optional[int] = None,
              max_possible: Optional[int] = None) -> dict[str, int]:
    """
    Converts raw category scores into integer percentages in [0, 100].

    All categories share one denominator, so a higher raw score never gets a lower
    percentage. A zero denominator (nothing answered, all-zero vector) yields zeros.

    :param raw: Raw score vector.
    :param policy: TOTAL_QUESTIONS divides by total_questions, MAX_OBSERVED by the highest
        raw value, THEORETICAL_MAX by max_possible.
    :param total_questions: Number of answered questions, required by TOTAL_QUESTIONS.
    :param max_possible: Highest reachable category score, required by THEORETICAL_MAX.
    :return: Normalized vector with the same keys as raw.
    """
    if any(score < 0 for score in raw.values()):
        raise ValidationError("Raw scores must be non-negative")

    if policy == NormalizationPolicy.TOTAL_QUESTIONS:
        if total_questions is None:
            raise ValidationError("total_questions is required for question-count normalization")
        denominator = total_questions
    elif policy == NormalizationPolicy.MAX_OBSERVED:
        denominator = max(raw.values(), default=0)
    elif policy == NormalizationPolicy.THEORETICAL_MAX:
        if max_possible is None:
            raise ValidationError("max_possible is required for theoretical-max normalization")
        denominator = max_possible
    else:
        raise ValidationError(f"Unsupported normalization policy {policy}")

    return {category: percentage(score, denominator) for category, score in raw.items()}
