from typing import Iterable
from app.domain.entities.answer import Answer
from app.domain.entities.quiz import NormalizationPolicy, QuizDefinition
from app.domain.entities.quiz_result import QuizEvaluation
from app.domain.scoring.accumulator import accumulate
from app.domain.scoring.normalizer import normalize, theoretical_max
from app.domain.scoring.ranker import rank_recommendations, rank_streams


def score_quiz(quiz: QuizDefinition, answers: Iterable[Answer]) -> dict[str, int]:
    return accumulate(quiz.questions, answers, quiz.categories)


def normalize_quiz(quiz: QuizDefinition, raw: dict[str, int], answered: int) -> dict[str, int]:
    if quiz.normalization == NormalizationPolicy.THEORETICAL_MAX:
        return normalize(raw, quiz.normalization, max_possible=theoretical_max(quiz.questions))
    return normalize(raw, quiz.normalization, total_questions=answered)


def evaluate_quiz(quiz: QuizDefinition, answers: Iterable[Answer], top_n: int = 3) -> QuizEvaluation:
    """
    Runs answers through accumulation, normalization and ranking.

    :param quiz: Quiz descriptor with categories, weights, policy and metadata.
    :param answers: Submitted answers.
    :param top_n: Number of recommendations (and streams) to return.
    :return: QuizEvaluation with raw and normalized vectors and both rankings.
    """
    answers = list(answers)
    raw = score_quiz(quiz, answers)
    normalized = normalize_quiz(quiz, raw, answered=len(answers))
    recommendations = rank_recommendations(normalized, quiz.metadata, top_n, raw_scores=raw)
    streams = rank_streams(normalized, quiz.streams, top_n) if quiz.streams else []
    return QuizEvaluation(
        quiz_type=quiz.quiz_type,
        raw_scores=raw,
        normalized_scores=normalized,
        recommendations=recommendations,
        streams=streams,
    )
