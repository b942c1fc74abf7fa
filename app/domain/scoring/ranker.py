from fractions import Fraction
from typing import Iterable, Optional
from app.domain.entities.quiz import StreamDefinition
from app.domain.entities.recommendation import CareerMetadata, Recommendation
from app.domain.errors import ValidationError
from app.domain.scoring.normalizer import MAX_SCORE, MIN_SCORE, round_half_up


def _check_top_n(top_n: int) -> None:
    if not isinstance(top_n, int) or isinstance(top_n, bool) or top_n < 1:
        raise ValidationError(f"top_n must be a positive integer, got {top_n!r}")


def rank_recommendations(scores: dict[str, int], metadata_table: dict[str, CareerMetadata],
                         top_n: int, *, raw_scores: Optional[dict[str, int]] = None) -> list[Recommendation]:
    """
    Ranks the entries of a metadata table by their normalized score.

    Entries are ordered by score descending, ties keep the declaration order of the table,
    so identical input always gives the identical ranking. Entries without a score count
    as zero and are still returned, the output holds min(top_n, len(metadata_table)) items.

    :param scores: Normalized scores in [0, 100] keyed like the metadata table.
    :param metadata_table: Static lookup table; its order is the tie-break order.
    :param top_n: Number of entries to return.
    :param raw_scores: Optional raw scores attached to each recommendation.
    :return: Ranked recommendations, rank 1 first.
    """
    _check_top_n(top_n)
    for label, score in scores.items():
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError(f"Score of '{label}' is outside [{MIN_SCORE}, {MAX_SCORE}]: {score}")

    ordered = sorted(
        enumerate(metadata_table.items()),
        key=lambda item: (-scores.get(item[1][0], 0), item[0]),
    )
    raw_scores = raw_scores or {}
    return [
        Recommendation(
            rank=position,
            label=label,
            title=metadata.title,
            match_score=scores.get(label, 0),
            raw_score=raw_scores.get(label),
            metadata=metadata,
        )
        for position, (_, (label, metadata)) in enumerate(ordered[:top_n], start=1)
    ]


def stream_scores(scores: dict[str, int], streams: Iterable[StreamDefinition]) -> dict[str, int]:
    """Weighted mean of the component categories of every stream, rounded half up."""
    composite = {}
    for stream in streams:
        total_weight = sum(stream.components.values())
        if total_weight <= 0 or any(weight < 0 for weight in stream.components.values()):
            raise ValidationError(f"Stream '{stream.code}' needs non-negative weights with a positive sum")
        weighted = sum(weight * scores.get(category, 0) for category, weight in stream.components.items())
        composite[stream.code] = round_half_up(Fraction(weighted, total_weight))
    return composite


def rank_streams(scores: dict[str, int], streams: Iterable[StreamDefinition],
                 top_n: int) -> list[Recommendation]:
    streams = list(streams)
    metadata_table = {stream.code: stream.metadata for stream in streams}
    return rank_recommendations(stream_scores(scores, streams), metadata_table, top_n)
