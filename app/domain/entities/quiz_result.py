from datetime import datetime
from pydantic import BaseModel, computed_field
from typing import Optional
from app.domain.entities.answer import Answer
from app.domain.entities.recommendation import Recommendation, find_areas_to_explore, find_strengths


"""
QuizEvaluation Entity:
Output of one pass through the scoring engine.
1. quiz_type (str): Quiz the answers belong to.
2. raw_scores (dict[str, int]): Accumulated category scores.
3. normalized_scores (dict[str, int]): Scores in [0, 100].
4. recommendations (list[Recommendation]): Direct per-category ranking.
5. streams (list[Recommendation]): Composite ranking, empty for quizzes without streams.
6. strengths (list[str]): Categories scoring 60 or more, derived.
7. areas_to_explore (list[str]): Categories scoring under 50, derived.

QuizResult Entity:
History snapshot of a submitted quiz. Scores are recomputed from answers on demand,
the snapshot is never used as a source of truth.
1. id (str): Unique identifier of the result. Cannot be None.
Other fields can be None because for some functionality we need only id(e.g get method).
2. user_id (str, None): Respondent.
3. quiz_type (str, None): Quiz key.
4. answers (list[Answer], None): Submitted answers.
5. raw_scores, normalized_scores (dict[str, int], None): Engine output.
6. recommendations, streams (list[Recommendation], None): Engine or LLM output.
7. source (str, None): "engine" or "llm", whichever produced the recommendations.
8. created_at (datetime, None): Submission time.
"""
class QuizEvaluation(BaseModel):
    quiz_type: str
    raw_scores: dict[str, int]
    normalized_scores: dict[str, int]
    recommendations: list[Recommendation]
    streams: list[Recommendation] = []

    @computed_field
    @property
    def strengths(self) -> list[str]:
        return find_strengths(self.normalized_scores)

    @computed_field
    @property
    def areas_to_explore(self) -> list[str]:
        return find_areas_to_explore(self.normalized_scores)


class QuizResult(BaseModel):
    id: str
    user_id: Optional[str] = None
    quiz_type: Optional[str] = None
    answers: Optional[list[Answer]] = None
    raw_scores: Optional[dict[str, int]] = None
    normalized_scores: Optional[dict[str, int]] = None
    recommendations: Optional[list[Recommendation]] = None
    streams: Optional[list[Recommendation]] = None
    source: Optional[str] = None
    created_at: Optional[datetime] = None
