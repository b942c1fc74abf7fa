from enum import Enum
from pydantic import BaseModel, ConfigDict
from app.domain.entities.question import Question
from app.domain.entities.recommendation import CareerMetadata


class NormalizationPolicy(str, Enum):
    # raw / answered-question count, used by simple-mapping quizzes
    TOTAL_QUESTIONS = 'total_questions'
    # raw / highest raw score in the vector
    MAX_OBSERVED = 'max_observed'
    # raw / highest reachable score of the category according to the weight table
    THEORETICAL_MAX = 'theoretical_max'


"""
StreamDefinition Entity:
Composite label built from several categories (an academic stream such as MPC).
1. code (str): Stream code. Cannot be None.
2. components (dict[str, int]): Category -> weight used in the weighted mean.
3. metadata (CareerMetadata): Descriptive fields for the stream.

QuizDefinition Entity:
Descriptor that parameterizes the scoring engine for one quiz type.
1. quiz_type (str): Unique key of the quiz (e.g. "subject_aptitude").
2. title (str): Display title.
3. categories (tuple[str]): Category set of the quiz. Every score vector carries exactly these keys.
4. questions (tuple[Question]): Static question set.
5. normalization (NormalizationPolicy): How raw scores become percentages.
6. metadata (dict[str, CareerMetadata]): Lookup table used for direct ranking. Declaration order is
the tie-break order.
7. streams (tuple[StreamDefinition]): Composite labels ranked in composite mode. Empty when the quiz
has no composite ranking.
"""
class StreamDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    components: dict[str, int]
    metadata: CareerMetadata


class QuizDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    quiz_type: str
    title: str
    categories: tuple[str, ...]
    questions: tuple[Question, ...]
    normalization: NormalizationPolicy
    metadata: dict[str, CareerMetadata]
    streams: tuple[StreamDefinition, ...] = ()
