from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Optional


STRENGTH_THRESHOLD = 60
EXPLORE_THRESHOLD = 50


class MatchLevel(str, Enum):
    EXCELLENT = 'Excellent'
    GOOD = 'Good'
    FAIR = 'Fair'
    LOW = 'Low'


class InterestLevel(str, Enum):
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'


def match_level(score: int) -> MatchLevel:
    """Tier of a 0-100 match score: Excellent from 80, Good from 60, Fair from 40."""
    if score >= 80:
        return MatchLevel.EXCELLENT
    if score >= 60:
        return MatchLevel.GOOD
    if score >= 40:
        return MatchLevel.FAIR
    return MatchLevel.LOW


def interest_level(score: int) -> InterestLevel:
    if score >= 70:
        return InterestLevel.HIGH
    if score >= 50:
        return InterestLevel.MEDIUM
    return InterestLevel.LOW


def find_strengths(scores: dict[str, int]) -> list[str]:
    return [label for label, score in scores.items() if score >= STRENGTH_THRESHOLD]


def find_areas_to_explore(scores: dict[str, int]) -> list[str]:
    return [label for label, score in scores.items() if score < EXPLORE_THRESHOLD]


"""
CareerMetadata Entity:
Static descriptive fields attached to a category, stream or career in a lookup table.
1. title (str): Human readable name. Cannot be None.
2. description (str, None): Short description.
3. salary_band (str, None): Expected salary range, e.g. "₹6-15 LPA".
4. demand (str, None): Market demand label.
5. work_life_balance (str, None): Work-life balance label.
6. job_security (str, None): Job security label.
7. careers (tuple[str]): Example careers reachable from this entry.
8. icon (str, None): Emoji shown next to the entry.
9. field (str, None): Broad field the entry belongs to (Technology, Healthcare, ...).

Recommendation Entity:
Derived, read-only ranking entry.
1. rank (int): 1-based position in the ranking.
2. label (str): Key of the ranked category, stream code or career title.
3. title (str): Display title taken from metadata.
4. match_score (int): Score in [0, 100].
5. raw_score (int, None): Accumulated points before normalization, when known.
6. metadata (CareerMetadata, None): Lookup entry the recommendation was built from.
7. level (MatchLevel): Tier of match_score, derived.
8. interest (InterestLevel): Interest tier of match_score, derived.
"""
class CareerMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: Optional[str] = None
    salary_band: Optional[str] = None
    demand: Optional[str] = None
    work_life_balance: Optional[str] = None
    job_security: Optional[str] = None
    careers: tuple[str, ...] = ()
    icon: Optional[str] = None
    field: Optional[str] = None


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int = Field(ge=1)
    label: str
    title: str
    match_score: int = Field(ge=0, le=100)
    raw_score: Optional[int] = None
    metadata: Optional[CareerMetadata] = None

    @computed_field
    @property
    def level(self) -> MatchLevel:
        return match_level(self.match_score)

    @computed_field
    @property
    def interest(self) -> InterestLevel:
        return interest_level(self.match_score)
