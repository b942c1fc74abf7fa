"""
Validation of text-generation output for the AI career quiz.

The language model is asked for a JSON object with a profile analysis and a list of
career recommendations. Its output is untrusted: it is parsed and checked with the same
strictness as submitted answers before it is merged with the engine scores.
"""
import json
from fractions import Fraction
from typing import Optional
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from app.domain.entities.recommendation import CareerMetadata, Recommendation
from app.domain.errors import ValidationError
from app.domain.scoring.normalizer import round_half_up


class GeneratedCareer(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    matchScore: int = Field(ge=0, le=100)
    salaryRange: Optional[str] = None
    marketDemand: Optional[str] = None
    workLifeBalance: Optional[str] = None
    jobSecurity: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None


class GeneratedProfile(BaseModel):
    profileAnalysis: dict[str, int] = {}
    recommendations: list[GeneratedCareer] = []


def extract_json(text: str) -> dict:
    # Models tend to wrap the object in prose or code fences
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end < start:
        raise ValidationError("No JSON object found in generated text")
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise ValidationError(f"Generated text is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Generated JSON must be an object")
    return data


def parse_generated_profile(text: str, categories: tuple) -> GeneratedProfile:
    """
    Parses and validates generated text.

    :param text: Raw text returned by the language model.
    :param categories: Category set of the quiz. profileAnalysis may only use these keys.
    :return: Validated GeneratedProfile.
    :raises ValidationError: On missing or malformed JSON, unknown categories or scores
        outside [0, 100].
    """
    data = extract_json(text)
    try:
        profile = GeneratedProfile.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Generated profile is malformed: {e.error_count()} error(s)") from e

    unknown = set(profile.profileAnalysis) - set(categories)
    if unknown:
        raise ValidationError(f"Generated profile uses unknown categories: {sorted(unknown)}")
    for category, score in profile.profileAnalysis.items():
        if not 0 <= score <= 100:
            raise ValidationError(f"Generated score of '{category}' is outside [0, 100]: {score}")
    return profile


def merge_scores(engine_scores: dict[str, int], generated_scores: dict[str, int]) -> dict[str, int]:
    """Averages the two vectors per category; categories the model skipped keep the engine score."""
    return {
        category: round_half_up(Fraction(score + generated_scores[category], 2))
        if category in generated_scores else score
        for category, score in engine_scores.items()
    }


def to_recommendations(careers: list[GeneratedCareer], top_n: int) -> list[Recommendation]:
    # sorted() is stable, equal scores keep the order the model returned them in
    ordered = sorted(careers, key=lambda career: -career.matchScore)[:top_n]
    return [
        Recommendation(
            rank=position,
            label=career.title,
            title=career.title,
            match_score=career.matchScore,
            metadata=CareerMetadata(
                title=career.title,
                description=career.description,
                salary_band=career.salaryRange,
                demand=career.marketDemand,
                work_life_balance=career.workLifeBalance,
                job_security=career.jobSecurity,
                icon=career.icon,
                field=career.category,
            ),
        )
        for position, career in enumerate(ordered, start=1)
    ]
