from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


"""
AnswerOption Entity:
1. text (str): Label shown to the respondent.
2. category (str): Category of the quiz that receives points when the option is chosen.
3. weight (int): Points added to the category. Simple-mapping quizzes use 1 for every option.

Question Entity:
1. id (int): Ordinal position of the question inside its quiz. Cannot be None.
2. text (str): The prompt of the question.
3. options (tuple[AnswerOption]): Options in display order. Option position is the index an Answer refers to.
4. category (str, None): Free-form tag of what the question measures (e.g. "interest", "motivation").
Questions are defined statically and never change, so both models are frozen.
"""
class AnswerOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    category: str
    weight: int = Field(default=1, ge=0)


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    options: tuple[AnswerOption, ...]
    category: Optional[str] = None
