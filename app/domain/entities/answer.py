from pydantic import BaseModel, ConfigDict
from typing import Optional


"""
Answer Entity:
1. question_id (int): Identifier of the answered question. Cannot be None.
2. option_index (int, None): Position of the chosen option inside the question.
3. category (str, None): Category label of the chosen option, used by quizzes that record
the picked branch instead of its position.
Exactly one of option_index and category is expected; the accumulator rejects anything else.
"""
class Answer(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: int
    option_index: Optional[int] = None
    category: Optional[str] = None
