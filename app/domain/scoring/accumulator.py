from typing import Iterable
from app.domain.entities.answer import Answer
from app.domain.entities.question import AnswerOption, Question
from app.domain.errors import ValidationError


def resolve_option(question: Question, answer: Answer) -> AnswerOption:
    """
    Finds the option an answer points to, either by position or by category label.

    :param question: The answered question.
    :param answer: The answer referring to the question.
    :return: The chosen AnswerOption.
    :raises ValidationError: If the answer gives both or neither of index and label,
        the index is out of range, or the label does not identify exactly one option.
    """
    if (answer.option_index is None) == (answer.category is None):
        raise ValidationError(
            f"Answer to question {question.id} must give either an option index or a category")

    if answer.option_index is not None:
        if not 0 <= answer.option_index < len(question.options):
            raise ValidationError(
                f"Option index {answer.option_index} is out of range for question {question.id}")
        return question.options[answer.option_index]

    matches = [option for option in question.options if option.category == answer.category]
    if len(matches) != 1:
        raise ValidationError(
            f"Category '{answer.category}' does not identify a single option of question {question.id}")
    return matches[0]


def accumulate(questions: Iterable[Question], answers: Iterable[Answer],
               categories: Iterable[str]) -> dict[str, int]:
    """
    Folds answers into a score vector keyed by every category of the quiz.

    Each chosen option adds its weight to its category, so the result does not depend on
    the order of the answers. Unanswered questions add nothing. Any invalid answer aborts
    the whole call, no partial vector is returned.

    :param questions: Question set of the quiz.
    :param answers: Answers, at most one per question.
    :param categories: Category set of the quiz. Every key is present in the result.
    :return: Mapping category -> accumulated non-negative score.
    :raises ValidationError: On unknown question ids, repeated answers, invalid options
        or options pointing outside the category set.
    """
    questions_by_id = {question.id: question for question in questions}
    scores = {category: 0 for category in categories}
    answered = set()

    for answer in answers:
        question = questions_by_id.get(answer.question_id)
        if question is None:
            raise ValidationError(f"Unknown question id {answer.question_id}")
        if answer.question_id in answered:
            raise ValidationError(f"Question {answer.question_id} was answered more than once")
        answered.add(answer.question_id)

        option = resolve_option(question, answer)
        if option.category not in scores:
            raise ValidationError(
                f"Option category '{option.category}' of question {question.id} is not part of the quiz")
        scores[option.category] += option.weight

    return scores
