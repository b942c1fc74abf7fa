"""
Tests for app.domain.scoring.accumulator

Covers:
- Every category of the quiz is present, unanswered questions add nothing
- Order of answers does not change the result
- Weighted options and answers given by category label
- Invalid answers abort with ValidationError
"""

import itertools

import pytest

from app.domain.entities.answer import Answer
from app.domain.entities.question import AnswerOption, Question
from app.domain.errors import ValidationError
from app.domain.scoring.accumulator import accumulate, resolve_option
from app.domain.scoring.catalog import SUBJECT_APTITUDE_QUIZ, SUBJECT_CATEGORIES


CATEGORIES = ('tech', 'art', 'biz')

QUESTIONS = (
    Question(id=1, text="q1", options=(
        AnswerOption(text="a", category='tech', weight=3),
        AnswerOption(text="b", category='art', weight=2),
    )),
    Question(id=2, text="q2", options=(
        AnswerOption(text="a", category='tech', weight=1),
        AnswerOption(text="b", category='biz', weight=4),
    )),
    Question(id=3, text="q3", options=(
        AnswerOption(text="a", category='art', weight=5),
        AnswerOption(text="b", category='biz', weight=0),
    )),
)


class TestAccumulate:
    def test_empty_answers_give_zero_for_every_category(self):
        assert accumulate(QUESTIONS, [], CATEGORIES) == {'tech': 0, 'art': 0, 'biz': 0}

    def test_weights_are_added_per_category(self):
        answers = [Answer(question_id=1, option_index=0), Answer(question_id=2, option_index=0),
                   Answer(question_id=3, option_index=0)]
        assert accumulate(QUESTIONS, answers, CATEGORIES) == {'tech': 4, 'art': 5, 'biz': 0}

    def test_result_does_not_depend_on_answer_order(self):
        answers = [Answer(question_id=1, option_index=1), Answer(question_id=2, option_index=1),
                   Answer(question_id=3, option_index=0)]
        results = [accumulate(QUESTIONS, list(permutation), CATEGORIES)
                   for permutation in itertools.permutations(answers)]
        assert all(result == {'tech': 0, 'art': 7, 'biz': 4} for result in results)

    def test_zero_weight_option_keeps_category_at_zero(self):
        scores = accumulate(QUESTIONS, [Answer(question_id=3, option_index=1)], CATEGORIES)
        assert scores == {'tech': 0, 'art': 0, 'biz': 0}

    def test_answer_by_category_label(self):
        scores = accumulate(QUESTIONS, [Answer(question_id=2, category='biz')], CATEGORIES)
        assert scores['biz'] == 4

    def test_all_scores_are_non_negative(self):
        answers = [Answer(question_id=qid, option_index=1) for qid in (1, 2, 3)]
        scores = accumulate(QUESTIONS, answers, CATEGORIES)
        assert set(scores) == set(CATEGORIES)
        assert all(score >= 0 for score in scores.values())

    def test_every_answer_on_first_option_goes_to_mathematics(self):
        answers = [Answer(question_id=question.id, option_index=0) for question in SUBJECT_APTITUDE_QUIZ.questions]
        scores = accumulate(SUBJECT_APTITUDE_QUIZ.questions, answers, SUBJECT_CATEGORIES)
        assert scores == {category: (10 if category == 'mathematics' else 0) for category in SUBJECT_CATEGORIES}


class TestAccumulateErrors:
    def test_unknown_question(self):
        with pytest.raises(ValidationError, match="Unknown question"):
            accumulate(QUESTIONS, [Answer(question_id=99, option_index=0)], CATEGORIES)

    def test_out_of_range_index(self):
        with pytest.raises(ValidationError, match="out of range"):
            accumulate(QUESTIONS, [Answer(question_id=1, option_index=2)], CATEGORIES)

    def test_negative_index(self):
        with pytest.raises(ValidationError):
            accumulate(QUESTIONS, [Answer(question_id=1, option_index=-1)], CATEGORIES)

    def test_duplicate_answer(self):
        answers = [Answer(question_id=1, option_index=0), Answer(question_id=1, option_index=1)]
        with pytest.raises(ValidationError, match="more than once"):
            accumulate(QUESTIONS, answers, CATEGORIES)

    def test_category_outside_quiz(self):
        with pytest.raises(ValidationError, match="not part of the quiz"):
            accumulate(QUESTIONS, [Answer(question_id=1, option_index=0)], ('art', 'biz'))


class TestResolveOption:
    def test_needs_index_or_category(self):
        with pytest.raises(ValidationError):
            resolve_option(QUESTIONS[0], Answer(question_id=1))

    def test_rejects_both_index_and_category(self):
        with pytest.raises(ValidationError):
            resolve_option(QUESTIONS[0], Answer(question_id=1, option_index=0, category='tech'))

    def test_category_must_match_one_option(self):
        question = Question(id=4, text="q4", options=(
            AnswerOption(text="a", category='tech', weight=1),
            AnswerOption(text="b", category='tech', weight=2),
        ))
        with pytest.raises(ValidationError):
            resolve_option(question, Answer(question_id=4, category='tech'))
        with pytest.raises(ValidationError):
            resolve_option(question, Answer(question_id=4, category='art'))

    def test_returns_chosen_option(self):
        option = resolve_option(QUESTIONS[1], Answer(question_id=2, option_index=1))
        assert option.category == 'biz'
        assert option.weight == 4
