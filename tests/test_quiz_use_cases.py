"""Tests for QuizUseCases and CareerQuizUseCases with mocked repositories."""

import json
from unittest.mock import AsyncMock

import pytest

from app.domain.entities.answer import Answer
from app.domain.entities.quiz_result import QuizResult
from app.domain.errors import ExternalServiceError, NotFoundError, ValidationError
from app.domain.scoring.catalog import CAREER_PROFILE, CAREER_PROFILE_QUIZ, DEGREE_BRANCH, SUBJECT_APTITUDE
from app.use_cases.quizzes.career_quiz_use_cases import CareerQuizUseCases, build_prompt
from app.use_cases.quizzes.quiz_use_cases import QuizUseCases
from infrastructure.services.llm_service import LLMService


@pytest.fixture
def sql_repo():
    repo = AsyncMock()
    repo.get.return_value = None
    repo.get_by_user.return_value = []
    return repo


@pytest.fixture
def redis_repo():
    repo = AsyncMock()
    repo.get.return_value = None
    return repo


@pytest.fixture
def quiz_use_cases(sql_repo, redis_repo):
    return QuizUseCases(sql_repo, redis_repo)


def first_option_answers(quiz):
    return [Answer(question_id=question.id, option_index=0) for question in quiz.questions]


class TestQuizUseCases:
    def test_evaluate_does_not_touch_repositories(self, quiz_use_cases, sql_repo, redis_repo):
        evaluation = quiz_use_cases.evaluate(DEGREE_BRANCH, [Answer(question_id=3, option_index=2)], top_n=1)
        assert evaluation.recommendations[0].label == 'medicine'
        sql_repo.save.assert_not_called()
        redis_repo.save.assert_not_called()

    def test_evaluate_unknown_quiz(self, quiz_use_cases):
        with pytest.raises(NotFoundError):
            quiz_use_cases.evaluate('unknown', [])

    @pytest.mark.asyncio
    async def test_submit_saves_to_sql_and_cache(self, quiz_use_cases, sql_repo, redis_repo):
        answers = [Answer(question_id=i, option_index=7) for i in range(1, 11)]
        result = await quiz_use_cases.submit('user-1', SUBJECT_APTITUDE, answers)

        assert result.id.startswith('quiz_')
        assert result.user_id == 'user-1'
        assert result.source == 'engine'
        assert result.normalized_scores['technology'] == 100
        assert result.recommendations[0].label == 'technology'
        # CEC and MEC tie on technology, CEC is declared first
        assert result.streams[0].label == 'CEC'
        assert result.created_at is not None
        sql_repo.save.assert_awaited_once_with(result)
        redis_repo.save.assert_awaited_once_with(result)

    @pytest.mark.asyncio
    async def test_submit_invalid_answers_saves_nothing(self, quiz_use_cases, sql_repo):
        with pytest.raises(ValidationError):
            await quiz_use_cases.submit('user-1', SUBJECT_APTITUDE, [Answer(question_id=42, option_index=0)])
        sql_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_from_cache(self, quiz_use_cases, sql_repo, redis_repo):
        cached = QuizResult(id='quiz_1', user_id='user-1')
        redis_repo.get.return_value = cached
        assert await quiz_use_cases.get('quiz_1') is cached
        sql_repo.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_falls_back_to_sql_and_refreshes_cache(self, quiz_use_cases, sql_repo, redis_repo):
        stored = QuizResult(id='quiz_1', user_id='user-1')
        sql_repo.get.return_value = stored
        assert await quiz_use_cases.get('quiz_1') is stored
        redis_repo.save.assert_awaited_once_with(stored)

    @pytest.mark.asyncio
    async def test_get_missing(self, quiz_use_cases):
        with pytest.raises(NotFoundError):
            await quiz_use_cases.get('quiz_404')

    @pytest.mark.asyncio
    async def test_history(self, quiz_use_cases, sql_repo):
        results = [QuizResult(id='quiz_2'), QuizResult(id='quiz_1')]
        sql_repo.get_by_user.return_value = results
        assert await quiz_use_cases.history('user-1') == results
        sql_repo.get_by_user.assert_awaited_once_with('user-1')

    @pytest.mark.asyncio
    async def test_delete(self, quiz_use_cases, sql_repo, redis_repo):
        await quiz_use_cases.delete('quiz_1')
        sql_repo.delete.assert_awaited_once_with(QuizResult(id='quiz_1'))
        redis_repo.delete.assert_awaited_once_with(QuizResult(id='quiz_1'))


class TestCareerQuizUseCases:
    @pytest.mark.asyncio
    async def test_without_text_generation(self, sql_repo, redis_repo):
        use_cases = CareerQuizUseCases(sql_repo, redis_repo)
        result = await use_cases.submit('user-1', first_option_answers(CAREER_PROFILE_QUIZ))

        assert result.quiz_type == CAREER_PROFILE
        assert result.source == 'engine'
        assert result.recommendations[0].title == 'Software Engineer'
        sql_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_generated_careers_are_used(self, sql_repo, redis_repo):
        llm = AsyncMock()
        llm.generate.return_value = json.dumps({
            'profileAnalysis': {'technical': 100, 'creative': 0},
            'recommendations': [
                {'title': 'Cloud Architect', 'matchScore': 88, 'salaryRange': '₹12-30 LPA'},
                {'title': 'DevOps Engineer', 'matchScore': 93},
            ],
        })
        use_cases = CareerQuizUseCases(sql_repo, redis_repo, llm)
        answers = first_option_answers(CAREER_PROFILE_QUIZ)
        engine = use_cases.evaluate(CAREER_PROFILE, answers)

        result = await use_cases.submit('user-1', answers, top_n=2)

        assert result.source == 'llm'
        assert [r.title for r in result.recommendations] == ['DevOps Engineer', 'Cloud Architect']
        assert result.raw_scores == engine.raw_scores
        expected_technical = (engine.normalized_scores['technical'] + 100 + 1) // 2
        assert result.normalized_scores['technical'] == expected_technical
        assert result.normalized_scores['analytical'] == engine.normalized_scores['analytical']
        prompt, system_prompt = llm.generate.await_args.args
        assert 'How do you prefer to learn?' in prompt
        assert 'profileAnalysis' in system_prompt

    @pytest.mark.asyncio
    async def test_profile_without_careers_ranks_merged_scores(self, sql_repo, redis_repo):
        llm = AsyncMock()
        llm.generate.return_value = '{"profileAnalysis": {"regionalImpact": 100}, "recommendations": []}'
        use_cases = CareerQuizUseCases(sql_repo, redis_repo, llm)
        answers = [Answer(question_id=4, option_index=0)]

        result = await use_cases.submit('user-1', answers, top_n=1)

        assert result.source == 'engine'
        assert result.recommendations[0].label == 'regionalImpact'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("side_effect", [
        ExternalServiceError("connection refused"),
        None,
    ])
    async def test_falls_back_to_engine(self, sql_repo, redis_repo, side_effect):
        llm = AsyncMock()
        if side_effect is not None:
            llm.generate.side_effect = side_effect
        else:
            llm.generate.return_value = '{"profileAnalysis": {"technical": 400}}'
        use_cases = CareerQuizUseCases(sql_repo, redis_repo, llm)
        answers = first_option_answers(CAREER_PROFILE_QUIZ)
        engine = use_cases.evaluate(CAREER_PROFILE, answers)

        result = await use_cases.submit('user-1', answers)

        assert result.source == 'engine'
        assert result.normalized_scores == engine.normalized_scores
        assert result.recommendations == engine.recommendations
        sql_repo.save.assert_awaited_once_with(result)

    @pytest.mark.asyncio
    async def test_malformed_completion_body_falls_back_to_engine(self, sql_repo, redis_repo):
        aiohttp_service = AsyncMock()
        aiohttp_service.post.side_effect = json.JSONDecodeError("Expecting value", "<html>Bad Gateway</html>", 0)
        use_cases = CareerQuizUseCases(sql_repo, redis_repo, LLMService(aiohttp_service))
        answers = first_option_answers(CAREER_PROFILE_QUIZ)
        engine = use_cases.evaluate(CAREER_PROFILE, answers)

        result = await use_cases.submit('user-1', answers)

        assert result.source == 'engine'
        assert result.recommendations == engine.recommendations
        sql_repo.save.assert_awaited_once_with(result)

    def test_build_prompt_lists_answers_and_categories(self):
        answers = [Answer(question_id=2, option_index=1)]
        prompt = build_prompt(CAREER_PROFILE_QUIZ, answers, {'technical': 10}, 3, "Class 12 student from Pune")
        assert 'Creating something new' in prompt
        assert '"regionalImpact": 0' in prompt
        assert 'technical: 10%' in prompt
        assert 'Class 12 student from Pune' in prompt
