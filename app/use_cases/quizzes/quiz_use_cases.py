import logging
from datetime import datetime, timezone
from typing import Iterable
from uuid import uuid4
from app.domain.entities.answer import Answer
from app.domain.entities.quiz_result import QuizEvaluation, QuizResult
from app.domain.errors import NotFoundError
from app.domain.repositories_interfaces.quiz_result_repo import QuizResultRepoInterface
from app.domain.scoring.catalog import get_quiz
from app.domain.scoring.engine import evaluate_quiz
from config.main_config import DEFAULT_TOP_N


logger = logging.getLogger('use_cases')


def generate_result_id() -> str:
    return f"quiz_{uuid4().hex}"


class QuizUseCases:
    def __init__(self, sql_repo: QuizResultRepoInterface, redis_repo: QuizResultRepoInterface):
        self.sql_repo = sql_repo
        self.redis_repo = redis_repo

    def evaluate(self, quiz_type: str, answers: Iterable[Answer], top_n: int = DEFAULT_TOP_N) -> QuizEvaluation:
        """
        Scores answers of any catalog quiz without persisting anything.

        :param quiz_type: Key of the quiz in the catalog.
        :param answers: Submitted answers.
        :param top_n: Number of recommendations to return.
        :return: QuizEvaluation with raw and normalized scores and rankings.
        :raises NotFoundError: If the quiz type is unknown.
        :raises ValidationError: If any answer is invalid.
        """
        return evaluate_quiz(get_quiz(quiz_type), answers, top_n)

    async def submit(self, user_id: str, quiz_type: str, answers: Iterable[Answer],
                     top_n: int = DEFAULT_TOP_N) -> QuizResult:
        """
        Scores answers and stores the snapshot in the history.

        The snapshot is saved in SQL first and cached in Redis afterwards, the same way
        every other entity is written.

        :param user_id: Respondent.
        :param quiz_type: Key of the quiz in the catalog.
        :param answers: Submitted answers.
        :param top_n: Number of recommendations to return.
        :return: The stored QuizResult.
        """
        answers = list(answers)
        evaluation = self.evaluate(quiz_type, answers, top_n)
        result = QuizResult(
            id=generate_result_id(),
            user_id=user_id,
            quiz_type=quiz_type,
            answers=answers,
            raw_scores=evaluation.raw_scores,
            normalized_scores=evaluation.normalized_scores,
            recommendations=evaluation.recommendations,
            streams=evaluation.streams,
            source='engine',
            created_at=datetime.now(timezone.utc),
        )
        await self.save(result)
        return result

    async def save(self, result: QuizResult) -> None:
        await self.sql_repo.save(result)
        await self.redis_repo.save(result)
        logger.info(f"SAVED {result.quiz_type} RESULT {result.id} FROM {result.source}",
                    extra={'user': result.user_id})

    async def get(self, result_id: str) -> QuizResult:
        """
        Retrieves a stored result. It first checks Redis cache and
        falls back to SQL if not found.

        :param result_id: The unique identifier of the result.
        :return: The retrieved QuizResult.
        :raises NotFoundError: If the result does not exist.
        """
        result = QuizResult(id=result_id)
        redis_info = await self.redis_repo.get(result)
        if redis_info:
            return redis_info

        result = await self.sql_repo.get(result)
        if result is None:
            raise NotFoundError(f"Quiz result {result_id} not found")
        await self.redis_repo.save(result)
        return result

    async def history(self, user_id: str) -> list[QuizResult]:
        # Newest first
        return await self.sql_repo.get_by_user(user_id)

    async def delete(self, result_id: str) -> None:
        result = QuizResult(id=result_id)
        await self.sql_repo.delete(result)
        await self.redis_repo.delete(result)
