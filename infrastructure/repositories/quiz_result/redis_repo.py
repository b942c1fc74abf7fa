from typing import Optional
from infrastructure.redis_config import RedisPool
from app.domain.repositories_interfaces.quiz_result_repo import QuizResultRepoInterface
from app.domain.entities.quiz_result import QuizResult
from config.main_config import CACHE_TTL_SECONDS


class RedisQuizResultRepo(QuizResultRepoInterface):
    def __init__(self, redis_pool: RedisPool, ttl: int = CACHE_TTL_SECONDS):
        self.redis_pool = redis_pool
        self.ttl = ttl

    async def get(self, result: QuizResult) -> Optional[QuizResult]:
        async with await self.redis_pool.get_connection() as conn:
            data = await conn.get(f'quiz_result:{result.id}')
            if data:
                return QuizResult.model_validate_json(data)
            return None

    async def save(self, result: QuizResult) -> None:
        async with await self.redis_pool.get_connection() as conn:
            await conn.set(f'quiz_result:{result.id}', result.model_dump_json(), ex=self.ttl)

    async def delete(self, result: QuizResult) -> None:
        async with await self.redis_pool.get_connection() as conn:
            await conn.delete(f'quiz_result:{result.id}')
