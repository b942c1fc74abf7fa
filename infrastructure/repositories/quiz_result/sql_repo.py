import json
from typing import Optional
from app.domain.entities.quiz_result import QuizResult
from app.domain.repositories_interfaces.quiz_result_repo import QuizResultRepoInterface
from infrastructure.aiomysql_config import MySQLPool


RESULT_COLUMNS = ("id, user_id, quiz_type, answers, raw_scores, normalized_scores, "
                  "recommendations, streams, source, created_at")
JSON_FIELDS = ('answers', 'raw_scores', 'normalized_scores', 'recommendations', 'streams')


def to_result(row) -> QuizResult:
    result_dict = dict(zip(QuizResult.model_fields.keys(), row))
    # JSON columns come back as strings
    for key in JSON_FIELDS:
        if isinstance(result_dict[key], (str, bytes)):
            result_dict[key] = json.loads(result_dict[key])
    return QuizResult.model_validate(result_dict)


class MySQLQuizResultRepo(QuizResultRepoInterface):
    def __init__(self, pool: MySQLPool):
        self.pool = pool

    async def get(self, result: QuizResult) -> Optional[QuizResult]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(f"SELECT {RESULT_COLUMNS} FROM quiz_results WHERE id=%s", (result.id,))
                row = await cursor.fetchone()
                return to_result(row) if row else None

    async def save(self, result: QuizResult) -> None:
        data = result.model_dump(mode='json')
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"INSERT INTO quiz_results ({RESULT_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                    (result.id, result.user_id, result.quiz_type,
                     *(json.dumps(data[key], ensure_ascii=False) for key in JSON_FIELDS),
                     result.source, result.created_at)
                )
                await conn.commit()

    async def delete(self, result: QuizResult) -> None:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute("DELETE FROM quiz_results WHERE id=%s", (result.id,))
                await conn.commit()

    async def get_by_user(self, user_id: str) -> list[QuizResult]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {RESULT_COLUMNS} FROM quiz_results WHERE user_id=%s ORDER BY created_at DESC",
                    (user_id,)
                )
                return [to_result(row) for row in await cursor.fetchall()]
