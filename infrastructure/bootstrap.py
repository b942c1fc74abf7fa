import asyncio
import logging
from pathlib import Path
from app.use_cases.quizzes.career_quiz_use_cases import CareerQuizUseCases
from app.use_cases.quizzes.quiz_use_cases import QuizUseCases
from app.use_cases.teams.team_use_cases import TeamUseCases
from config.logging_config import configure_logging
from config.main_config import DB_HOST, DB_NAME, DB_USER, DB_PASSWORD, DB_PORT, REDIS_DB, REDIS_HOST, REDIS_PORT
from infrastructure.aiomysql_config import MySQLPool
from infrastructure.redis_config import RedisPool
from infrastructure.repositories.quiz_result.redis_repo import RedisQuizResultRepo
from infrastructure.repositories.quiz_result.sql_repo import MySQLQuizResultRepo
from infrastructure.repositories.team.redis_repo import RedisTeamRepo
from infrastructure.repositories.team.sql_repo import MySQLTeamRepo
from infrastructure.services.aiohttp_service import AiohttpService
from infrastructure.services.llm_service import LLMService
from infrastructure.services.redis_notifier import RedisNotifier
from infrastructure.services.repo_service import RepoService


logger = logging.getLogger('repositories')

SCHEMA_FILE = Path(__file__).parent / 'sql' / 'schema.sql'


class Application:
    """Pools, repositories and the use cases wired on top of them."""

    def __init__(self, sql_pool: MySQLPool, redis_pool: RedisPool, repo_service: RepoService):
        self.sql_pool = sql_pool
        self.redis_pool = redis_pool
        self.repo_service = repo_service
        self.quiz_use_cases = QuizUseCases(repo_service.sql_quiz_result_repo, repo_service.redis_quiz_result_repo)
        self.career_quiz_use_cases = CareerQuizUseCases(repo_service.sql_quiz_result_repo,
                                                        repo_service.redis_quiz_result_repo,
                                                        repo_service.llm_service)
        self.team_use_cases = TeamUseCases(repo_service.sql_team_repo, repo_service.redis_team_repo,
                                           repo_service.notifier)

    async def close(self) -> None:
        await self.repo_service.aiohttp_service.close()
        await self.redis_pool.close_pool()
        await self.sql_pool.close_pool()


async def create_application(with_logging: bool = True) -> Application:
    if with_logging:
        configure_logging()
    # Creating repo instances and passing them to service for use case utilization
    sql_pool = MySQLPool(host=DB_HOST, port=DB_PORT, user=DB_USER, password=DB_PASSWORD, db=DB_NAME)
    redis_pool = RedisPool(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB)
    await sql_pool.create_pool()
    await redis_pool.create_pool()

    aiohttp_service = AiohttpService()
    repo_service = RepoService(
        sql_team_repo=MySQLTeamRepo(sql_pool),
        redis_team_repo=RedisTeamRepo(redis_pool),
        sql_quiz_result_repo=MySQLQuizResultRepo(sql_pool),
        redis_quiz_result_repo=RedisQuizResultRepo(redis_pool),
        aiohttp_service=aiohttp_service,
        llm_service=LLMService(aiohttp_service),
        notifier=RedisNotifier(redis_pool),
    )
    logger.info(f"CONNECTED TO MYSQL {DB_HOST}:{DB_PORT}/{DB_NAME} AND REDIS {REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}")
    return Application(sql_pool, redis_pool, repo_service)


def split_statements(script: str) -> list[str]:
    lines = [line for line in script.splitlines() if not line.strip().startswith('--')]
    return [statement.strip() for statement in "\n".join(lines).split(';') if statement.strip()]


async def init_schema(sql_pool: MySQLPool, schema_file: Path = SCHEMA_FILE) -> None:
    statements = split_statements(schema_file.read_text(encoding='utf-8'))
    async with sql_pool.get_connection() as conn:
        async with conn.cursor() as cursor:
            for statement in statements:
                await cursor.execute(statement)
    logger.info(f"APPLIED {len(statements)} SCHEMA STATEMENTS")


async def main():
    app = await create_application()
    try:
        await init_schema(app.sql_pool)
    finally:
        await app.close()


if __name__ == '__main__':
    asyncio.run(main())
