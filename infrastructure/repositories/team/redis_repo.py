from typing import Optional
from infrastructure.redis_config import RedisPool
from app.domain.repositories_interfaces.team_repo import TeamCacheInterface
from app.domain.entities.team import Team
from config.main_config import CACHE_TTL_SECONDS


class RedisTeamRepo(TeamCacheInterface):
    def __init__(self, redis_pool: RedisPool, ttl: int = CACHE_TTL_SECONDS):
        self.redis_pool = redis_pool
        self.ttl = ttl

    async def get(self, team: Team) -> Optional[Team]:
        async with await self.redis_pool.get_connection() as conn:
            data = await conn.get(f'team:{team.id}')
            # If data is present in redis return it as Team instance, otherwise return None
            # and retrieve data from SQL
            if data:
                return Team.model_validate_json(data)
            return None

    async def save(self, team: Team) -> None:
        async with await self.redis_pool.get_connection() as conn:
            # Is used both for caching a new team and refreshing it after a state change
            await conn.set(f'team:{team.id}', team.model_dump_json(), ex=self.ttl)

    async def delete(self, team: Team) -> None:
        async with await self.redis_pool.get_connection() as conn:
            await conn.delete(f'team:{team.id}')
