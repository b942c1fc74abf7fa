import json
import logging
from datetime import datetime, timezone
from app.domain.services_interfaces.notifier import NotifierInterface
from infrastructure.redis_config import RedisPool


logger = logging.getLogger('external_apis')

# Only the latest notifications of a user are kept
MAX_NOTIFICATIONS = 100


class RedisNotifier(NotifierInterface):
    def __init__(self, redis_pool: RedisPool):
        self.redis_pool = redis_pool

    async def notify(self, user_id: str, title: str, message: str) -> None:
        notification = json.dumps({
            'title': title,
            'message': message,
            'created_at': datetime.now(timezone.utc).isoformat(),
        }, ensure_ascii=False)
        async with await self.redis_pool.get_connection() as conn:
            key = f'notifications:{user_id}'
            await conn.lpush(key, notification)
            await conn.ltrim(key, 0, MAX_NOTIFICATIONS - 1)
        logger.info(f"NOTIFIED: {title}", extra={'user': user_id})

    async def get_notifications(self, user_id: str, limit: int = 20) -> list[dict]:
        async with await self.redis_pool.get_connection() as conn:
            items = await conn.lrange(f'notifications:{user_id}', 0, limit - 1)
        return [json.loads(item) for item in items]
