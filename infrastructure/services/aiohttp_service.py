import aiohttp
import aiohttp.client_exceptions
from app.domain.services_interfaces.aiohttp_service import AiohttpServiceInterface


class AiohttpService(AiohttpServiceInterface):
    def __init__(self, timeout: float = 60):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.aiohttp_client = None

    @property
    def session(self) -> aiohttp.ClientSession:
        # The session is created lazily, it must be opened inside a running event loop
        if self.aiohttp_client is None or self.aiohttp_client.closed:
            self.aiohttp_client = aiohttp.ClientSession(timeout=self.timeout)
        return self.aiohttp_client

    async def post(self, url, payload, headers=None):
        async with self.session.post(url, json=payload, headers=headers) as response:
            response.raise_for_status()
            try:
                return await response.json()
            except aiohttp.client_exceptions.ContentTypeError:
                return {'text': await response.text()}

    async def close(self):
        if self.aiohttp_client is not None and not self.aiohttp_client.closed:
            await self.aiohttp_client.close()
        self.aiohttp_client = None
