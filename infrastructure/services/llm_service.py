import asyncio
import logging
import aiohttp
from app.domain.errors import ExternalServiceError
from app.domain.services_interfaces.aiohttp_service import AiohttpServiceInterface
from app.domain.services_interfaces.text_generation_service import TextGenerationServiceInterface
from config.main_config import LLM_API_KEY, LLM_MAX_TOKENS, LLM_MODEL, LLM_TEMPERATURE, LLM_URL


logger = logging.getLogger('external_apis')


class LLMService(TextGenerationServiceInterface):
    """Client of an OpenAI-compatible chat completions endpoint, e.g. a local LM Studio server."""

    def __init__(self, aiohttp_service: AiohttpServiceInterface, url: str = LLM_URL, model: str = LLM_MODEL,
                 api_key: str = LLM_API_KEY, temperature: float = LLM_TEMPERATURE,
                 max_tokens: int = LLM_MAX_TOKENS):
        self.aiohttp_service = aiohttp_service
        self.url = url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.headers = {'Authorization': f'Bearer {api_key}'} if api_key else None

    async def generate(self, prompt: str, system_prompt: str = None) -> str:
        messages = []
        if system_prompt:
            messages.append({'role': 'system', 'content': system_prompt})
        messages.append({'role': 'user', 'content': prompt})
        payload = {
            'model': self.model,
            'messages': messages,
            'temperature': self.temperature,
            'max_tokens': self.max_tokens,
        }
        try:
            resp = await self.aiohttp_service.post(self.url, payload, headers=self.headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            # ValueError covers a body that is not valid JSON
            logger.warning(f"TEXT GENERATION REQUEST FAILED: {e!r}")
            raise ExternalServiceError(f"Text generation request failed: {e!r}")

        try:
            content = resp['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            logger.warning(f"UNEXPECTED TEXT GENERATION RESPONSE: {str(resp)[:200]}")
            raise ExternalServiceError("Text generation response has no content")
        if not isinstance(content, str) or not content.strip():
            raise ExternalServiceError("Text generation returned an empty answer")
        logger.info(f"GENERATED {len(content)} CHARACTERS WITH {self.model}")
        return content
