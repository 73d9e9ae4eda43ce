# src/ado_review/providers/openai_provider.py
import logging
from openai import AsyncOpenAI
from .base import LLMProvider


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    DEFAULT_MODEL = "gpt-4"
    # Low randomness and short answers keep reviews terse and reproducible
    QUERY_CONFIG = {
        "temperature": 0.2,
        "max_tokens": 400,
        "top_p": 1,
        "frequency_penalty": 0,
        "presence_penalty": 0,
    }

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, base_url: str | None = None):
        self.model = model
        # Completion calls are never retried
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)

    async def review(self, prompt: str) -> str | None:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": prompt}],
                **self.QUERY_CONFIG,
            )
            text = response.choices[0].message.content
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            return None

        if not isinstance(text, str) or not text.strip():
            logger.debug("Completion returned no text, treating as no comment")
            return None

        logger.debug(f"Completion response length: {len(text)} chars")
        return text.strip()

    async def close(self) -> None:
        await self.client.close()
