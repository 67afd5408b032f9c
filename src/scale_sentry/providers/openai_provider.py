# src/scale_sentry/providers/openai_provider.py
import logging
from openai import AsyncOpenAI
from .base import LLMProvider
from scale_sentry.models.report import ChatMessage


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "gpt-4o", base_url: str | None = None):
        self.api_key = api_key
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(
        self,
        messages: list[ChatMessage],
        max_tokens: int,
        temperature: float,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[message.model_dump() for message in messages],
            max_tokens=max_tokens,
            temperature=temperature,
        )

        text = response.choices[0].message.content or ""
        logger.info(f"OpenAI response length: {len(text)} chars")

        if not text.strip():
            raise ValueError("OpenAI response did not include textual content")
        return text.strip()
