# src/scale_sentry/providers/base.py
from abc import ABC, abstractmethod
from scale_sentry.models.report import ChatMessage


class LLMProvider(ABC):
    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Send chat messages to the model and return its text response."""
        pass
