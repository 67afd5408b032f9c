# src/scale_sentry/providers/__init__.py
from .base import LLMProvider
from .openai_provider import OpenAIProvider

__all__ = ["LLMProvider", "OpenAIProvider"]
