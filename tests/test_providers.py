import pytest
from unittest.mock import AsyncMock, MagicMock
from scale_sentry.models.report import ChatMessage
from scale_sentry.providers.base import LLMProvider
from scale_sentry.providers.openai_provider import OpenAIProvider


def _mock_completion(text: str | None):
    """Create a mock ChatCompletion response."""
    choice = MagicMock()
    choice.message.content = text
    completion = MagicMock()
    completion.choices = [choice]
    return completion


MESSAGES = [
    ChatMessage(role="system", content="You are Scale Sentry"),
    ChatMessage(role="user", content="Analyse this diff"),
]


def test_provider_is_abstract():
    with pytest.raises(TypeError):
        LLMProvider()


@pytest.mark.asyncio
async def test_openai_provider_returns_text():
    provider = OpenAIProvider(api_key="test-key", model="gpt-4o-mini")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(
        return_value=_mock_completion("  ## Summary\n- No risks  \n")
    )

    result = await provider.complete(MESSAGES, max_tokens=900, temperature=0.2)

    assert result == "## Summary\n- No risks"
    call_kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt-4o-mini"
    assert call_kwargs["max_tokens"] == 900
    assert call_kwargs["temperature"] == 0.2
    assert call_kwargs["messages"] == [
        {"role": "system", "content": "You are Scale Sentry"},
        {"role": "user", "content": "Analyse this diff"},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_openai_provider_rejects_empty_content(text):
    provider = OpenAIProvider(api_key="test-key")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(return_value=_mock_completion(text))

    with pytest.raises(ValueError):
        await provider.complete(MESSAGES, max_tokens=100, temperature=0.0)
