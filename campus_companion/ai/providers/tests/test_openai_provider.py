"""Tests for the OpenAI-compatible completion provider."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest
from openai.types.chat import ChatCompletion

from campus_companion.ai.base import ChatMessage, MessageRole
from campus_companion.ai.openai.config import OpenAISettings
from campus_companion.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAITimeoutError,
)
from campus_companion.ai.providers.openai import OpenAIProvider

GATEWAY_URL = "https://gateway.test/v1/chat/completions"


def make_completion(content: str | None, with_choice: bool = True) -> ChatCompletion:
    choices = []
    if with_choice:
        choices.append(
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        )
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "google/gemini-2.5-flash",
            "choices": choices,
        }
    )


def make_status_error(error_class, status_code: int):
    request = httpx.Request("POST", GATEWAY_URL)
    response = httpx.Response(status_code, request=request)
    return error_class("gateway said no", response=response, body=None)


@pytest.fixture
def settings():
    return OpenAISettings(api_key="test-key", request_timeout=10.0)


@pytest.fixture
def client():
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock()
    return mock_client


@pytest.fixture
def provider(settings, client):
    return OpenAIProvider(settings=settings, client=client)


@pytest.fixture
def messages():
    return [
        ChatMessage(role=MessageRole.SYSTEM, content="You are RebelBot."),
        ChatMessage(role=MessageRole.USER, content="Where is the library?"),
    ]


@pytest.mark.asyncio
async def test_returns_first_choice_text(provider, client, messages):
    client.chat.completions.create.return_value = make_completion('{"message": "Hi"}')

    result = await provider.generate_chat_completion(messages)

    assert result.text == '{"message": "Hi"}'
    assert result.finish_reason == "stop"


@pytest.mark.asyncio
async def test_sends_configured_request(provider, client, messages):
    client.chat.completions.create.return_value = make_completion("ok")

    await provider.generate_chat_completion(messages)

    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "google/gemini-2.5-flash"
    assert kwargs["temperature"] == 0.7
    assert kwargs["max_tokens"] == 500
    assert kwargs["messages"] == [
        {"role": "system", "content": "You are RebelBot."},
        {"role": "user", "content": "Where is the library?"},
    ]


@pytest.mark.asyncio
async def test_missing_choice_gives_empty_text(provider, client, messages):
    client.chat.completions.create.return_value = make_completion(None, with_choice=False)

    result = await provider.generate_chat_completion(messages)

    assert result.text == ""
    assert result.finish_reason is None


@pytest.mark.asyncio
async def test_null_content_gives_empty_text(provider, client, messages):
    client.chat.completions.create.return_value = make_completion(None)

    result = await provider.generate_chat_completion(messages)

    assert result.text == ""


@pytest.mark.asyncio
async def test_server_error_maps_to_content_error(provider, client, messages):
    client.chat.completions.create.side_effect = make_status_error(
        openai.InternalServerError, 503
    )

    with pytest.raises(OpenAIContentGenerationError) as exc_info:
        await provider.generate_chat_completion(messages)

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_rate_limit_maps_to_content_error(provider, client, messages):
    client.chat.completions.create.side_effect = make_status_error(
        openai.RateLimitError, 429
    )

    with pytest.raises(OpenAIContentGenerationError) as exc_info:
        await provider.generate_chat_completion(messages)

    assert exc_info.value.status_code == 429


@pytest.mark.asyncio
async def test_rejected_key_maps_to_authentication_error(provider, client, messages):
    client.chat.completions.create.side_effect = make_status_error(
        openai.AuthenticationError, 401
    )

    with pytest.raises(OpenAIAuthenticationError):
        await provider.generate_chat_completion(messages)


@pytest.mark.asyncio
async def test_sdk_timeout_maps_to_timeout_error(provider, client, messages):
    client.chat.completions.create.side_effect = openai.APITimeoutError(
        request=httpx.Request("POST", GATEWAY_URL)
    )

    with pytest.raises(OpenAITimeoutError):
        await provider.generate_chat_completion(messages)


@pytest.mark.asyncio
async def test_slow_gateway_is_cut_off(client, messages):
    async def never_answers(**kwargs):
        await asyncio.sleep(5)

    client.chat.completions.create.side_effect = never_answers
    provider = OpenAIProvider(
        settings=OpenAISettings(api_key="test-key", request_timeout=0.05),
        client=client,
    )

    with pytest.raises(OpenAITimeoutError):
        await provider.generate_chat_completion(messages)


@pytest.mark.asyncio
async def test_connection_error_maps_to_content_error(provider, client, messages):
    client.chat.completions.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", GATEWAY_URL)
    )

    with pytest.raises(OpenAIContentGenerationError) as exc_info:
        await provider.generate_chat_completion(messages)

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_close_releases_client(provider, client):
    client.close = AsyncMock()

    await provider.close()
    await provider.close()

    client.close.assert_awaited_once()
