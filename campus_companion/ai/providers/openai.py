"""OpenAI-compatible chat completions provider."""

import asyncio

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from campus_companion.ai.base import AIProvider, ChatMessage, ContentGenerationResult
from campus_companion.ai.openai.config import OpenAISettings, get_openai_settings
from campus_companion.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAIError,
    OpenAITimeoutError,
)
from campus_companion.utils.logger import logger


class OpenAIProvider(AIProvider):
    """Provider for any OpenAI-compatible chat completions endpoint.

    Talks to the configured gateway with the official SDK. Retries are turned
    off: one failed round-trip ends the request.
    """

    def __init__(
        self,
        settings: OpenAISettings | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize the provider.

        Args:
            settings: Completion settings (defaults to the cached global settings)
            client: Pre-built SDK client, mainly for tests
        """
        self.settings = settings or get_openai_settings()
        self._client: AsyncOpenAI | None = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            try:
                timeout = httpx.Timeout(
                    timeout=self.settings.request_timeout,
                    connect=5.0,
                )
                self._client = AsyncOpenAI(
                    api_key=self.settings.api_key,
                    base_url=self.settings.base_url,
                    timeout=timeout,
                    max_retries=0,
                )
                logger.info(
                    "[OPENAI] Client initialized",
                    base_url=self.settings.base_url,
                    timeout_seconds=self.settings.request_timeout,
                )
            except Exception as e:
                logger.error("[OPENAI] Failed to initialize client", error=str(e))
                raise OpenAIAuthenticationError(
                    f"Failed to initialize OpenAI client: {e}", e
                ) from e
        return self._client

    async def generate_chat_completion(
        self,
        messages: list[ChatMessage],
        **kwargs,
    ) -> ContentGenerationResult:
        """Generate the next assistant message.

        Args:
            messages: System and user messages, in order
            **kwargs: Additional options:
                - model: Model name (default from settings)
                - temperature: Sampling temperature (default from settings)
                - max_tokens: Output token cap (default from settings)

        Returns:
            ContentGenerationResult: Text of the first choice ("" when absent)

        Raises:
            OpenAITimeoutError: If no answer arrives within the request timeout
            OpenAIAuthenticationError: If the gateway rejects the API key
            OpenAIContentGenerationError: For any other non-success response
        """
        client = self._get_client()
        model = kwargs.get("model") or self.settings.model_name
        temperature = kwargs.get("temperature", self.settings.temperature)
        max_tokens = kwargs.get("max_tokens", self.settings.max_tokens)

        logger.info(
            "[OPENAI] Requesting chat completion",
            model=model,
            message_count=len(messages),
        )

        try:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": message.role.value, "content": message.content}
                        for message in messages
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                ),
                timeout=self.settings.request_timeout,
            )
        except (APITimeoutError, asyncio.TimeoutError) as e:
            logger.error(
                "[OPENAI] Chat completion timed out",
                timeout_seconds=self.settings.request_timeout,
            )
            raise OpenAITimeoutError(
                f"Chat completion timed out after {self.settings.request_timeout}s", e
            ) from e
        except APIStatusError as e:
            logger.error(
                "[OPENAI] Chat completion failed",
                status_code=e.status_code,
                error=str(e),
            )
            if e.status_code in (401, 403):
                raise OpenAIAuthenticationError(
                    f"Gateway rejected credentials: {e.status_code}", e
                ) from e
            raise OpenAIContentGenerationError(
                f"AI gateway error: {e.status_code}", e, status_code=e.status_code
            ) from e
        except APIConnectionError as e:
            logger.error("[OPENAI] Could not reach gateway", error=str(e))
            raise OpenAIContentGenerationError(f"AI gateway unreachable: {e}", e) from e
        except OpenAIError:
            raise
        except Exception as e:
            logger.error("[OPENAI] Unexpected completion failure", error=str(e))
            raise OpenAIContentGenerationError(f"Chat completion failed: {e}", e) from e

        choice = response.choices[0] if response.choices else None
        text = (choice.message.content if choice and choice.message else None) or ""

        result = ContentGenerationResult(
            text=text,
            usage=response.usage.model_dump() if response.usage else None,
            finish_reason=choice.finish_reason if choice else None,
        )
        logger.info(
            "[OPENAI] Chat completion received",
            model=model,
            finish_reason=result.finish_reason,
            text_length=len(result.text),
        )
        return result

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
