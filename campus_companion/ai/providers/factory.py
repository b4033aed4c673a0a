"""Factory for creating AI provider instances."""

import os
from enum import Enum

from campus_companion.ai.base import AIProvider
from campus_companion.utils.logger import logger


class AIProviderType(str, Enum):
    """Available AI provider types."""

    OPENAI = "openai"


def create_ai_provider(provider_type: AIProviderType | str | None = None) -> AIProvider:
    """Create an AI provider instance.

    Args:
        provider_type: Type of provider to create. If None, uses AI_PROVIDER env var
                      or defaults to OpenAI.

    Returns:
        AIProvider: Instance of the specified provider

    Raises:
        ValueError: If provider type is not supported
    """
    if provider_type is None:
        provider_type = os.getenv("AI_PROVIDER", AIProviderType.OPENAI.value)

    if isinstance(provider_type, str):
        provider_type = AIProviderType(provider_type.lower())

    logger.info(f"Creating AI provider: {provider_type.value}")

    if provider_type == AIProviderType.OPENAI:
        from campus_companion.ai.providers.openai import OpenAIProvider

        return OpenAIProvider()
    raise ValueError(f"Unsupported AI provider: {provider_type}")
