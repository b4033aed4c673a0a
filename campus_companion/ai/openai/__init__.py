"""OpenAI module for completion gateway settings and errors."""

from campus_companion.ai.openai.config import OpenAISettings, get_openai_settings
from campus_companion.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAIError,
    OpenAITimeoutError,
)

__all__ = [
    "OpenAISettings",
    "get_openai_settings",
    "OpenAIError",
    "OpenAIAuthenticationError",
    "OpenAIContentGenerationError",
    "OpenAITimeoutError",
]
