"""AI provider implementations."""

from campus_companion.ai.providers.factory import AIProviderType, create_ai_provider

__all__ = [
    "AIProviderType",
    "create_ai_provider",
]
