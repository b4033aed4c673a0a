"""OpenAI-compatible completion API configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for the OpenAI-compatible completion gateway.

    Attributes:
        api_key: Gateway API key for authentication
        base_url: Base URL of the chat completions API
        model_name: Model to request from the gateway
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Max output tokens per completion
        request_timeout: Upper bound on one completion round-trip, in seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        description="Completion gateway API key",
    )
    base_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="OpenAI-compatible API base URL",
    )
    model_name: str = Field(
        default="google/gemini-2.5-flash",
        description="Model to use for chat answers",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for chat answers",
    )
    max_tokens: int = Field(
        default=500,
        gt=0,
        description="Max output tokens for chat answers",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )


@lru_cache
def get_openai_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance.

    Returns:
        OpenAISettings: Cached settings instance
    """
    return OpenAISettings()
