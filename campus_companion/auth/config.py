"""
Configuration management for the auth package.

This module handles environment variable configuration for verifying
caller tokens against the Supabase Auth service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from campus_companion.utils.logger import logger


class AuthSettings(BaseSettings):
    """Configuration for the auth system using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )

    auth_provider: str = Field(
        default="supabase", description="Authentication provider to use"
    )

    supabase_url: str = Field(description="Supabase project URL")
    supabase_anon_key: str = Field(
        description="Supabase anon (public) API key sent as the apikey header"
    )
    auth_request_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Timeout in seconds for token verification requests",
    )

    def is_supabase_provider(self) -> bool:
        """Check if using Supabase provider."""
        return self.auth_provider.lower() == "supabase"


# Global settings instance
_auth_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    """
    Get the global auth settings instance.

    Returns:
        AuthSettings: The global settings instance
    """
    global _auth_settings
    if _auth_settings is None:
        _auth_settings = AuthSettings()
        logger.info(
            "AuthSettings loaded",
            provider=_auth_settings.auth_provider,
            supabase_url=_auth_settings.supabase_url,
        )
    return _auth_settings


def set_auth_settings(settings: AuthSettings) -> None:
    """
    Set the global auth settings instance.

    Args:
        settings: The settings to set
    """
    global _auth_settings
    _auth_settings = settings
