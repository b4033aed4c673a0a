"""
Auth provider factory.

This module provides a factory function to create the appropriate auth provider
based on configuration.
"""

from campus_companion.auth.config import get_auth_settings
from campus_companion.auth.service import AuthProvider, SupabaseAuthProvider


def create_auth_provider() -> AuthProvider:
    """
    Create an auth provider based on environment configuration.

    Returns:
        AuthProvider: The configured auth provider instance.

    Raises:
        ValueError: If an unknown auth provider is specified.
    """
    settings = get_auth_settings()

    if settings.is_supabase_provider():
        return SupabaseAuthProvider(settings)
    raise ValueError(f"Unknown auth provider: {settings.auth_provider}")


def get_auth_provider() -> AuthProvider:
    """
    Get a singleton instance of the auth provider.

    This function caches the provider instance to avoid recreating it
    on every request.

    Returns:
        AuthProvider: The cached auth provider instance.
    """
    if not hasattr(get_auth_provider, "_instance"):
        get_auth_provider._instance = create_auth_provider()
    return get_auth_provider._instance
