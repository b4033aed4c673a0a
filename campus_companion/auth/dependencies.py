"""
Authentication dependencies.

This module provides FastAPI dependencies that turn the Authorization header
into verified caller claims.
"""

from fastapi import Depends, Request

from campus_companion.auth.constants import BEARER_PREFIX, AuthErrorMessage
from campus_companion.auth.provider_factory import get_auth_provider
from campus_companion.auth.schemas import Claims
from campus_companion.auth.service import AuthProvider
from campus_companion.exceptions import UnauthorizedError


async def get_auth_provider_dependency() -> AuthProvider:
    """Dependency to get the configured auth provider."""
    return get_auth_provider()


def get_bearer_token(request: Request) -> str:
    """
    Extract the bearer token from the Authorization header.

    Args:
        request: The HTTP request

    Returns:
        str: The raw token

    Raises:
        UnauthorizedError: If no bearer token is present
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise UnauthorizedError(AuthErrorMessage.AUTHENTICATION_REQUIRED.value)

    token = auth_header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise UnauthorizedError(AuthErrorMessage.AUTHENTICATION_REQUIRED.value)
    return token


async def get_current_claims(
    token: str = Depends(get_bearer_token),
    auth_provider: AuthProvider = Depends(get_auth_provider_dependency),
) -> Claims:
    """
    Verify the caller's token and return their claims.

    Args:
        token: The bearer token from the request
        auth_provider: The configured auth provider

    Returns:
        Claims: The verified caller claims

    Raises:
        UnauthorizedError: If the identity provider rejects the token
    """
    claims = await auth_provider.verify_token(token)
    if claims is None:
        raise UnauthorizedError(AuthErrorMessage.INVALID_AUTHENTICATION.value)
    return claims
