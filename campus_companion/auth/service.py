"""
Supabase authentication provider.

This module implements the AuthProvider interface by asking the Supabase
Auth service who owns a bearer token.
"""

from abc import ABC, abstractmethod

import httpx

from campus_companion.auth.config import AuthSettings, get_auth_settings
from campus_companion.auth.constants import SupabaseEndpoints
from campus_companion.auth.schemas import Claims
from campus_companion.utils.logger import logger


class AuthProvider(ABC):
    """Abstract interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, access_token: str) -> Claims | None:
        """Verify an access token and return its claims, or None if rejected."""
        pass


class SupabaseAuthProvider(AuthProvider):
    """Supabase Auth provider implementation."""

    def __init__(
        self,
        settings: AuthSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Supabase auth provider.

        Args:
            settings: Auth settings (defaults to the global settings)
            transport: Optional httpx transport, used by tests to stub the service
        """
        self.settings = settings or get_auth_settings()
        self._transport = transport

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.supabase_url.rstrip("/"),
            headers={"apikey": self.settings.supabase_anon_key},
            timeout=self.settings.auth_request_timeout,
            transport=self._transport,
        )

    async def verify_token(self, access_token: str) -> Claims | None:
        """
        Verify a token against the Supabase user endpoint.

        Args:
            access_token: The caller's JWT access token

        Returns:
            Claims | None: The caller's claims, or None if the token was rejected
        """
        try:
            async with self._build_client() as client:
                response = await client.get(
                    SupabaseEndpoints.USER_ENDPOINT.value,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            logger.error(
                "[AUTH] Token verification request failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if response.status_code != 200:
            logger.info(
                "[AUTH] Token rejected by identity provider",
                status_code=response.status_code,
            )
            return None

        try:
            user_info = response.json()
        except ValueError:
            logger.error("[AUTH] Identity provider returned a non-JSON body")
            return None

        user_id = user_info.get("id") if isinstance(user_info, dict) else None
        if not user_id:
            logger.info("[AUTH] Identity provider response had no subject")
            return None

        return Claims(
            sub=str(user_id),
            email=user_info.get("email"),
            role=user_info.get("role"),
        )
