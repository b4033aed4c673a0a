from enum import Enum


class SupabaseEndpoints(str, Enum):
    """Supabase Auth REST endpoints."""

    USER_ENDPOINT = "/auth/v1/user"


class AuthErrorMessage(str, Enum):
    """Error messages returned to callers on authentication failures."""

    AUTHENTICATION_REQUIRED = "Authentication required"
    INVALID_AUTHENTICATION = "Invalid authentication"


BEARER_PREFIX = "Bearer "
