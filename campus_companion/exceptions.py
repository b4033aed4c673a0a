"""API-level exceptions rendered as JSON error bodies."""


class APIError(Exception):
    """Base exception for errors surfaced to API callers.

    The message is shown to the caller verbatim, so it must never carry
    internal or upstream detail.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(APIError):
    """Raised when the caller's bearer token is missing or invalid."""

    status_code = 401


class BadRequestError(APIError):
    """Raised when the request body is malformed or oversized."""

    status_code = 400
