"""Chat flow exceptions."""


class ChatFlowError(Exception):
    """Base exception for failures inside the answer assembly flow."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ParseFailureError(ChatFlowError):
    """Raised when completion text does not hold a usable structured answer."""

    pass


class ContextLookupError(ChatFlowError):
    """Raised in strict mode when a context lookup fails."""

    def __init__(
        self, section: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(f"Context lookup failed for {section}", original_error)
        self.section = section
