"""Common interface for chat responders."""

from abc import ABC, abstractmethod

from campus_companion.ai.chat.schemas import ChatResponse


class ChatResponder(ABC):
    """Answers one validated student message."""

    @abstractmethod
    async def answer(self, message: str, user_id: str | None = None) -> ChatResponse:
        """Answer a trimmed, validated message."""
        pass
