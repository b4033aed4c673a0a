"""Base classes for AI provider abstraction."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel


class MessageRole(str, Enum):
    """Roles accepted by chat completion endpoints."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a chat completion request."""

    role: MessageRole
    content: str


class ContentGenerationResult(BaseModel):
    """Result from content generation."""

    text: str
    usage: dict[str, Any] | None = None
    finish_reason: str | None = None


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Keeps the chat flow independent of the completion vendor and lets tests
    swap in a stub.
    """

    @abstractmethod
    async def generate_chat_completion(
        self,
        messages: list[ChatMessage],
        **kwargs,
    ) -> ContentGenerationResult:
        """Generate the next assistant message for a conversation.

        Args:
            messages: System and user messages, in order
            **kwargs: Provider-specific options (model, temperature, max_tokens)

        Returns:
            ContentGenerationResult: Text of the first candidate with metadata
        """
        pass

    async def close(self) -> None:
        """Release any connections held by the provider."""
        pass
