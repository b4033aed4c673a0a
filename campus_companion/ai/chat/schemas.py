"""Request and response models for the chat endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campus_companion.ai.chat.constants import ChatErrorMessage, ItemKind
from campus_companion.exceptions import BadRequestError


class ChatRequest(BaseModel):
    """A validated chat request."""

    message: str

    @classmethod
    def from_payload(cls, payload: Any, max_length: int) -> "ChatRequest":
        """Validate a decoded request body.

        Args:
            payload: The decoded JSON body
            max_length: Maximum accepted message length, before trimming

        Returns:
            ChatRequest: The request with the message as sent

        Raises:
            BadRequestError: If the message is missing, not a string, blank or too long
        """
        message = payload.get("message") if isinstance(payload, dict) else None
        if not isinstance(message, str) or not message.strip():
            raise BadRequestError(ChatErrorMessage.MESSAGE_REQUIRED.value)
        if len(message) > max_length:
            raise BadRequestError(
                ChatErrorMessage.MESSAGE_TOO_LONG.value.format(max_length=max_length)
            )
        return cls(message=message)

    @property
    def trimmed_message(self) -> str:
        return self.message.strip()


class SuggestedLink(BaseModel):
    """A navigable link into the companion app."""

    title: str
    url: str


class ChatResponse(BaseModel):
    """Answer returned to the student."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    suggested_links: list[SuggestedLink] = Field(
        default_factory=list, alias="suggestedLinks"
    )


class RawSuggestion(BaseModel):
    """A suggestion as written by the completion model."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = ""
    type: str = ItemKind.RESOURCE.value
    id: str

    @field_validator("title", "type", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class RawAnswer(BaseModel):
    """The structured answer the completion model is asked to produce."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    suggested_links: list[Any] = Field(default_factory=list, alias="suggestedLinks")

    @field_validator("suggested_links", mode="before")
    @classmethod
    def _null_links(cls, value: Any) -> Any:
        return [] if value is None else value


class ExtractedAnswer(BaseModel):
    """Result of reading completion text: a message plus validated suggestions."""

    message: str
    suggestions: list[RawSuggestion] = Field(default_factory=list)
    structured: bool = Field(
        default=False, description="False when the raw text was used as the message"
    )
