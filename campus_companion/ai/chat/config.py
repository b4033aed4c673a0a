"""Chat feature configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from campus_companion.ai.chat.constants import ResponderType
from campus_companion.utils.logger import logger


class ChatSettings(BaseSettings):
    """Configuration for the chat answer flow using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="CHAT_"
    )

    responder: ResponderType = Field(
        default=ResponderType.AI,
        description="Which responder answers chat messages (ai or keyword)",
    )
    assistant_name: str = Field(default="RebelBot", description="Assistant persona name")
    campus_name: str = Field(default="UNLV", description="Campus the assistant serves")

    message_max_length: int = Field(
        default=2000, gt=0, description="Maximum accepted message length"
    )
    resource_limit: int = Field(
        default=15, gt=0, description="Resources included in the context"
    )
    event_limit: int = Field(
        default=10, gt=0, description="Upcoming events included in the context"
    )
    club_limit: int = Field(default=15, gt=0, description="Clubs included in the context")
    max_suggested_links: int = Field(
        default=3, gt=0, description="Maximum links returned with an answer"
    )

    verify_suggested_links: bool = Field(
        default=True,
        description="Drop suggested links whose id was not part of the request context",
    )
    strict_context: bool = Field(
        default=False,
        description="Fail the request when any context lookup fails",
    )


_chat_settings: ChatSettings | None = None


def get_chat_settings() -> ChatSettings:
    """
    Get the global chat settings instance.

    Returns:
        ChatSettings: The global settings instance
    """
    global _chat_settings
    if _chat_settings is None:
        _chat_settings = ChatSettings()
        logger.info(
            "ChatSettings loaded",
            responder=_chat_settings.responder.value,
            verify_suggested_links=_chat_settings.verify_suggested_links,
        )
    return _chat_settings


def set_chat_settings(settings: ChatSettings) -> None:
    """
    Set the global chat settings instance.

    Args:
        settings: The settings to set
    """
    global _chat_settings
    _chat_settings = settings
