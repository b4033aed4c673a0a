"""
FastAPI dependencies for the chat endpoint.

Collaborators are built here and handed to the responder explicitly, so
tests can override any of them. The route receives a responder factory
rather than a responder, so construction failures happen after the request
body has been validated.
"""

from collections.abc import Callable

from fastapi import Depends

from campus_companion.ai.base import AIProvider
from campus_companion.ai.chat.base import ChatResponder
from campus_companion.ai.chat.config import ChatSettings, get_chat_settings
from campus_companion.ai.chat.constants import ResponderType
from campus_companion.ai.chat.context import ContextBuilder
from campus_companion.ai.chat.keywords import KeywordResponder
from campus_companion.ai.chat.service import CampusChatService
from campus_companion.ai.providers.factory import create_ai_provider
from campus_companion.db.dependencies import get_session_factory
from campus_companion.utils.logger import logger

ResponderFactory = Callable[[], ChatResponder]

_ai_provider: AIProvider | None = None


def get_chat_settings_dependency() -> ChatSettings:
    """FastAPI dependency for chat settings."""
    return get_chat_settings()


def get_ai_provider() -> AIProvider:
    """
    Get the shared completion provider.

    The provider owns an HTTP connection pool, so one instance is reused.

    Returns:
        AIProvider: The configured provider
    """
    global _ai_provider
    if _ai_provider is None:
        _ai_provider = create_ai_provider()
    return _ai_provider


async def close_ai_provider() -> None:
    """Close the shared completion provider, if one was created."""
    global _ai_provider
    if _ai_provider is None:
        return
    logger.info("Closing completion provider")
    await _ai_provider.close()
    _ai_provider = None


def build_chat_responder(settings: ChatSettings) -> ChatResponder:
    """
    Build the configured chat responder.

    Args:
        settings: Chat settings

    Returns:
        ChatResponder: Keyword responder or the AI chat service

    Raises:
        ValidationError: If database or completion settings are missing
    """
    session_factory = get_session_factory()
    if settings.responder == ResponderType.KEYWORD:
        return KeywordResponder(session_factory, settings)

    return CampusChatService(
        provider=get_ai_provider(),
        context_builder=ContextBuilder(session_factory, settings),
        settings=settings,
    )


def get_chat_responder_factory(
    settings: ChatSettings = Depends(get_chat_settings_dependency),
) -> ResponderFactory:
    """FastAPI dependency returning a callable that builds the chat responder."""
    return lambda: build_chat_responder(settings)
