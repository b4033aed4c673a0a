"""
Campus chat service.

Answers a student's question from a snapshot of campus content: build the
context, ask the completion provider, read its structured answer, and turn
the suggestions into app links.
"""

from campus_companion.ai.base import AIProvider, ChatMessage, MessageRole
from campus_companion.ai.chat.base import ChatResponder
from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.context import ContextBuilder, render_system_prompt
from campus_companion.ai.chat.extractor import extract_answer
from campus_companion.ai.chat.links import map_suggested_links
from campus_companion.ai.chat.schemas import ChatResponse
from campus_companion.utils.logger import logger


class CampusChatService(ChatResponder):
    """AI-assisted answers grounded in current campus content."""

    def __init__(
        self,
        provider: AIProvider,
        context_builder: ContextBuilder,
        settings: ChatSettings,
    ):
        """
        Initialize the chat service.

        Args:
            provider: Completion provider
            context_builder: Fetches the campus context for each request
            settings: Chat settings
        """
        self.provider = provider
        self.context_builder = context_builder
        self.settings = settings

    async def answer(self, message: str, user_id: str | None = None) -> ChatResponse:
        """
        Answer one message.

        Args:
            message: The trimmed student message
            user_id: Caller's user id, for logging

        Returns:
            ChatResponse: The answer with at most max_suggested_links links

        Raises:
            OpenAIError: If the completion call fails or times out
            ContextLookupError: In strict mode, if a context lookup fails
        """
        context = await self.context_builder.build()
        system_prompt = render_system_prompt(context, self.settings)

        result = await self.provider.generate_chat_completion(
            [
                ChatMessage(role=MessageRole.SYSTEM, content=system_prompt),
                ChatMessage(role=MessageRole.USER, content=message),
            ]
        )

        extracted = extract_answer(result.text)
        known_items = context.known_items() if self.settings.verify_suggested_links else None
        links = map_suggested_links(
            extracted.suggestions,
            limit=self.settings.max_suggested_links,
            known_items=known_items,
        )

        logger.info(
            "Chat answer assembled",
            user_id=user_id,
            structured=extracted.structured,
            suggestion_count=len(extracted.suggestions),
            link_count=len(links),
        )
        return ChatResponse(message=extracted.message, suggested_links=links)
