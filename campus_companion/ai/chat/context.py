"""
Campus context for chat answers.

Fetches a snapshot of resources, upcoming events and clubs, and renders it
into the system prompt the completion model answers from.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.constants import NO_DESCRIPTION, NO_LOCATION, ItemKind
from campus_companion.ai.chat.exceptions import ContextLookupError
from campus_companion.db.campus import CampusRepository, Club, Event, Resource
from campus_companion.utils.logger import logger

T = TypeVar("T")


@dataclass
class CampusContext:
    """Records fetched for one chat request."""

    resources: list[Resource] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    clubs: list[Club] = field(default_factory=list)
    failed_sections: list[str] = field(default_factory=list)

    def known_items(self) -> set[tuple[str, str]]:
        """(kind, lower-cased id) pairs of every record in the context."""
        items = {(ItemKind.RESOURCE.value, str(r.id).lower()) for r in self.resources}
        items |= {(ItemKind.EVENT.value, str(e.id).lower()) for e in self.events}
        items |= {(ItemKind.CLUB.value, str(c.id).lower()) for c in self.clubs}
        return items


class ContextBuilder:
    """Runs the three context lookups concurrently, one session each."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: ChatSettings,
    ):
        self.session_factory = session_factory
        self.settings = settings

    async def _lookup(
        self,
        section: str,
        query: Callable[[CampusRepository], Awaitable[list[T]]],
    ) -> list[T]:
        try:
            async with self.session_factory() as session:
                return await query(CampusRepository(session))
        except Exception as e:
            if self.settings.strict_context:
                raise ContextLookupError(section, e) from e
            logger.warning(
                "Context lookup failed, continuing without section",
                section=section,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    async def build(self, now: datetime | None = None) -> CampusContext:
        """
        Fetch resources, upcoming events and clubs.

        A failed lookup leaves its section empty unless strict_context is set.

        Args:
            now: Reference time for "upcoming" (defaults to the current UTC time)

        Returns:
            CampusContext: The fetched records

        Raises:
            ContextLookupError: In strict mode, if any lookup fails
        """
        now = now or datetime.now(UTC)
        sections = ("resources", "events", "clubs")
        results = await asyncio.gather(
            self._lookup(
                "resources", lambda repo: repo.list_resources(self.settings.resource_limit)
            ),
            self._lookup(
                "events",
                lambda repo: repo.list_upcoming_events(self.settings.event_limit, now=now),
            ),
            self._lookup("clubs", lambda repo: repo.list_clubs(self.settings.club_limit)),
            return_exceptions=True,
        )

        context = CampusContext()
        for section, result in zip(sections, results):
            if isinstance(result, ContextLookupError):
                raise result
            if isinstance(result, BaseException):
                context.failed_sections.append(section)
                continue
            setattr(context, section, result)

        logger.info(
            "Built campus context",
            resources=len(context.resources),
            events=len(context.events),
            clubs=len(context.clubs),
            failed_sections=context.failed_sections,
        )
        return context


def format_event_date(start_time: datetime) -> str:
    """Short M/D/YYYY date for an event start."""
    return f"{start_time.month}/{start_time.day}/{start_time.year}"


def render_resource(resource: Resource) -> str:
    return (
        f"- {resource.title} ({resource.category}): "
        f"{resource.description or NO_DESCRIPTION} [ID: {resource.id}]"
    )


def render_event(event: Event) -> str:
    return (
        f"- {event.title} on {format_event_date(event.start_time)} "
        f"at {event.location or NO_LOCATION}: {event.description or ''} [ID: {event.id}]"
    )


def render_club(club: Club) -> str:
    return (
        f"- {club.name} ({club.category}): "
        f"{club.description or NO_DESCRIPTION} [ID: {club.id}]"
    )


SYSTEM_PROMPT_TEMPLATE = """You are {assistant_name}, a friendly and helpful AI assistant for {campus_name} students. You help students find campus resources, events, and clubs.

AVAILABLE RESOURCES:
{resources}

UPCOMING EVENTS:
{events}

STUDENT CLUBS:
{clubs}

RESPONSE GUIDELINES:
1. Be friendly, warm, and conversational. Use emojis sparingly.
2. When recommending resources/events/clubs, include their IDs so links can be generated.
3. Format your response as JSON with this structure:
   {{
     "message": "Your conversational response here",
     "suggestedLinks": [
       {{"title": "Resource Name", "type": "resource|event|club", "id": "uuid-here"}}
     ]
   }}
4. Limit suggested links to {max_links} most relevant items.
5. If the question is not about {campus_name} resources, politely redirect them to ask about campus services.
6. Keep responses concise but helpful."""


def render_system_prompt(context: CampusContext, settings: ChatSettings) -> str:
    """Render the context into the system instruction for the completion call."""
    return SYSTEM_PROMPT_TEMPLATE.format(
        assistant_name=settings.assistant_name,
        campus_name=settings.campus_name,
        resources="\n".join(render_resource(r) for r in context.resources),
        events="\n".join(render_event(e) for e in context.events),
        clubs="\n".join(render_club(c) for c in context.clubs),
        max_links=settings.max_suggested_links,
    )
