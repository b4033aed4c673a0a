"""
Keyword responder.

Answers common questions from fixed rules and direct lookups, without a
completion provider. Rules are checked in order; the first whose keywords
appear in the message wins.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_companion.ai.chat.base import ChatResponder
from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.constants import KEYWORD_APOLOGY_MESSAGE, ItemKind
from campus_companion.ai.chat.links import build_item_url
from campus_companion.ai.chat.schemas import ChatResponse, SuggestedLink
from campus_companion.db.campus import CampusRepository
from campus_companion.utils.logger import logger

LinkLookup = Callable[[CampusRepository], Awaitable[list[SuggestedLink]]]


@dataclass(frozen=True)
class KeywordRule:
    name: str
    keywords: tuple[str, ...]
    message: str
    lookup: LinkLookup

    def matches(self, query: str) -> bool:
        return any(keyword in query for keyword in self.keywords)


async def _advising_links(repo: CampusRepository) -> list[SuggestedLink]:
    resources = await repo.find_resources_by_title("advising", limit=1)
    return [
        SuggestedLink(title=r.title, url=build_item_url(ItemKind.RESOURCE.value, r.id))
        for r in resources
    ]


def _tagged_resource_links(tags: list[str], limit: int) -> LinkLookup:
    async def lookup(repo: CampusRepository) -> list[SuggestedLink]:
        resources = await repo.find_resources_by_tags(tags, limit=limit)
        return [
            SuggestedLink(title=r.title, url=build_item_url(ItemKind.RESOURCE.value, r.id))
            for r in resources
        ]

    return lookup


async def _event_links(repo: CampusRepository) -> list[SuggestedLink]:
    events = await repo.list_upcoming_events(limit=3)
    return [
        SuggestedLink(title=e.title, url=build_item_url(ItemKind.EVENT.value, e.id))
        for e in events
    ]


async def _club_links(repo: CampusRepository) -> list[SuggestedLink]:
    clubs = await repo.list_clubs(limit=3)
    return [
        SuggestedLink(title=c.name, url=build_item_url(ItemKind.CLUB.value, c.id))
        for c in clubs
    ]


def build_rules(campus_name: str) -> list[KeywordRule]:
    """Keyword rules in priority order."""
    return [
        KeywordRule(
            name="advising",
            keywords=("advising", "advisor", "class", "schedule"),
            message=(
                "I can help you find the right office for academic guidance! "
                "For specific class planning and degree requirements, I recommend "
                "confirming with an academic advisor directly."
            ),
            lookup=_advising_links,
        ),
        KeywordRule(
            name="wellbeing",
            keywords=("mental health", "counseling", "stress"),
            message=(
                f"Your mental health matters! {campus_name} has great resources "
                "to support your wellbeing."
            ),
            lookup=_tagged_resource_links(["mental health", "wellness", "counseling"], 2),
        ),
        KeywordRule(
            name="career",
            keywords=("career", "job", "internship"),
            message=(
                "Looking to launch your career? Check out these resources for resume "
                "help, interview prep, and job opportunities!"
            ),
            lookup=_tagged_resource_links(["career", "jobs", "internship"], 2),
        ),
        KeywordRule(
            name="events",
            keywords=("event", "happening"),
            message=f"Here are some upcoming events at {campus_name}!",
            lookup=_event_links,
        ),
        KeywordRule(
            name="clubs",
            keywords=("club", "organization", "join"),
            message="Looking to get involved? Here are some clubs you might like!",
            lookup=_club_links,
        ),
    ]


class KeywordResponder(ChatResponder):
    """Rule-based responder backed by direct database lookups."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: ChatSettings,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self.rules = build_rules(settings.campus_name)

    def help_message(self) -> str:
        return (
            f"I can help you find resources, events, and clubs at {self.settings.campus_name}! "
            "Try asking about mental health services, career help, upcoming events, "
            "or student organizations."
        )

    async def answer(self, message: str, user_id: str | None = None) -> ChatResponse:
        """Answer a message from the first matching rule.

        Lookup failures are answered with an apology and no links.
        """
        query = message.lower()
        rule = next((rule for rule in self.rules if rule.matches(query)), None)
        if rule is None:
            return ChatResponse(message=self.help_message(), suggested_links=[])

        try:
            async with self.session_factory() as session:
                links = await rule.lookup(CampusRepository(session))
        except Exception as e:
            logger.error(
                "Keyword lookup failed",
                rule=rule.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ChatResponse(message=KEYWORD_APOLOGY_MESSAGE, suggested_links=[])

        logger.info("Keyword rule matched", rule=rule.name, link_count=len(links))
        return ChatResponse(
            message=rule.message,
            suggested_links=links[: self.settings.max_suggested_links],
        )
