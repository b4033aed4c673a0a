"""Test doubles for the chat flow."""

from unittest.mock import AsyncMock

from sqlalchemy.ext.asyncio import AsyncSession

from campus_companion.ai.base import AIProvider, ContentGenerationResult


class FakeSessionFactory:
    """Stands in for async_sessionmaker: each call opens a mocked session."""

    def __init__(self):
        self.opened = 0

    def __call__(self):
        self.opened += 1
        return self

    async def __aenter__(self):
        return AsyncMock(spec=AsyncSession)

    async def __aexit__(self, *exc_info):
        return False


def make_repository(resources=(), events=(), clubs=(), fail=()):
    """Build a CampusRepository stand-in serving fixed rows.

    Sections named in `fail` raise when queried.
    """

    class FakeRepository:
        calls: list[tuple] = []

        def __init__(self, session):
            self.session = session

        def _check(self, section):
            if section in fail:
                raise RuntimeError(f"{section} query failed")

        async def list_resources(self, limit):
            self._check("resources")
            FakeRepository.calls.append(("list_resources", limit))
            return list(resources)[:limit]

        async def list_upcoming_events(self, limit, now=None):
            self._check("events")
            FakeRepository.calls.append(("list_upcoming_events", limit))
            return list(events)[:limit]

        async def list_clubs(self, limit):
            self._check("clubs")
            FakeRepository.calls.append(("list_clubs", limit))
            return list(clubs)[:limit]

        async def find_resources_by_title(self, fragment, limit):
            self._check("resources")
            FakeRepository.calls.append(("find_resources_by_title", fragment, limit))
            return [r for r in resources if fragment in r.title.lower()][:limit]

        async def find_resources_by_tags(self, tags, limit):
            self._check("resources")
            FakeRepository.calls.append(("find_resources_by_tags", tuple(tags), limit))
            return [r for r in resources if set(r.tags or []) & set(tags)][:limit]

    return FakeRepository


class StubProvider(AIProvider):
    """Completion provider that returns canned text or raises."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[list] = []

    async def generate_chat_completion(self, messages, **kwargs):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return ContentGenerationResult(text=self.text, finish_reason="stop")

