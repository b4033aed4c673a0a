"""
Repository for campus content reads.

Provides the read-only queries used to build chat context and keyword answers.
"""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_companion.db.campus.model import Club, Event, Resource


class CampusRepository:
    """Read-only repository over resources, events and clubs."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def list_resources(self, limit: int) -> list[Resource]:
        """
        List resources ordered by title.

        Args:
            limit: Maximum number of rows

        Returns:
            list[Resource]: Resource rows
        """
        stmt = select(Resource).order_by(Resource.title).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_upcoming_events(
        self, limit: int, now: datetime | None = None
    ) -> list[Event]:
        """
        List events starting at or after now, soonest first.

        Args:
            limit: Maximum number of rows
            now: Reference time (defaults to the current UTC time)

        Returns:
            list[Event]: Event rows
        """
        now = now or datetime.now(UTC)
        stmt = (
            select(Event)
            .where(Event.start_time >= now)
            .order_by(Event.start_time)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_clubs(self, limit: int) -> list[Club]:
        """
        List clubs ordered by name.

        Args:
            limit: Maximum number of rows

        Returns:
            list[Club]: Club rows
        """
        stmt = select(Club).order_by(Club.name).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_resources_by_title(self, fragment: str, limit: int) -> list[Resource]:
        """Resources whose title contains `fragment`, case-insensitively."""
        stmt = (
            select(Resource)
            .where(Resource.title.ilike(f"%{fragment}%"))
            .order_by(Resource.title)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_resources_by_tags(
        self, tags: list[str], limit: int
    ) -> list[Resource]:
        """Resources sharing at least one tag with `tags`."""
        stmt = (
            select(Resource)
            .where(Resource.tags.overlap(tags))
            .order_by(Resource.title)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
