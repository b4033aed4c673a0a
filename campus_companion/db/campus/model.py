"""
SQLAlchemy models for campus content.

These tables are owned by the admin console; this service only reads them.
Resources are read through the `resources_public` view, which hides the
contact columns that row-level security keeps away from students.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from campus_companion.db.database import Base


class Resource(Base):
    """A campus resource (office, service, program)."""

    __tablename__ = "resources_public"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(Text), nullable=True)

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, title={self.title})>"


class Event(Base):
    """A scheduled campus event."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(Text), nullable=True)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, start_time={self.start_time})>"


class Club(Base):
    """A student club or organization."""

    __tablename__ = "clubs"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(Text), nullable=True)

    def __repr__(self) -> str:
        return f"<Club(id={self.id}, name={self.name})>"
