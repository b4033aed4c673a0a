"""Fixtures shared by the chat tests."""

from datetime import UTC, datetime

import pytest

from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.tests.helpers import FakeSessionFactory
from campus_companion.db.campus import Club, Event, Resource


@pytest.fixture
def chat_settings():
    return ChatSettings(
        responder="ai",
        assistant_name="RebelBot",
        campus_name="UNLV",
        verify_suggested_links=True,
        strict_context=False,
    )


@pytest.fixture
def session_factory():
    return FakeSessionFactory()


@pytest.fixture
def counseling_center():
    return Resource(
        id="abc-123",
        title="Counseling Center",
        description="Free confidential counseling for students",
        category="Health",
        tags=["mental health", "counseling"],
    )


@pytest.fixture
def career_services():
    return Resource(
        id="res-career",
        title="Career Services",
        description=None,
        category="Career",
        tags=["career", "jobs"],
    )


@pytest.fixture
def academic_advising():
    return Resource(
        id="res-advising",
        title="Academic Advising Center",
        description="Degree planning help",
        category="Academics",
        tags=["advising"],
    )


@pytest.fixture
def welcome_week():
    return Event(
        id="evt-1",
        title="Welcome Week Kickoff",
        description="Meet new friends",
        start_time=datetime(2026, 11, 3, 18, 0, tzinfo=UTC),
        location=None,
        tags=["social"],
    )


@pytest.fixture
def chess_club():
    return Club(
        id="club-1",
        name="Chess Club",
        description=None,
        category="Games",
        tags=["strategy"],
    )

