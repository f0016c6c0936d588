import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.db.base import Base
from app.db.postgres import get_db
from app.feedback.event_publisher import get_event_publisher
from app.feedback import models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


class RecordingEventPublisher:
    """Stands in for FeedbackEventPublisher and keeps what it was given."""

    def __init__(self):
        self.published = []

    def publish_feedback_submitted(self, feedback):
        self.published.append(feedback)

    def shutdown(self, wait: bool = True):
        pass


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory SQLite database shared by every session of one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine):
    """Create a fresh database session for each test."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def event_publisher():
    return RecordingEventPublisher()


@pytest.fixture(scope="function")
async def client(db_session, event_publisher):
    """Create a test client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: event_publisher

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {
        "memberId": "m-1",
        "providerName": "Dr. X",
        "rating": 5,
        "comment": "Very thorough and kind.",
    }
