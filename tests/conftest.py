"""Shared test fixtures for Grand Line Monopoly tests."""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from grandline.data.models import Base
from grandline.data.repository import GameRepository
from grandline.data.session import make_session_factory
from grandline.services.identity import Identity
from grandline.settings import GameSettings
from tests.fakes import RecordingScheduler, ScriptedRandom


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(session):
    return GameRepository(session)


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def settings():
    """Game settings independent of the environment."""
    return GameSettings(_env_file=None, ai_turn_delay_ms=1000, log_window=10, bankruptcy_enabled=True)


@pytest.fixture
def luffy():
    return Identity(user_id="user-luffy", display_name="Luffy")
