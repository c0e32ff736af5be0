"""
TechNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── note_store / user_store: In-memory fakes for NoteService unit tests
    ├── note_service: NoteService wired to the fakes
    ├── db_engine: Tables created on the temporary SQLite database
    ├── db_session: Real AsyncSession on that database
    ├── create_user: Inserts a user row and returns it
    └── test_client: HTTPX AsyncClient talking to the FastAPI app
"""

import os
import tempfile

# Override settings BEFORE any technotes import: the engine is built from
# settings when technotes.database is first imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="technotes_test_"), "test.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from technotes.models.note import Note, title_collation_key
from technotes.models.user import User
from technotes.services.note_service import NoteService


# ══════════════════════════════════════════════════════════════════════════
# In-memory stores
# ══════════════════════════════════════════════════════════════════════════

class FakeNoteStore:
    """NoteStore stand-in keeping Note objects in an insertion-ordered dict."""

    def __init__(self):
        self.rows: Dict[UUID, Note] = {}
        self.create_returns_none = False
        self.saves = 0

    def add(self, user_id: UUID, title: str, text: str = "body", completed: bool = False) -> Note:
        now = datetime.now(timezone.utc)
        note = Note(
            id=uuid4(),
            user_id=user_id,
            title=title,
            text=text,
            completed=completed,
            created_at=now,
            updated_at=now,
        )
        self.rows[note.id] = note
        return note

    async def find_all(self) -> List[Note]:
        return list(self.rows.values())

    async def find_by_id(self, note_id: UUID) -> Optional[Note]:
        return self.rows.get(note_id)

    async def find_by_title(self, title: str) -> Optional[Note]:
        key = title_collation_key(title)
        return next((n for n in self.rows.values() if n.title_key == key), None)

    async def create(self, user_id: UUID, title: str, text: str) -> Optional[Note]:
        if self.create_returns_none:
            return None
        return self.add(user_id=user_id, title=title, text=text)

    async def save(self, note: Note) -> Note:
        self.saves += 1
        note.updated_at = datetime.now(timezone.utc)
        return note

    async def delete(self, note: Note) -> None:
        del self.rows[note.id]


class FakeUserStore:
    def __init__(self):
        self.users: Dict[UUID, User] = {}
        self.lookups = 0

    def add(self, username: str) -> User:
        user = User(id=uuid4(), username=username, active=True)
        self.users[user.id] = user
        return user

    async def find_by_ids(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        self.lookups += 1
        return {uid: self.users[uid] for uid in set(user_ids) if uid in self.users}


@pytest.fixture
def note_store():
    return FakeNoteStore()


@pytest.fixture
def user_store():
    return FakeUserStore()


@pytest.fixture
def note_service(note_store, user_store):
    return NoteService(notes=note_store, users=user_store)


# ══════════════════════════════════════════════════════════════════════════
# Mocked session
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await NoteStore(mock_db_session).find_all()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real database (temporary SQLite file)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Creates all tables before the test and drops them afterwards.

    The engine is disposed at teardown so no pooled connection outlives
    the test's event loop.
    """
    from technotes.database import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    from technotes.database import async_session_factory

    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def create_user(db_engine):
    """Factory fixture: `await create_user("alice")` commits and returns a User."""
    from technotes.database import async_session_factory

    async def _create(username: str) -> User:
        async with async_session_factory() as session:
            user = User(username=username)
            session.add(user)
            await session.commit()
            return user

    return _create


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from technotes.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
