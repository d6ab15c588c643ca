"""
Noteful API: Test Configuration
================================

Shared fixtures for the suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database:        fresh SQLite file database with all tables
    ├── test_client:     httpx AsyncClient bound to an app using `database`
    ├── make_user / make_folder / make_tag / make_note: row factories
    └── auth_headers:    Authorization header for a user
"""

import os

# Must run before anything imports noteful.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./noteful_test.db"
os.environ["JWT_SECRET"] = "test-secret-that-is-long-enough-for-hs256-signing"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt's minimum; keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "1000"

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from noteful.database import Database
from noteful.models import Folder, Note, Tag, User
from noteful.schemas.user import AuthUser
from noteful.services.auth_service import auth_service


@pytest.fixture
def mock_db_session():
    """
    AsyncSession stand-in for unit tests that should not touch a database.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
    """
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock())
    session.flush = AsyncMock()
    session.add = MagicMock()
    session.get_bind = MagicMock()
    session.get_bind.return_value.dialect.name = "sqlite"
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX client talking to a fresh app over ASGI (no server, no lifespan).

    Usage:
        response = await test_client.get("/health")
    """
    from noteful.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(database):
    async def _make(username: str, password: str = "correct-horse-battery", fullname: str = "") -> User:
        user = User.with_password(username=username, password=password, fullname=fullname)
        async with database.session() as session:
            session.add(user)
        return user

    return _make


@pytest.fixture
def make_folder(database):
    async def _make(user: User, name: str) -> Folder:
        folder = Folder(name=name, user_id=user.id)
        async with database.session() as session:
            session.add(folder)
        return folder

    return _make


@pytest.fixture
def make_tag(database):
    async def _make(user: User, name: str) -> Tag:
        tag = Tag(name=name, user_id=user.id)
        async with database.session() as session:
            session.add(tag)
        return tag

    return _make


@pytest.fixture
def make_note(database):
    async def _make(
        user: User,
        title: str,
        content: str = "",
        created_at: Optional[datetime] = None,
        folder: Optional[Folder] = None,
    ) -> Note:
        note = Note(
            title=title,
            content=content,
            user_id=user.id,
            folder_id=folder.id if folder else None,
            created_at=created_at or datetime.now(timezone.utc),
        )
        async with database.session() as session:
            session.add(note)
        return note

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        identity = AuthUser(id=user.id, username=user.username, fullname=user.fullname)
        token = auth_service.create_token(identity)
        return {"Authorization": f"Bearer {token.auth_token}"}

    return _headers


@pytest_asyncio.fixture
async def alice(make_user):
    return await make_user("alice", fullname="Alice Example")


@pytest_asyncio.fixture
async def bob(make_user):
    return await make_user("bob", fullname="Bob Example")
