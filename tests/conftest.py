"""
Pytest configuration and fixtures for tests.
Provides reusable test fixtures for database, users, and data setup.
"""
import pytest
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from goonergram.main import fastapi_app as app
from goonergram.core.database import get_db
from goonergram.core.rate_limit import limiter
from goonergram.dependencies import get_current_user
from goonergram.models.base import Base


# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite only enforces ON DELETE CASCADE with foreign keys enabled
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


async def _create_user(db_session: AsyncSession, user_id: str, username: str, first_name: str):
    from goonergram.models.user import User

    user = User(
        id=user_id,
        username=username,
        email=f"{username}@example.com",
        first_name=first_name,
        last_name="Gooner",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user."""
    return await _create_user(db_session, "google:1001", "saka7", "Bukayo")


@pytest.fixture
async def test_user_2(db_session: AsyncSession):
    """Create a second test user."""
    return await _create_user(db_session, "google:1002", "odegaard8", "Martin")


@pytest.fixture
async def test_user_3(db_session: AsyncSession):
    """Create a third test user."""
    return await _create_user(db_session, "google:1003", "rice41", "Declan")


def user_context(user) -> dict:
    """The dict get_current_user returns for a user."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_image_url": user.profile_image_url,
    }


@pytest.fixture
def act_as():
    """
    Switch the authenticated user of the test client.

    Usage: ``act_as(test_user_2)`` before the next request.
    """
    def _act_as(user):
        async def mock_get_current_user():
            return user_context(user)

        app.dependency_overrides[get_current_user] = mock_get_current_user

    return _act_as


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession, test_user, act_as) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client authenticated as test_user."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    act_as(test_user)
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def unauth_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client WITHOUT authentication (for testing unauthorized access)."""

    async def override_get_db():
        yield db_session

    # Only override database, not authentication
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_post(db_session: AsyncSession, test_user):
    """Create a text post by test_user."""
    from goonergram.models.post import Post

    post = Post(user_id=test_user.id, content="North London is red")
    db_session.add(post)
    await db_session.commit()
    await db_session.refresh(post)

    return post


@pytest.fixture
async def test_chat(db_session: AsyncSession, test_user, test_user_2):
    """Create a private chat between test_user and test_user_2."""
    from goonergram.repositories.chat_repo import ChatRoomRepository
    from goonergram.models.partner import make_pair_key

    chat_room = await ChatRoomRepository(db_session).create_with_members(
        creator_id=test_user.id,
        member_ids=[test_user_2.id],
        is_group=False,
        private_key=make_pair_key(test_user.id, test_user_2.id),
    )
    await db_session.commit()

    return chat_room


@pytest.fixture
def session_token(test_user):
    """Session JWT for test_user."""
    from goonergram.core.security import create_session_token

    return create_session_token(test_user.id)


@pytest.fixture
def auth_headers(session_token):
    """Create authentication headers."""
    return {"Authorization": f"Bearer {session_token}"}


@pytest.fixture(autouse=True)
def mock_websocket_manager(mocker):
    """Mock the Socket.IO connection manager for all tests."""
    mock_manager = mocker.AsyncMock()
    mock_manager.broadcast_new_message = mocker.AsyncMock()
    mock_manager.broadcast_global_message = mocker.AsyncMock()
    mock_manager.send_notification = mocker.AsyncMock()
    mock_manager.send_unread_count = mocker.AsyncMock()

    mocker.patch("goonergram.core.websocket.connection_manager", mock_manager)
    mocker.patch("goonergram.services.message_service.connection_manager", mock_manager)
    mocker.patch("goonergram.services.notification_service.connection_manager", mock_manager)

    return mock_manager
