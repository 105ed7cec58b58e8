"""Shared test fixtures and configuration."""

import pytest
from typing import AsyncGenerator, Awaitable, Callable, Generator, Optional, Type, TypeVar
import os

# Set TESTING flag to prevent loading .env file
os.environ['TESTING'] = '1'

# Set up test environment BEFORE any imports
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
os.environ['SECRET_KEY'] = 'test_secret_key_at_least_32_characters_long_for_security'
os.environ['DEBUG'] = 'true'

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from petshop.database import Base, enable_sqlite_foreign_keys
from petshop.models import Pet, PetStatus, User


ModelT = TypeVar("ModelT")


@pytest.fixture(autouse=True)
def setup_test_env() -> Generator[None, None, None]:
    """Set up test environment variables before each test."""
    original_env = os.environ.copy()

    os.environ['TESTING'] = '1'
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
    os.environ['SECRET_KEY'] = 'test_secret_key_at_least_32_characters_long_for_security'

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment for tests that need to test missing variables."""
    original_env = os.environ.copy()

    # Clear all environment variables except TESTING
    os.environ.clear()
    os.environ['TESTING'] = '1'

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session bound to a fresh in-memory database."""
    engine = create_async_engine(
        os.environ.get('TEST_DATABASE_URL', 'sqlite+aiosqlite://'),
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def create_user(
    session: AsyncSession,
    email: str,
    name: str,
    is_superuser: bool = False,
) -> User:
    """Insert a user directly, bypassing registration."""
    user = User(
        email=email,
        hashed_password="hashed_password_placeholder",
        name=name,
        is_active=True,
        is_superuser=is_superuser,
        is_verified=True,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(async_session: AsyncSession) -> User:
    """Create a regular (non-admin) test user."""
    return await create_user(async_session, "test@example.com", "Test User")


@pytest.fixture
async def other_user(async_session: AsyncSession) -> User:
    """Create a second regular user competing for the same pets."""
    return await create_user(async_session, "other@example.com", "Other User")


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """Create an administrator."""
    return await create_user(async_session, "admin@example.com", "Admin User", is_superuser=True)


@pytest.fixture
def make_pet(async_session: AsyncSession) -> Callable[..., Awaitable[Pet]]:
    """Factory creating pets with sensible defaults."""

    async def _make_pet(
        name: str = "Buddy",
        species: str = "dog",
        status: PetStatus = PetStatus.AVAILABLE,
        **fields,
    ) -> Pet:
        pet = Pet(name=name, species=species, status=status.value, **fields)
        async_session.add(pet)
        await async_session.commit()
        await async_session.refresh(pet)
        return pet

    return _make_pet


@pytest.fixture
async def test_pet(make_pet) -> Pet:
    """Create an available pet."""
    return await make_pet(name="Buddy", species="dog", breed="Golden Retriever", age=3)


async def reload(session: AsyncSession, model: Type[ModelT], pk: int) -> Optional[ModelT]:
    """Read a row fresh from the database, ignoring stale identity-map state."""
    return await session.get(model, pk, populate_existing=True)


@pytest.fixture
def fresh(async_session: AsyncSession) -> Callable[..., Awaitable]:
    """Fixture form of reload bound to the test session."""

    async def _fresh(model, pk: int):
        return await reload(async_session, model, pk)

    return _fresh


class ActingUser:
    """Holds the id of the user the test client authenticates as."""

    def __init__(self, user_id: int):
        self.user_id = user_id

    def switch(self, user: User) -> None:
        self.user_id = user.id


@pytest.fixture
def acting_user(test_user: User) -> ActingUser:
    """The test client acts as test_user until switched."""
    return ActingUser(test_user.id)


@pytest.fixture
async def async_client(async_session: AsyncSession, acting_user: ActingUser):
    """Create test client with database session and auth overrides."""
    from httpx import AsyncClient, ASGITransport
    from petshop.main import app
    from petshop.database import get_async_session
    from petshop.dependencies import current_active_user

    async def override_get_async_session():
        yield async_session

    async def override_current_active_user():
        # Load fresh: a rolled back request expires every object in the session
        return await reload(async_session, User, acting_user.user_id)

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[current_active_user] = override_current_active_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def unauthenticated_client(async_session: AsyncSession):
    """Create test client with database session override but NO auth override.

    Use this for tests that need the real authentication flow
    (registration, login, missing token).
    """
    from httpx import AsyncClient, ASGITransport
    from petshop.main import app
    from petshop.database import get_async_session

    async def override_get_async_session():
        yield async_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
