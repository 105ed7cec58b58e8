"""Database configuration and session management."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.orm import DeclarativeBase

from petshop.config import Settings
from petshop.exceptions import AdoptionError, InternalError


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> AsyncEngine:
    """
    Get or create the async database engine.

    Returns:
        AsyncEngine: The async SQLAlchemy engine
    """
    settings = Settings()
    if settings.is_sqlite:
        # aiosqlite picks its own pool; sizing arguments are rejected
        sqlite_engine = create_async_engine(settings.database_url, echo=settings.debug)
        event.listen(sqlite_engine.sync_engine, "connect", enable_sqlite_foreign_keys)
        return sqlite_engine
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=5,  # Number of connections to maintain
        max_overflow=10,  # Maximum number of connections to create beyond pool_size
    )


# Create async engine (will be initialized on first use)
engine = get_engine()


# Create async session maker
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit
    autocommit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide async database sessions.

    Yields:
        AsyncSession: An async SQLAlchemy session

    Example:
        @app.get("/pets")
        async def get_pets(session: AsyncSession = Depends(get_async_session)):
            result = await session.execute(select(Pet))
            return result.scalars().all()
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    Run a block of reads and writes as one transaction.

    Commits when the block finishes and rolls back on any exception, so a
    multi-statement operation is either fully persisted or not at all.
    Domain errors are re-raised unchanged; persistence failures are
    re-raised as InternalError.

    Example:
        async with unit_of_work(session):
            pet = await session.get(Pet, pet_id, with_for_update=True)
            pet.status = PetStatus.PENDING
    """
    try:
        yield session
        await session.commit()
    except AdoptionError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Transaction rolled back after database error: {e}", exc_info=True)
        raise InternalError("Database operation failed") from e
    except Exception:
        await session.rollback()
        raise
