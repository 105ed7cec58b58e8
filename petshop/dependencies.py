"""FastAPI dependencies for authentication, authorization and services."""
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Query, status
from fastapi_users import FastAPIUsers
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from sqlalchemy.ext.asyncio import AsyncSession

from petshop.config import Settings
from petshop.database import get_async_session
from petshop.models.user import User
from petshop.services.adoption_service import AdoptionService
from petshop.services.user_manager import UserManager


# Initialize settings
settings = Settings()


async def get_user_db(
    session: AsyncSession = Depends(get_async_session)
) -> AsyncGenerator[SQLAlchemyUserDatabase, None]:
    """
    Dependency to get the user database adapter.

    Args:
        session: Async database session

    Yields:
        SQLAlchemyUserDatabase: Database adapter for user operations
    """
    yield SQLAlchemyUserDatabase(session, User)


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase = Depends(get_user_db)
) -> AsyncGenerator[UserManager, None]:
    """
    Dependency to get the user manager.

    Args:
        user_db: User database adapter

    Yields:
        UserManager: User manager instance
    """
    yield UserManager(user_db, settings)


def get_jwt_strategy() -> JWTStrategy:
    """
    Get JWT authentication strategy.

    Returns:
        JWTStrategy: JWT strategy configured with secret and lifetime
    """
    return JWTStrategy(
        secret=settings.secret_key,
        lifetime_seconds=settings.jwt_lifetime_seconds,
        algorithm="HS256",
    )


# Configure Bearer token transport
bearer_transport = BearerTransport(tokenUrl="api/auth/jwt/login")


# Configure authentication backend with JWT
auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)


# Create FastAPIUsers instance
fastapi_users = FastAPIUsers[User, int](
    get_user_manager,
    [auth_backend],
)


# Export commonly used dependencies
current_active_user = fastapi_users.current_user(active=True)


def require_admin(user: User = Depends(current_active_user)) -> User:
    """
    Dependency that ensures the current user is an administrator.

    Args:
        user: Current authenticated user

    Returns:
        User: The authenticated administrator

    Raises:
        HTTPException: 403 Forbidden if user is not an administrator
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required"
        )
    return user


def ensure_owner_or_admin(user: User, owner_id: int) -> None:
    """
    Allow access to a user's own records, or to any record for administrators.

    Raises:
        HTTPException: 403 Forbidden otherwise
    """
    if user.id != owner_id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this resource"
        )


def get_adoption_service() -> AdoptionService:
    """Dependency to get AdoptionService instance."""
    return AdoptionService()


class Pagination:
    """Query parameters shared by list endpoints."""

    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(
            settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="Maximum number of records to return",
        ),
    ):
        self.skip = skip
        self.limit = limit
