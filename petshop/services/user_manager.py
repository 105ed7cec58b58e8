"""User manager for fastapi-users authentication system."""
import logging
from typing import Optional

from fastapi import Request
from fastapi_users import BaseUserManager, IntegerIDMixin, InvalidPasswordException

from petshop.models.user import User
from petshop.config import Settings


logger = logging.getLogger(__name__)


class UserManager(IntegerIDMixin, BaseUserManager[User, int]):
    """
    Custom user manager for handling user lifecycle events.

    Extends fastapi-users BaseUserManager with custom hooks for:
    - User registration
    - Password reset requests
    - Email verification requests
    """

    def __init__(self, user_db, settings: Settings):
        """
        Initialize UserManager with user database and settings.

        Args:
            user_db: Database adapter for user operations
            settings: Application settings containing secrets
        """
        super().__init__(user_db)
        self.reset_password_token_secret = settings.secret_key
        self.verification_token_secret = settings.secret_key
        self.reset_password_token_lifetime_seconds = settings.jwt_lifetime_seconds
        self.verification_token_lifetime_seconds = settings.jwt_lifetime_seconds

    async def on_after_register(
        self,
        user: User,
        request: Optional[Request] = None
    ) -> None:
        """Hook called after successful user registration."""
        logger.info(f"User {user.id} has registered with email {user.email}")

    async def on_after_forgot_password(
        self,
        user: User,
        token: str,
        request: Optional[Request] = None
    ) -> None:
        """Hook called after password reset is requested."""
        logger.info(f"User {user.id} has requested a password reset")

    async def on_after_request_verify(
        self,
        user: User,
        token: str,
        request: Optional[Request] = None
    ) -> None:
        """Hook called after email verification is requested."""
        logger.info(f"Verification requested for user {user.id}")

    async def validate_password(
        self,
        password: str,
        user=None
    ) -> None:
        """
        Validate password meets security requirements.

        Args:
            password: The password to validate
            user: The user being created or updated, if any

        Raises:
            InvalidPasswordException: If password doesn't meet requirements
        """
        if len(password) < 8:
            raise InvalidPasswordException(
                reason="Password must be at least 8 characters long"
            )

        # Maximum length check (prevent DoS)
        if len(password) > 100:
            raise InvalidPasswordException(
                reason="Password must be at most 100 characters long"
            )

        if not any(c.isalpha() for c in password):
            raise InvalidPasswordException(
                reason="Password must contain at least one letter"
            )

        if not any(c.isdigit() for c in password):
            raise InvalidPasswordException(
                reason="Password must contain at least one digit"
            )

        if user is not None and password.lower() == user.email.lower():
            raise InvalidPasswordException(
                reason="Password cannot be the same as email"
            )
