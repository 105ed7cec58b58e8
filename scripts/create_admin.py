"""
Create an administrator account.

Administrators approve or reject adoption applications and manage pets.

Usage:
    python scripts/create_admin.py admin@example.com 'password123' "Shop Admin"
"""
import asyncio
import sys

from fastapi_users.password import PasswordHelper
from sqlalchemy import select

from petshop.database import async_session_maker
from petshop.models.user import User


async def create_admin(email: str, password: str, name: str) -> None:
    """Create a verified superuser, or promote an existing user."""
    password_helper = PasswordHelper()

    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.email == email))
        existing_user = result.scalar_one_or_none()

        if existing_user:
            if existing_user.is_superuser:
                print(f"User {email} is already an administrator")
                return
            existing_user.is_superuser = True
            await session.commit()
            print(f"User {email} promoted to administrator")
            return

        admin = User(
            email=email,
            hashed_password=password_helper.hash(password),
            is_active=True,
            is_superuser=True,
            is_verified=True,
            name=name,
        )
        session.add(admin)
        await session.commit()

        print(f"Administrator created: {email}")
        print("You can now login at /api/auth/jwt/login")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)

    admin_name = sys.argv[3] if len(sys.argv) > 3 else "Administrator"
    asyncio.run(create_admin(sys.argv[1], sys.argv[2], admin_name))
