"""User model for authentication and user management."""
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from fastapi_users.db import SQLAlchemyBaseUserTable
from sqlalchemy import String, Boolean, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petshop.database import Base

if TYPE_CHECKING:
    from petshop.models.adoption_application import AdoptionApplication


class User(SQLAlchemyBaseUserTable[int], Base):
    """
    User model extending fastapi-users base user table.

    Uses an integer primary key. Administrators are users with
    is_superuser set; they decide adoption applications and manage pets.
    """
    __tablename__ = "users"

    # Override id to use a serial integer key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    # fastapi-users required fields (inherited but explicitly defined for clarity)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(
        String(1024),
        nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False
    )
    is_superuser: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False
    )

    # Profile fields
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True
    )
    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )

    # Relationships
    adoption_applications: Mapped[list["AdoptionApplication"]] = relationship(
        "AdoptionApplication",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload"
    )

    @property
    def is_admin(self) -> bool:
        """Administrators are fastapi-users superusers."""
        return self.is_superuser

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
