"""Pet model for managing adoptable animals."""
from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, String, Text, DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petshop.database import Base

if TYPE_CHECKING:
    from petshop.models.adoption_application import AdoptionApplication


class PetStatus(str, Enum):
    """Adoptability state of a pet."""
    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"


class Pet(Base):
    """
    Pet model representing an animal offered for adoption.

    The status column mirrors the pet's adoption applications and is
    written by AdoptionService. Administrators may also set it directly.
    """
    __tablename__ = "pets"
    __table_args__ = (
        CheckConstraint(
            "status IN ('available', 'pending', 'adopted')",
            name="ck_pets_status"
        ),
    )
    # Fetch server-side timestamps on flush instead of expiring them
    __mapper_args__ = {"eager_defaults": True}

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    # Basic information
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    species: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True
    )
    breed: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )
    age: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True
    )
    gender: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    # URL or inline data URI
    image_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PetStatus.AVAILABLE.value,
        server_default=PetStatus.AVAILABLE.value,
        index=True
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
    applications: Mapped[list["AdoptionApplication"]] = relationship(
        "AdoptionApplication",
        back_populates="pet",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name={self.name}, status={self.status})>"
