"""Adoption application model linking a user to a pet they want to adopt."""
from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, String, Text, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petshop.database import Base

if TYPE_CHECKING:
    from petshop.models.pet import Pet
    from petshop.models.user import User


class ApplicationStatus(str, Enum):
    """Lifecycle state of an adoption application."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses an administrator may decide a pending application into
DECISION_STATUSES = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED})


class AdoptionApplication(Base):
    """
    A user's request to adopt a specific pet.

    One application per (user, pet) pair; the check is made by
    AdoptionService while the pet row is locked.
    """
    __tablename__ = "adoption_applications"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_adoption_applications_status"
        ),
    )
    __mapper_args__ = {"eager_defaults": True}

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    # Foreign keys
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Applicant's justification
    message: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApplicationStatus.PENDING.value,
        server_default=ApplicationStatus.PENDING.value,
        index=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )

    # Relationships
    pet: Mapped["Pet"] = relationship(
        "Pet",
        back_populates="applications",
        lazy="selectin"
    )
    user: Mapped["User"] = relationship(
        "User",
        back_populates="adoption_applications",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return (
            f"<AdoptionApplication(id={self.id}, user_id={self.user_id}, "
            f"pet_id={self.pet_id}, status={self.status})>"
        )
