"""SQLAlchemy models for the application."""
from petshop.models.user import User
from petshop.models.pet import Pet, PetStatus
from petshop.models.adoption_application import (
    AdoptionApplication,
    ApplicationStatus,
    DECISION_STATUSES,
)

__all__ = [
    "User",
    "Pet",
    "PetStatus",
    "AdoptionApplication",
    "ApplicationStatus",
    "DECISION_STATUSES",
]
