"""Pydantic schemas for request/response validation."""
from petshop.schemas.user import UserRead, UserCreate, UserUpdate
from petshop.schemas.pet import PetBase, PetCreate, PetUpdate, PetRead, PetSummary
from petshop.schemas.adoption import (
    AdoptionApplicationCreate,
    AdoptionDecision,
    ApplicantSummary,
    AdoptionApplicationRead,
    AdoptionDeleteResponse,
)

__all__ = [
    # User schemas
    "UserRead",
    "UserCreate",
    "UserUpdate",
    # Pet schemas
    "PetBase",
    "PetCreate",
    "PetUpdate",
    "PetRead",
    "PetSummary",
    # Adoption schemas
    "AdoptionApplicationCreate",
    "AdoptionDecision",
    "ApplicantSummary",
    "AdoptionApplicationRead",
    "AdoptionDeleteResponse",
]
