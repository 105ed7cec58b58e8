"""Adoption application schemas for API request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from petshop.models.adoption_application import ApplicationStatus
from petshop.schemas.pet import PetSummary


class AdoptionApplicationCreate(BaseModel):
    """Schema for submitting an application; the applicant comes from the auth token."""
    message: Optional[str] = Field(None, max_length=5000, description="Why the applicant wants this pet")

    @field_validator('message')
    @classmethod
    def validate_message(cls, v: Optional[str]) -> Optional[str]:
        """Validate and clean message content."""
        if v:
            v = v.strip()
            if len(v) == 0:
                return None
        return v


class AdoptionDecision(BaseModel):
    """
    Schema for an administrator's decision on an application.

    The value is checked by the adoption service, which answers 400 for
    anything other than 'approved' or 'rejected'.
    """
    status: str = Field(..., min_length=1, max_length=20, description="approved or rejected")


class ApplicantSummary(BaseModel):
    """Applicant fields shown next to an adoption application."""
    id: int
    name: Optional[str] = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class AdoptionApplicationRead(BaseModel):
    """Schema for reading an application with pet and applicant projections."""
    id: int
    user_id: int
    pet_id: int
    message: Optional[str] = None
    status: ApplicationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    pet: Optional[PetSummary] = None
    user: Optional[ApplicantSummary] = None

    model_config = ConfigDict(from_attributes=True)


class AdoptionDeleteResponse(BaseModel):
    """Schema for successful application deletion."""
    success: bool = True
    message: str = "Application deleted successfully"
