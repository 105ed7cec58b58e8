"""Pet schemas for API request/response validation."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from petshop.models.pet import PetStatus


class PetBase(BaseModel):
    """Base schema for pet data."""
    name: str = Field(..., min_length=1, max_length=255)
    species: str = Field(..., min_length=1, max_length=100)

    @field_validator('name', 'species')
    @classmethod
    def validate_not_whitespace(cls, v: str) -> str:
        """Ensure required text is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError('Value cannot be empty or whitespace-only')
        return v.strip()
    breed: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=100)
    gender: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = None
    image_url: Optional[str] = None


class PetCreate(PetBase):
    """Schema for creating a new pet."""
    status: PetStatus = PetStatus.AVAILABLE


class PetUpdate(BaseModel):
    """
    Schema for updating a pet.

    Setting status here is an administrative override and does not touch
    the pet's adoption applications.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    species: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator('name', 'species')
    @classmethod
    def validate_not_whitespace(cls, v: Optional[str]) -> Optional[str]:
        """Ensure provided text is not empty or whitespace-only."""
        if v is not None and (not v or not v.strip()):
            raise ValueError('Value cannot be empty or whitespace-only')
        return v.strip() if v is not None else v
    breed: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=100)
    gender: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[PetStatus] = None


class PetRead(PetBase):
    """Schema for reading pet data."""
    id: int
    status: PetStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PetSummary(BaseModel):
    """Pet fields shown next to an adoption application."""
    id: int
    name: str
    species: str
    breed: Optional[str] = None
    image_url: Optional[str] = None
    status: PetStatus

    model_config = ConfigDict(from_attributes=True)
