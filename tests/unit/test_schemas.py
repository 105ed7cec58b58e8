"""Unit tests for Pydantic schemas."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from petshop.models.adoption_application import ApplicationStatus
from petshop.models.pet import PetStatus
from petshop.schemas.adoption import (
    AdoptionApplicationCreate,
    AdoptionApplicationRead,
    AdoptionDecision,
    AdoptionDeleteResponse,
)
from petshop.schemas.pet import PetCreate, PetRead, PetUpdate


class TestPetSchemas:
    """Test pet request and response schemas."""

    def test_pet_create_defaults_to_available(self):
        pet = PetCreate(name="Luna", species="cat")

        assert pet.status == PetStatus.AVAILABLE
        assert pet.breed is None

    def test_pet_create_strips_name_and_species(self):
        pet = PetCreate(name="  Luna ", species=" cat ")

        assert pet.name == "Luna"
        assert pet.species == "cat"

    @pytest.mark.parametrize("field", ["name", "species"])
    def test_pet_create_rejects_whitespace_only(self, field):
        data = {"name": "Luna", "species": "cat", field: "   "}

        with pytest.raises(ValidationError):
            PetCreate(**data)

    @pytest.mark.parametrize("age", [-1, 101])
    def test_pet_create_rejects_out_of_range_age(self, age):
        with pytest.raises(ValidationError):
            PetCreate(name="Luna", species="cat", age=age)

    def test_pet_create_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            PetCreate(name="Luna", species="cat", status="sold")

    def test_pet_update_tracks_only_set_fields(self):
        update = PetUpdate(age=4)

        assert update.model_dump(exclude_unset=True) == {"age": 4}

    def test_pet_update_accepts_status(self):
        update = PetUpdate(status="adopted")

        assert update.status == PetStatus.ADOPTED

    def test_pet_read_from_attributes(self):
        class Row:
            id = 1
            name = "Rex"
            species = "dog"
            breed = None
            age = 2
            gender = "male"
            description = None
            image_url = None
            status = "pending"
            created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
            updated_at = None

        pet = PetRead.model_validate(Row())

        assert pet.status == PetStatus.PENDING
        assert pet.name == "Rex"


class TestAdoptionSchemas:
    """Test adoption request and response schemas."""

    def test_message_is_optional(self):
        assert AdoptionApplicationCreate().message is None

    def test_message_is_stripped(self):
        assert AdoptionApplicationCreate(message="  I love dogs  ").message == "I love dogs"

    def test_blank_message_becomes_none(self):
        assert AdoptionApplicationCreate(message="   ").message is None

    def test_message_length_is_limited(self):
        with pytest.raises(ValidationError):
            AdoptionApplicationCreate(message="x" * 5001)

    def test_decision_accepts_any_non_empty_text(self):
        """The service, not the schema, decides which statuses are allowed."""
        assert AdoptionDecision(status="completed").status == "completed"

    def test_decision_requires_status(self):
        with pytest.raises(ValidationError):
            AdoptionDecision()

        with pytest.raises(ValidationError):
            AdoptionDecision(status="")

    def test_application_read_with_projections(self):
        application = AdoptionApplicationRead.model_validate({
            "id": 3,
            "user_id": 1,
            "pet_id": 2,
            "message": None,
            "status": "approved",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "pet": {"id": 2, "name": "Buddy", "species": "dog", "breed": "Beagle", "status": "adopted"},
            "user": {"id": 1, "name": "Test User", "email": "test@example.com"},
        })

        assert application.status == ApplicationStatus.APPROVED
        assert application.pet.breed == "Beagle"
        assert application.user.email == "test@example.com"

    def test_delete_response_defaults(self):
        response = AdoptionDeleteResponse()

        assert response.success is True
        assert response.message == "Application deleted successfully"
