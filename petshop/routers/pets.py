"""
Pets router for managing adoptable animals.

This module provides:
- Public browsing of pets with status/species filters
- Administrative create, update and delete
- Submitting an adoption application for a pet
"""
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petshop.database import get_async_session
from petshop.dependencies import (
    Pagination,
    current_active_user,
    get_adoption_service,
    require_admin,
)
from petshop.models.adoption_application import AdoptionApplication
from petshop.models.pet import Pet, PetStatus
from petshop.models.user import User
from petshop.schemas.adoption import AdoptionApplicationCreate, AdoptionApplicationRead
from petshop.schemas.pet import PetCreate, PetRead, PetUpdate
from petshop.services.adoption_service import AdoptionService


logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/pets",
    tags=["pets"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not authorized to access this resource"},
        404: {"description": "Pet not found"},
    }
)


async def get_pet_or_404(session: AsyncSession, pet_id: int) -> Pet:
    """Load a pet or answer 404."""
    result = await session.execute(select(Pet).where(Pet.id == pet_id))
    pet = result.scalar_one_or_none()

    if pet is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pet not found"
        )
    return pet


@router.get("/", response_model=List[PetRead])
async def list_pets(
    session: AsyncSession = Depends(get_async_session),
    pagination: Pagination = Depends(),
    status_filter: Optional[PetStatus] = Query(
        None,
        alias="status",
        description="Filter by status: 'available', 'pending' or 'adopted'"
    ),
    species: Optional[str] = Query(None, description="Filter by species"),
    sort: Literal["name", "newest"] = Query("name", description="Sort order: 'name' or 'newest'"),
) -> List[Pet]:
    """
    List pets (public endpoint - no authentication required).

    **Query Parameters:**
    - status: Only pets in this adoption status
    - species: Only pets of this species (exact match)
    - sort: 'name' (alphabetical, default) or 'newest'
    - skip / limit: Pagination
    """
    query = select(Pet)

    if status_filter is not None:
        query = query.where(Pet.status == status_filter.value)
    if species:
        query = query.where(Pet.species == species)

    if sort == "newest":
        query = query.order_by(Pet.created_at.desc(), Pet.id.desc())
    else:
        query = query.order_by(Pet.name.asc(), Pet.id.asc())

    query = query.offset(pagination.skip).limit(pagination.limit)

    result = await session.execute(query)
    return list(result.scalars().all())


@router.get("/{pet_id}", response_model=PetRead)
async def get_pet(
    pet_id: int,
    session: AsyncSession = Depends(get_async_session),
) -> Pet:
    """Get a single pet by ID (public endpoint)."""
    return await get_pet_or_404(session, pet_id)


@router.post("/", response_model=PetRead, status_code=status.HTTP_201_CREATED)
async def create_pet(
    pet_data: PetCreate,
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
) -> Pet:
    """
    Create a new pet record (administrators only).

    **Example:**
    ```json
    {
        "name": "Luna",
        "species": "cat",
        "breed": "Siamese",
        "age": 2,
        "gender": "female"
    }
    ```

    **Returns:** The created pet with status 'available' unless given
    """
    pet = Pet(
        name=pet_data.name,
        species=pet_data.species,
        breed=pet_data.breed,
        age=pet_data.age,
        gender=pet_data.gender,
        description=pet_data.description,
        image_url=pet_data.image_url,
        status=pet_data.status.value,
    )

    session.add(pet)
    await session.commit()
    await session.refresh(pet)

    logger.info(f"Pet {pet.id} created by admin {admin.id}")

    return pet


@router.put("/{pet_id}", response_model=PetRead)
async def update_pet(
    pet_id: int,
    pet_data: PetUpdate,
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
) -> Pet:
    """
    Update a pet (administrators only).

    Only provided fields are changed. A status given here is applied as-is
    and leaves the pet's adoption applications untouched.
    """
    pet = await get_pet_or_404(session, pet_id)

    update_data = pet_data.model_dump(exclude_unset=True)
    # Required columns cannot be cleared
    for field in ("name", "species", "status"):
        if field in update_data and update_data[field] is None:
            del update_data[field]
    for field, value in update_data.items():
        if isinstance(value, PetStatus):
            value = value.value
        setattr(pet, field, value)

    await session.commit()
    await session.refresh(pet)

    if "status" in update_data:
        logger.info(f"Pet {pet_id} status set to {pet.status} by admin {admin.id}")

    return pet


@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pet(
    pet_id: int,
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a pet (administrators only).

    The pet's adoption applications are removed with it.
    """
    pet = await get_pet_or_404(session, pet_id)

    await session.delete(pet)
    await session.commit()

    logger.info(f"Pet {pet_id} deleted by admin {admin.id}")


@router.post(
    "/{pet_id}/adopt",
    response_model=AdoptionApplicationRead,
    status_code=status.HTTP_201_CREATED,
)
async def apply_for_adoption(
    pet_id: int,
    application_data: AdoptionApplicationCreate,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
) -> AdoptionApplication:
    """
    Apply to adopt a pet.

    The applicant is the authenticated user. The pet must be 'available'
    or 'pending' (other applications may already be waiting), and a user
    can apply for the same pet only once.

    **Request Body:**
    ```json
    {
        "message": "We have a fenced garden and two kids who love dogs."
    }
    ```

    **Returns:** The pending application (409 if the pet is adopted or
    the user already applied)
    """
    return await adoption_service.submit_application(
        session,
        user_id=user.id,
        pet_id=pet_id,
        message=application_data.message,
    )
