"""
Adoptions router for reviewing and managing adoption applications.

Administrators list and decide applications; applicants read and
withdraw their own.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from petshop.database import get_async_session
from petshop.dependencies import (
    Pagination,
    current_active_user,
    ensure_owner_or_admin,
    get_adoption_service,
    require_admin,
)
from petshop.models.adoption_application import AdoptionApplication
from petshop.models.user import User
from petshop.schemas.adoption import (
    AdoptionApplicationRead,
    AdoptionDecision,
    AdoptionDeleteResponse,
)
from petshop.services.adoption_service import AdoptionService


logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/adoptions",
    tags=["adoptions"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not authorized to access this resource"},
        404: {"description": "Application not found"},
    }
)


@router.get("/all", response_model=List[AdoptionApplicationRead])
async def list_all_applications(
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
    pagination: Pagination = Depends(),
    status_filter: Optional[str] = Query(
        None,
        alias="status",
        description="Filter by status: 'pending', 'approved' or 'rejected'"
    ),
    pet_id: Optional[int] = Query(None, description="Filter by pet"),
) -> List[AdoptionApplication]:
    """
    List every adoption application (administrators only).

    Each application includes the pet's name, species and breed and the
    applicant's name and email. Newest first.
    """
    return await adoption_service.list_applications(
        session,
        pet_id=pet_id,
        status=status_filter,
        skip=pagination.skip,
        limit=pagination.limit,
    )


@router.get("/user/{user_id}", response_model=List[AdoptionApplicationRead])
async def list_user_applications(
    user_id: int,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
    pagination: Pagination = Depends(),
) -> List[AdoptionApplication]:
    """
    List the applications submitted by one user.

    Users can only list their own applications; administrators can list
    anyone's.
    """
    ensure_owner_or_admin(user, user_id)

    return await adoption_service.list_applications(
        session,
        user_id=user_id,
        skip=pagination.skip,
        limit=pagination.limit,
    )


@router.get("/{application_id}", response_model=AdoptionApplicationRead)
async def get_application(
    application_id: int,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
) -> AdoptionApplication:
    """Get a single application. Visible to its applicant and administrators."""
    application = await adoption_service.get_application(session, application_id)
    ensure_owner_or_admin(user, application.user_id)
    return application


@router.put("/{application_id}", response_model=AdoptionApplicationRead)
async def decide_application(
    application_id: int,
    decision: AdoptionDecision,
    admin: User = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
) -> AdoptionApplication:
    """
    Approve or reject a pending application (administrators only).

    **Request Body:**
    ```json
    {
        "status": "approved"
    }
    ```

    **Effects:**
    - approved: the pet becomes 'adopted' and every other pending
      application for it is rejected
    - rejected: the pet returns to 'available' if no pending application
      remains, otherwise it stays 'pending'

    **Errors:** 400 for a status other than approved/rejected, 404 if the
    application does not exist, 409 if it was already decided or the pet
    is already adopted
    """
    application = await adoption_service.decide_application(
        session,
        application_id,
        decision.status,
    )

    logger.info(
        f"Admin {admin.id} marked application {application_id} as {application.status}"
    )

    return application


@router.delete("/{application_id}", response_model=AdoptionDeleteResponse)
async def delete_application(
    application_id: int,
    user: User = Depends(current_active_user),
    session: AsyncSession = Depends(get_async_session),
    adoption_service: AdoptionService = Depends(get_adoption_service),
) -> AdoptionDeleteResponse:
    """
    Delete an application.

    Applicants may withdraw their own applications; administrators may
    delete any. The pet returns to 'available' when no pending
    application remains.
    """
    await adoption_service.delete_application(session, application_id, requester=user)

    return AdoptionDeleteResponse()
