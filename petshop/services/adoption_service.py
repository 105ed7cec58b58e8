"""Adoption lifecycle service keeping pet status in step with its applications."""
import logging
from typing import List, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petshop.database import unit_of_work
from petshop.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from petshop.models.adoption_application import (
    AdoptionApplication,
    ApplicationStatus,
    DECISION_STATUSES,
)
from petshop.models.pet import Pet, PetStatus
from petshop.models.user import User


logger = logging.getLogger(__name__)


# A pet that already has pending applications still accepts competing ones
ADOPTABLE_PET_STATUSES = frozenset({PetStatus.AVAILABLE.value, PetStatus.PENDING.value})


def parse_application_status(value: Union[str, ApplicationStatus]) -> ApplicationStatus:
    """
    Convert a raw status value into an ApplicationStatus.

    Raises:
        InvalidArgumentError: If the value is not a known application status
    """
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid application status '{value}'. "
            f"Expected one of: {', '.join(s.value for s in ApplicationStatus)}"
        )


def parse_decision(value: Union[str, ApplicationStatus]) -> ApplicationStatus:
    """
    Validate the status an administrator wants to decide an application into.

    Raises:
        InvalidArgumentError: Unless the value is 'approved' or 'rejected'
    """
    try:
        decision = parse_application_status(value)
    except InvalidArgumentError:
        decision = None
    if decision not in DECISION_STATUSES:
        raise InvalidArgumentError(
            "Valid status is required (approved or rejected)"
        )
    return decision


def resolve_pet_status(pending_count: int, has_approved: bool) -> str:
    """
    Work out a pet's status after one of its applications was rejected or removed.

    Args:
        pending_count: Applications for the pet still awaiting a decision
        has_approved: Whether any application for the pet is approved

    Returns:
        'adopted' while an approved application exists, 'pending' while any
        application awaits a decision, otherwise 'available'.
    """
    if has_approved:
        return PetStatus.ADOPTED.value
    if pending_count > 0:
        return PetStatus.PENDING.value
    return PetStatus.AVAILABLE.value


class AdoptionService:
    """
    Service governing adoption applications and the pets they reference.

    Submit, decide and delete each run as a single unit of work that locks
    the pet row first (SELECT ... FOR UPDATE). Concurrent operations on the
    same pet are therefore serialized and at most one decision wins.
    """

    async def submit_application(
        self,
        session: AsyncSession,
        user_id: int,
        pet_id: int,
        message: Optional[str] = None,
    ) -> AdoptionApplication:
        """
        Create a pending application and mark the pet as pending.

        Args:
            session: Database session
            user_id: Applicant
            pet_id: Pet the applicant wants to adopt
            message: Optional justification from the applicant

        Returns:
            The created application with pet and user loaded

        Raises:
            NotFoundError: If the pet does not exist
            ConflictError: If the pet is adopted or the user already applied
        """
        async with unit_of_work(session):
            pet = await self._lock_pet(session, pet_id)

            if pet.status not in ADOPTABLE_PET_STATUSES:
                logger.warning(
                    f"User {user_id} tried to apply for pet {pet_id} with status {pet.status}"
                )
                raise ConflictError("Pet is not available for adoption")

            # At most one approved application per pet, whatever the status column says
            if await self._has_approved_application(session, pet_id):
                logger.warning(
                    f"User {user_id} tried to apply for pet {pet_id} which has an approved application"
                )
                raise ConflictError("Pet is not available for adoption")

            existing = await session.execute(
                select(AdoptionApplication.id).where(
                    AdoptionApplication.user_id == user_id,
                    AdoptionApplication.pet_id == pet_id,
                )
            )
            if existing.first() is not None:
                logger.warning(f"User {user_id} already applied for pet {pet_id}")
                raise ConflictError("You have already applied to adopt this pet")

            application = AdoptionApplication(
                user_id=user_id,
                pet_id=pet_id,
                message=message,
                status=ApplicationStatus.PENDING.value,
            )
            session.add(application)
            pet.status = PetStatus.PENDING.value
            await session.flush()
            application_id = application.id

        logger.info(
            f"Adoption application {application_id} submitted by user {user_id} for pet {pet_id}"
        )
        return await self.get_application(session, application_id)

    async def decide_application(
        self,
        session: AsyncSession,
        application_id: int,
        status: Union[str, ApplicationStatus],
    ) -> AdoptionApplication:
        """
        Approve or reject a pending application.

        Approval marks the pet adopted and rejects every other pending
        application for the same pet. Rejection returns the pet to
        'available' when no pending application is left.

        Raises:
            InvalidArgumentError: If status is not 'approved' or 'rejected'
            NotFoundError: If the application does not exist
            ConflictError: If the application was already decided, or the
                pet is already adopted when approving
        """
        decision = parse_decision(status)

        async with unit_of_work(session):
            pet = await self._lock_pet_for_application(session, application_id)
            application = await self._load_application(session, application_id, for_update=True)

            if application.status != ApplicationStatus.PENDING.value:
                logger.warning(
                    f"Application {application_id} is already {application.status}; "
                    f"refusing to mark it {decision.value}"
                )
                raise ConflictError(f"Application has already been {application.status}")

            if decision is ApplicationStatus.APPROVED:
                if (
                    pet.status == PetStatus.ADOPTED.value
                    or await self._has_approved_application(session, pet.id)
                ):
                    logger.warning(
                        f"Pet {pet.id} is already adopted; cannot approve application {application_id}"
                    )
                    raise ConflictError("Pet has already been adopted")

                application.status = ApplicationStatus.APPROVED.value
                pet.status = PetStatus.ADOPTED.value
                rejected_count = await self._reject_siblings(session, application)
                logger.info(
                    f"Application {application_id} approved; pet {pet.id} adopted, "
                    f"{rejected_count} competing application(s) rejected"
                )
            else:
                application.status = ApplicationStatus.REJECTED.value
                await self._sync_pet_status(session, pet)
                logger.info(
                    f"Application {application_id} rejected; pet {pet.id} is {pet.status}"
                )

        return await self.get_application(session, application_id)

    async def delete_application(
        self,
        session: AsyncSession,
        application_id: int,
        requester: Optional[User] = None,
    ) -> None:
        """
        Remove an application and recompute the pet's status.

        Args:
            session: Database session
            application_id: Application to remove
            requester: When given, must be the applicant or an administrator

        Raises:
            NotFoundError: If the application does not exist
            ForbiddenError: If the requester may not delete the application
        """
        async with unit_of_work(session):
            pet = await self._lock_pet_for_application(session, application_id)
            application = await self._load_application(session, application_id, for_update=True)

            if (
                requester is not None
                and requester.id != application.user_id
                and not requester.is_admin
            ):
                logger.warning(
                    f"User {requester.id} tried to delete application {application_id} "
                    f"of user {application.user_id}"
                )
                raise ForbiddenError("Not authorized to access this resource")

            await session.delete(application)
            await self._sync_pet_status(session, pet)

        logger.info(f"Application {application_id} deleted; pet {pet.id} is {pet.status}")

    async def get_application(
        self,
        session: AsyncSession,
        application_id: int,
    ) -> AdoptionApplication:
        """
        Fetch one application with its pet and applicant.

        Raises:
            NotFoundError: If the application does not exist
        """
        return await self._load_application(session, application_id)

    async def list_applications(
        self,
        session: AsyncSession,
        user_id: Optional[int] = None,
        pet_id: Optional[int] = None,
        status: Optional[Union[str, ApplicationStatus]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[AdoptionApplication]:
        """
        List applications, newest first, with pet and applicant loaded.

        Args:
            session: Database session
            user_id: Only applications submitted by this user
            pet_id: Only applications for this pet
            status: Only applications in this status
            skip: Number of records to skip
            limit: Maximum number of records to return

        Raises:
            InvalidArgumentError: If status is not a known application status
        """
        query = select(AdoptionApplication).options(
            selectinload(AdoptionApplication.pet),
            selectinload(AdoptionApplication.user),
        )

        if user_id is not None:
            query = query.where(AdoptionApplication.user_id == user_id)
        if pet_id is not None:
            query = query.where(AdoptionApplication.pet_id == pet_id)
        if status is not None:
            query = query.where(
                AdoptionApplication.status == parse_application_status(status).value
            )

        query = query.order_by(
            AdoptionApplication.created_at.desc(),
            AdoptionApplication.id.desc(),
        ).offset(skip).limit(limit)

        result = await session.execute(query)
        return list(result.scalars().all())

    async def _lock_pet(self, session: AsyncSession, pet_id: int) -> Pet:
        """Load a pet row under a write lock."""
        result = await session.execute(
            select(Pet)
            .where(Pet.id == pet_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        pet = result.scalar_one_or_none()
        if pet is None:
            raise NotFoundError("Pet not found")
        return pet

    async def _lock_pet_for_application(self, session: AsyncSession, application_id: int) -> Pet:
        """Lock the pet an application refers to."""
        result = await session.execute(
            select(AdoptionApplication.pet_id).where(AdoptionApplication.id == application_id)
        )
        pet_id = result.scalar_one_or_none()
        if pet_id is None:
            raise NotFoundError("Application not found")
        return await self._lock_pet(session, pet_id)

    async def _load_application(
        self,
        session: AsyncSession,
        application_id: int,
        for_update: bool = False,
    ) -> AdoptionApplication:
        """Load an application fresh from the database."""
        query = (
            select(AdoptionApplication)
            .options(
                selectinload(AdoptionApplication.pet),
                selectinload(AdoptionApplication.user),
            )
            .where(AdoptionApplication.id == application_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update(of=AdoptionApplication)

        result = await session.execute(query)
        application = result.scalar_one_or_none()
        if application is None:
            raise NotFoundError("Application not found")
        return application

    async def _reject_siblings(
        self,
        session: AsyncSession,
        application: AdoptionApplication,
    ) -> int:
        """Reject the other pending applications for the approved application's pet."""
        result = await session.execute(
            select(AdoptionApplication)
            .where(
                AdoptionApplication.pet_id == application.pet_id,
                AdoptionApplication.id != application.id,
                AdoptionApplication.status == ApplicationStatus.PENDING.value,
            )
            .with_for_update()
        )
        siblings = result.scalars().all()
        for sibling in siblings:
            sibling.status = ApplicationStatus.REJECTED.value
        await session.flush()
        return len(siblings)

    async def _sync_pet_status(self, session: AsyncSession, pet: Pet) -> None:
        """Recompute a pet's status from its remaining applications."""
        # The triggering write must be visible to the counts below
        await session.flush()

        pending_count = await self._count_applications(
            session, pet.id, ApplicationStatus.PENDING
        )
        approved_count = await self._count_applications(
            session, pet.id, ApplicationStatus.APPROVED
        )

        new_status = resolve_pet_status(pending_count, approved_count > 0)
        if new_status != pet.status:
            logger.info(f"Pet {pet.id} status changed from {pet.status} to {new_status}")
            pet.status = new_status
            await session.flush()

    async def _has_approved_application(self, session: AsyncSession, pet_id: int) -> bool:
        approved_count = await self._count_applications(
            session, pet_id, ApplicationStatus.APPROVED
        )
        return approved_count > 0

    async def _count_applications(
        self,
        session: AsyncSession,
        pet_id: int,
        status: ApplicationStatus,
    ) -> int:
        result = await session.execute(
            select(func.count()).select_from(AdoptionApplication).where(
                AdoptionApplication.pet_id == pet_id,
                AdoptionApplication.status == status.value,
            )
        )
        return result.scalar_one()
