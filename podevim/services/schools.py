"""Schools and their classes."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Address, School, SchoolClass
from podevim.db.models.enums import SchoolStatus, UserType
from podevim.db.session import atomic
from podevim.exceptions import ForbiddenError, NotFoundError
from podevim.repositories import (
    AddressRepository,
    ClassRepository,
    SchoolRepository,
    UserRepository,
)
from podevim.schemas.school import ClassCreate, SchoolCreate, SchoolUpdate
from podevim.services.authorization import STAFF_TYPES, AuthorizationService

logger = logging.getLogger(__name__)


class SchoolService:
    """Registers schools, keeps their details current and manages classes."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.schools = SchoolRepository(session)
        self.classes = ClassRepository(session)
        self.users = UserRepository(session)
        self.addresses = AddressRepository(session)
        self.authorization = AuthorizationService(session)

    async def create_school(self, caller_id: UUID, data: SchoolCreate) -> School:
        """Register an active school run by a SCHOOL user."""
        async with atomic(self.session):
            if await self.users.get_with_type(caller_id, STAFF_TYPES) is None:
                raise ForbiddenError("Only school staff can register schools")

            responsible = await self.users.get_with_type(
                data.responsible_user_id, (UserType.SCHOOL,)
            )
            if responsible is None:
                raise NotFoundError("Responsible user not found or is not a school user")

            address = None
            if data.address is not None:
                address = Address(**data.address.model_dump())
            school = await self.schools.add(
                School(
                    **data.model_dump(exclude={"address"}),
                    status=SchoolStatus.ACTIVE,
                ),
                address,
            )

        logger.info(f"School {school.id} registered by {caller_id}")
        return school

    async def get_school(self, school_id: UUID) -> School:
        school = await self.schools.get(school_id)
        if school is None:
            raise NotFoundError("School not found")
        return school

    async def update_school(self, caller_id: UUID, school_id: UUID, data: SchoolUpdate) -> School:
        """Apply the fields sent in ``data``. Only the responsible user or an ADMIN may update."""
        async with atomic(self.session):
            school = await self.schools.get(school_id)
            if school is None:
                raise NotFoundError("School not found")

            caller = await self.users.get(caller_id)
            if caller is None or (
                caller.id != school.responsible_user_id and caller.user_type != UserType.ADMIN
            ):
                raise ForbiddenError("Only the responsible user or an admin can update this school")

            values = data.changes("address")
            if values:
                school = await self.schools.update(school_id, values)
            if data.address is not None:
                await self.addresses.upsert("school_id", school_id, data.address.model_dump())

        logger.info(f"School {school_id} updated by {caller_id}: {sorted(values)}")
        return school

    async def find_schools(
        self,
        name: Optional[str] = None,
        status: Optional[SchoolStatus] = None,
        responsible_user_id: Optional[UUID] = None,
    ) -> List[School]:
        return await self.schools.search(name, status, responsible_user_id)

    async def create_class(self, caller_id: UUID, school_id: UUID, data: ClassCreate) -> SchoolClass:
        async with atomic(self.session):
            if await self.schools.get(school_id) is None:
                raise NotFoundError("School not found")
            if not await self.authorization.is_staff_of(caller_id, school_id):
                raise ForbiddenError("Staff member is not authorized")

            school_class = await self.classes.add(
                SchoolClass(school_id=school_id, **data.model_dump())
            )

        logger.info(f"Class {school_class.id} created in school {school_id}")
        return school_class

    async def list_classes(self, school_id: UUID) -> List[SchoolClass]:
        if await self.schools.get(school_id) is None:
            raise NotFoundError("School not found")
        return await self.classes.list_for_school(school_id)
