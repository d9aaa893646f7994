"""Guardian links between users and students."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import StudentGuardian
from podevim.db.models.enums import UserType
from podevim.db.session import atomic
from podevim.db.types import utcnow
from podevim.exceptions import ConflictError, NotFoundError
from podevim.repositories import GuardianRepository, StudentRepository, UserRepository

logger = logging.getLogger(__name__)


class GuardianService:
    """Adds, lists and removes the adults linked to a student."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.students = StudentRepository(session)
        self.guardians = GuardianRepository(session)
        self.users = UserRepository(session)

    async def add_guardian(
        self,
        student_id: UUID,
        user_id: UUID,
        relation: str,
        is_primary: bool = False,
        can_pickup: bool = True,
        end_date: Optional[datetime] = None,
    ) -> StudentGuardian:
        """Link a parent to a student. New links start unverified.

        Making a link primary demotes the student's current primary link.
        """
        async with atomic(self.session):
            if await self.students.get(student_id) is None:
                raise NotFoundError("Student not found")

            if await self.users.get_with_type(user_id, (UserType.PARENT,)) is None:
                raise NotFoundError("User not found or is not a parent")

            if await self.guardians.find_link(student_id, user_id) is not None:
                raise ConflictError("This guardian is already linked to the student")

            if is_primary:
                await self.guardians.clear_primary(student_id)

            link = StudentGuardian(
                student_id=student_id,
                user_id=user_id,
                relation=relation,
                is_primary=is_primary,
                verified=False,
                can_pickup=can_pickup,
                start_date=utcnow(),
                end_date=end_date,
            )
            try:
                link = await self.guardians.add(link)
            except IntegrityError as exc:
                # Lost a race against another link for the same student
                raise ConflictError("Guardian link conflicts with an existing link") from exc

        logger.info(f"Guardian {user_id} linked to student {student_id} (primary={is_primary})")
        return link

    async def list_guardians(self, student_id: UUID) -> List[StudentGuardian]:
        if await self.students.get(student_id) is None:
            raise NotFoundError("Student not found")
        return await self.guardians.list_for_student(student_id)

    async def remove_guardian(self, student_id: UUID, link_id: UUID) -> None:
        async with atomic(self.session):
            link = await self.guardians.get_for_student(link_id, student_id)
            if link is None:
                raise NotFoundError("Guardian link not found")
            await self.guardians.delete(link)

        logger.info(f"Guardian link {link_id} removed from student {student_id}")
