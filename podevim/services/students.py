"""Student enrollment and lookups."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Student, StudentGuardian
from podevim.db.models.enums import ExitStatus, UserType
from podevim.db.session import atomic
from podevim.db.types import utcnow
from podevim.exceptions import ForbiddenError, NotFoundError
from podevim.repositories import (
    ClassRepository,
    GuardianRepository,
    SchoolRepository,
    StudentRepository,
    UserRepository,
)
from podevim.schemas.student import StudentCreate, StudentUpdate
from podevim.services.authorization import AuthorizationService

logger = logging.getLogger(__name__)

CLASS_NOT_IN_SCHOOL = "Class not found or does not belong to this school"


class StudentService:
    """Enrolls students and keeps their records."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.students = StudentRepository(session)
        self.schools = SchoolRepository(session)
        self.classes = ClassRepository(session)
        self.guardians = GuardianRepository(session)
        self.users = UserRepository(session)
        self.authorization = AuthorizationService(session)

    async def create_student(self, caller_id: UUID, data: StudentCreate) -> Student:
        """
        Enroll a student in a class of their school.

        Guardians listed in ``data`` are linked in the same unit; each must
        be a PARENT, and a missing one aborts the whole enrollment. The
        student starts AT_SCHOOL.
        """
        async with atomic(self.session):
            if await self.schools.get(data.school_id) is None:
                raise NotFoundError("School not found")
            if not await self.authorization.is_staff_of(caller_id, data.school_id):
                raise ForbiddenError("Staff member is not authorized")
            if await self.classes.get_in_school(data.class_id, data.school_id) is None:
                raise NotFoundError(CLASS_NOT_IN_SCHOOL)

            student = await self.students.add(
                Student(
                    **data.model_dump(exclude={"guardians"}),
                    exit_status=ExitStatus.AT_SCHOOL,
                )
            )

            for guardian in data.guardians:
                if await self.users.get_with_type(guardian.user_id, (UserType.PARENT,)) is None:
                    raise NotFoundError(
                        f"Guardian {guardian.user_id} not found or is not a parent"
                    )
                await self.guardians.add(
                    StudentGuardian(
                        student_id=student.id,
                        verified=False,
                        start_date=utcnow(),
                        **guardian.model_dump(),
                    )
                )

        logger.info(
            f"Student {student.id} enrolled in class {data.class_id} "
            f"with {len(data.guardians)} guardian(s)"
        )
        return student

    async def get_student(self, student_id: UUID) -> Student:
        student = await self.students.get(student_id)
        if student is None:
            raise NotFoundError("Student not found")
        return student

    async def update_student(
        self,
        caller_id: UUID,
        student_id: UUID,
        data: StudentUpdate,
    ) -> Student:
        """Apply the fields sent in ``data``. A new class must be in the same school."""
        async with atomic(self.session):
            student = await self.students.get(student_id)
            if student is None:
                raise NotFoundError("Student not found")
            if not await self.authorization.is_staff_of(caller_id, student.school_id):
                raise ForbiddenError("Staff member is not authorized")

            if data.class_id is not None:
                if await self.classes.get_in_school(data.class_id, student.school_id) is None:
                    raise NotFoundError(CLASS_NOT_IN_SCHOOL)

            values = data.changes()
            if values:
                student = await self.students.update(student_id, values)

        logger.info(f"Student {student_id} updated by {caller_id}: {sorted(values)}")
        return student

    async def list_class_students(self, class_id: UUID) -> List[Student]:
        return await self.students.list_for_class(class_id)

    async def list_school_students(
        self,
        school_id: UUID,
        name: Optional[str] = None,
        class_id: Optional[UUID] = None,
        exit_status: Optional[ExitStatus] = None,
    ) -> List[Student]:
        return await self.students.list_for_school(school_id, name, class_id, exit_status)
