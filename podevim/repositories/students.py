"""Student and guardian link repositories."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Student, StudentGuardian
from podevim.db.models.enums import ExitStatus


class StudentRepository:
    """Queries and writes on students."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, student_id: UUID) -> Optional[Student]:
        result = await self.session.execute(
            select(Student)
            .where(Student.id == student_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_class(self, class_id: UUID) -> List[Student]:
        result = await self.session.execute(
            select(Student)
            .where(Student.class_id == class_id)
            .order_by(Student.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_for_school(
        self,
        school_id: UUID,
        name: Optional[str] = None,
        class_id: Optional[UUID] = None,
        exit_status: Optional[ExitStatus] = None,
    ) -> List[Student]:
        query = select(Student).where(Student.school_id == school_id)
        if name:
            query = query.where(Student.name.ilike(f"%{name}%"))
        if class_id:
            query = query.where(Student.class_id == class_id)
        if exit_status:
            query = query.where(Student.exit_status == exit_status)
        result = await self.session.execute(
            query.order_by(Student.name).execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def add(self, student: Student) -> Student:
        self.session.add(student)
        await self.session.flush()
        await self.session.refresh(student)
        return student

    async def update(self, student_id: UUID, values: Dict[str, Any]) -> Optional[Student]:
        await self.session.execute(
            update(Student)
            .where(Student.id == student_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return await self.get(student_id)

    async def set_exit_status(self, student_id: UUID, exit_status: ExitStatus) -> None:
        await self.session.execute(
            update(Student)
            .where(Student.id == student_id)
            .values(exit_status=exit_status)
            .execution_options(synchronize_session=False)
        )


class GuardianRepository:
    """Queries and writes on student/guardian links."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_link(self, student_id: UUID, user_id: UUID) -> Optional[StudentGuardian]:
        result = await self.session.execute(
            select(StudentGuardian).where(
                StudentGuardian.student_id == student_id,
                StudentGuardian.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_pickup_link(self, student_id: UUID, user_id: UUID) -> Optional[StudentGuardian]:
        """Link for the pair, only if it allows picking the student up."""
        result = await self.session.execute(
            select(StudentGuardian).where(
                StudentGuardian.student_id == student_id,
                StudentGuardian.user_id == user_id,
                StudentGuardian.can_pickup.is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def get_for_student(self, link_id: UUID, student_id: UUID) -> Optional[StudentGuardian]:
        result = await self.session.execute(
            select(StudentGuardian).where(
                StudentGuardian.id == link_id,
                StudentGuardian.student_id == student_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_student(self, student_id: UUID) -> List[StudentGuardian]:
        result = await self.session.execute(
            select(StudentGuardian)
            .where(StudentGuardian.student_id == student_id)
            .order_by(StudentGuardian.is_primary.desc(), StudentGuardian.created_at)
        )
        return list(result.scalars().all())

    async def clear_primary(self, student_id: UUID) -> None:
        await self.session.execute(
            update(StudentGuardian)
            .where(StudentGuardian.student_id == student_id, StudentGuardian.is_primary.is_(True))
            .values(is_primary=False)
            .execution_options(synchronize_session=False)
        )

    async def add(self, link: StudentGuardian) -> StudentGuardian:
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def delete(self, link: StudentGuardian) -> None:
        await self.session.delete(link)
        await self.session.flush()
