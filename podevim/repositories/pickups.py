"""Student pickup repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Student, StudentPickup
from podevim.db.models.enums import ACTIVE_PICKUP_STATUSES, PickupStatus


@dataclass(frozen=True)
class PickupWithStudent:
    """A pickup together with the student it concerns."""

    pickup: StudentPickup
    student: Student


class PickupRepository:
    """Queries and conditional writes on pickups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, pickup_id: UUID) -> Optional[StudentPickup]:
        result = await self.session.execute(
            select(StudentPickup)
            .where(StudentPickup.id == pickup_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_with_student(
        self,
        pickup_id: UUID,
        statuses: Iterable[PickupStatus],
    ) -> Optional[PickupWithStudent]:
        """Get a pickup and its student, only if the pickup is in one of ``statuses``."""
        result = await self.session.execute(
            select(StudentPickup, Student)
            .join(Student, Student.id == StudentPickup.student_id)
            .where(StudentPickup.id == pickup_id, StudentPickup.status.in_(list(statuses)))
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return PickupWithStudent(pickup=row[0], student=row[1])

    async def find_active_for_student(self, student_id: UUID) -> Optional[StudentPickup]:
        result = await self.session.execute(
            select(StudentPickup)
            .where(
                StudentPickup.student_id == student_id,
                StudentPickup.status.in_(ACTIVE_PICKUP_STATUSES),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def add(self, pickup: StudentPickup) -> StudentPickup:
        self.session.add(pickup)
        await self.session.flush()
        await self.session.refresh(pickup)
        return pickup

    async def transition(
        self,
        pickup_id: UUID,
        expected: Iterable[PickupStatus],
        **values,
    ) -> Optional[StudentPickup]:
        """
        Write ``values`` only if the pickup is still in one of ``expected``.

        Returns the updated row, or None when no row matched (missing, or
        moved on by a concurrent request).
        """
        result = await self.session.execute(
            update(StudentPickup)
            .where(StudentPickup.id == pickup_id, StudentPickup.status.in_(list(expected)))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        return await self.get(pickup_id)

    async def list_for_school(
        self,
        school_id: UUID,
        status: Optional[PickupStatus] = None,
        requested_from: Optional[datetime] = None,
        requested_to: Optional[datetime] = None,
    ) -> List[StudentPickup]:
        query = select(StudentPickup).where(StudentPickup.school_id == school_id)
        if status:
            query = query.where(StudentPickup.status == status)
        if requested_from and requested_to:
            query = query.where(StudentPickup.request_time.between(requested_from, requested_to))
        result = await self.session.execute(query.order_by(StudentPickup.request_time.desc()))
        return list(result.scalars().all())

    async def list_for_student(
        self,
        student_id: UUID,
        requested_from: Optional[datetime] = None,
        requested_to: Optional[datetime] = None,
    ) -> List[StudentPickup]:
        query = select(StudentPickup).where(StudentPickup.student_id == student_id)
        if requested_from and requested_to:
            query = query.where(StudentPickup.request_time.between(requested_from, requested_to))
        result = await self.session.execute(query.order_by(StudentPickup.request_time.desc()))
        return list(result.scalars().all())

    async def list_active_for_guardian(self, guardian_id: UUID) -> List[StudentPickup]:
        result = await self.session.execute(
            select(StudentPickup)
            .where(
                StudentPickup.guardian_id == guardian_id,
                StudentPickup.status.in_(ACTIVE_PICKUP_STATUSES),
            )
            .order_by(StudentPickup.request_time.desc())
        )
        return list(result.scalars().all())
