"""Student pickup workflow.

A pickup moves REQUESTED -> RELEASED -> COMPLETED, or to CANCELLED from
either open state. Each transition writes the pickup and the student's
``exit_status`` in one atomic unit. A pickup that is not in the state an
operation needs is reported exactly like a missing one.
"""

import logging
import math
from datetime import date, datetime, time, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import StudentPickup
from podevim.db.models.enums import ACTIVE_PICKUP_STATUSES, ExitStatus, PickupStatus
from podevim.db.session import atomic
from podevim.db.types import as_utc, utcnow
from podevim.exceptions import ConflictError, ForbiddenError, NotFoundError
from podevim.repositories import PickupRepository, StudentRepository
from podevim.schemas.common import Coordinates
from podevim.services.authorization import AuthorizationService
from podevim.services.geo import point_to_geojson
from podevim.services.notes import append_note

logger = logging.getLogger(__name__)


def wait_minutes(request_time: datetime, pickup_time: datetime) -> int:
    """Whole minutes between request and pickup, halves rounded up."""
    seconds = (as_utc(pickup_time) - as_utc(request_time)).total_seconds()
    return math.floor(seconds / 60 + 0.5)


def day_bounds(day: date):
    """First and last instant of a UTC calendar day."""
    return (
        datetime.combine(day, time.min, tzinfo=timezone.utc),
        datetime.combine(day, time.max, tzinfo=timezone.utc),
    )


class PickupWorkflow:
    """Drives the lifecycle of student pickups."""

    def __init__(self, session: AsyncSession, authorization: Optional[AuthorizationService] = None):
        self.session = session
        self.students = StudentRepository(session)
        self.pickups = PickupRepository(session)
        self.authorization = authorization or AuthorizationService(session)

    async def request_pickup(
        self,
        student_id: UUID,
        guardian_id: UUID,
        location: Optional[Coordinates] = None,
        notes: Optional[str] = None,
    ) -> StudentPickup:
        """Open a pickup request for a student on behalf of a guardian."""
        async with atomic(self.session):
            student = await self.students.get(student_id)
            if student is None:
                raise NotFoundError("Student not found")

            if not await self.authorization.can_pickup(student_id, guardian_id):
                logger.warning(f"Guardian {guardian_id} refused pickup of student {student_id}")
                raise ForbiddenError("Guardian is not authorized to pick up this student")

            if await self.pickups.find_active_for_student(student_id) is not None:
                raise ConflictError("There is already an active pickup request for this student")

            pickup = StudentPickup(
                student_id=student_id,
                guardian_id=guardian_id,
                school_id=student.school_id,
                status=PickupStatus.REQUESTED,
                request_time=utcnow(),
                guardian_location=(
                    point_to_geojson(location.latitude, location.longitude) if location else None
                ),
                confirmation_photos=[],
                notes=notes,
            )
            try:
                pickup = await self.pickups.add(pickup)
            except IntegrityError as exc:
                # Lost a race against another request for the same student
                raise ConflictError(
                    "There is already an active pickup request for this student"
                ) from exc

            await self.students.set_exit_status(student_id, ExitStatus.WAITING_EXIT)

        logger.info(f"Pickup {pickup.id} requested for student {student_id} by {guardian_id}")
        return pickup

    async def release_student(
        self,
        pickup_id: UUID,
        staff_id: UUID,
        notes: Optional[str] = None,
    ) -> StudentPickup:
        """Staff lets the student leave: REQUESTED -> RELEASED."""
        not_found = "Pickup request not found or already processed"
        async with atomic(self.session):
            found = await self.pickups.get_with_student(pickup_id, (PickupStatus.REQUESTED,))
            if found is None:
                raise NotFoundError(not_found)

            if not await self.authorization.is_staff_of(staff_id, found.pickup.school_id):
                logger.warning(f"User {staff_id} is not staff, cannot release pickup {pickup_id}")
                raise ForbiddenError("Staff member is not authorized")

            pickup = await self.pickups.transition(
                pickup_id,
                (PickupStatus.REQUESTED,),
                status=PickupStatus.RELEASED,
                staff_id=staff_id,
                release_time=utcnow(),
                notes=append_note(found.pickup.notes, notes),
            )
            if pickup is None:
                raise NotFoundError(not_found)

            await self.students.set_exit_status(found.student.id, ExitStatus.RELEASED)

        logger.info(f"Pickup {pickup_id} released by {staff_id}")
        return pickup

    async def confirm_pickup(
        self,
        pickup_id: UUID,
        photo: Optional[str] = None,
        location: Optional[Coordinates] = None,
    ) -> StudentPickup:
        """Guardian confirms they have the student: RELEASED -> COMPLETED."""
        not_found = "Pickup request not found or not released"
        async with atomic(self.session):
            found = await self.pickups.get_with_student(pickup_id, (PickupStatus.RELEASED,))
            if found is None:
                raise NotFoundError(not_found)

            current = found.pickup
            pickup_time = utcnow()
            photos = list(current.confirmation_photos or [])
            if photo:
                photos.append(photo)
            guardian_location = current.guardian_location
            if location is not None:
                guardian_location = point_to_geojson(location.latitude, location.longitude)

            pickup = await self.pickups.transition(
                pickup_id,
                (PickupStatus.RELEASED,),
                status=PickupStatus.COMPLETED,
                pickup_time=pickup_time,
                wait_time=wait_minutes(current.request_time, pickup_time),
                guardian_location=guardian_location,
                confirmation_photos=photos,
            )
            if pickup is None:
                raise NotFoundError(not_found)

            await self.students.set_exit_status(found.student.id, ExitStatus.PICKED_UP)

        logger.info(f"Pickup {pickup_id} completed after {pickup.wait_time} min")
        return pickup

    async def cancel_pickup(self, pickup_id: UUID, reason: Optional[str] = None) -> StudentPickup:
        """Cancel an open pickup and put the student back at school."""
        not_found = "Pickup request not found or cannot be cancelled"
        async with atomic(self.session):
            found = await self.pickups.get_with_student(pickup_id, ACTIVE_PICKUP_STATUSES)
            if found is None:
                raise NotFoundError(not_found)

            pickup = await self.pickups.transition(
                pickup_id,
                ACTIVE_PICKUP_STATUSES,
                status=PickupStatus.CANCELLED,
                notes=append_note(found.pickup.notes, reason, prefix="Cancellation: "),
            )
            if pickup is None:
                raise NotFoundError(not_found)

            await self.students.set_exit_status(found.student.id, ExitStatus.AT_SCHOOL)

        logger.info(f"Pickup {pickup_id} cancelled")
        return pickup

    async def list_school_pickups(
        self,
        school_id: UUID,
        status: Optional[PickupStatus] = None,
        day: Optional[date] = None,
    ) -> List[StudentPickup]:
        """Pickups of a school, newest request first."""
        requested_from, requested_to = day_bounds(day) if day else (None, None)
        return await self.pickups.list_for_school(school_id, status, requested_from, requested_to)

    async def student_pickup_history(
        self,
        student_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[StudentPickup]:
        """Pickups of a student; the date range applies only when both ends are given."""
        requested_from = requested_to = None
        if start_date and end_date:
            requested_from = day_bounds(start_date)[0]
            requested_to = day_bounds(end_date)[1]
        return await self.pickups.list_for_student(student_id, requested_from, requested_to)

    async def active_pickups_for_guardian(self, guardian_id: UUID) -> List[StudentPickup]:
        return await self.pickups.list_active_for_guardian(guardian_id)
