"""Permission checks for pickups."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from podevim.config import settings
from podevim.db.models import StudentGuardian
from podevim.db.models.enums import UserType
from podevim.db.types import as_utc, utcnow
from podevim.repositories import GuardianRepository, UserRepository

logger = logging.getLogger(__name__)

STAFF_TYPES = (UserType.ADMIN, UserType.SCHOOL)


class AuthorizationService:
    """
    Decides whether a user may act on a student or a school.

    By default a guardian link only needs ``can_pickup``. Two stricter
    policies can be switched on, either through settings or per instance:

    - ``require_verified``: the link must be verified by the school.
    - ``enforce_window``: now must fall inside ``start_date``/``end_date``.
    """

    def __init__(
        self,
        session: AsyncSession,
        require_verified: Optional[bool] = None,
        enforce_window: Optional[bool] = None,
    ):
        self.guardians = GuardianRepository(session)
        self.users = UserRepository(session)
        self.require_verified = (
            settings.PICKUP_REQUIRE_VERIFIED_GUARDIAN if require_verified is None else require_verified
        )
        self.enforce_window = (
            settings.PICKUP_ENFORCE_GUARDIAN_WINDOW if enforce_window is None else enforce_window
        )

    async def can_pickup(self, student_id: UUID, guardian_id: UUID) -> bool:
        """True if the guardian is allowed to pick the student up."""
        link = await self.guardians.find_pickup_link(student_id, guardian_id)
        if link is None:
            return False
        if self.require_verified and not link.verified:
            logger.info(f"Guardian {guardian_id} link to student {student_id} is not verified")
            return False
        if self.enforce_window and not self._within_window(link):
            logger.info(f"Guardian {guardian_id} link to student {student_id} is outside its window")
            return False
        return True

    async def is_staff_of(self, user_id: UUID, school_id: UUID) -> bool:
        """True if the user is school staff.

        Any ADMIN or SCHOOL user qualifies; membership in ``school_id`` is
        not checked.
        """
        staff = await self.users.get_with_type(user_id, STAFF_TYPES)
        return staff is not None

    @staticmethod
    def _within_window(link: StudentGuardian) -> bool:
        now = utcnow()
        if link.start_date is not None and as_utc(link.start_date) > now:
            return False
        if link.end_date is not None and as_utc(link.end_date) < now:
            return False
        return True
