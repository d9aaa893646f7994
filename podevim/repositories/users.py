"""User repository."""

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import User
from podevim.db.models.enums import UserType


class UserRepository:
    """Read access to the identity projection."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: UUID) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_with_type(self, user_id: UUID, user_types: Iterable[UserType]) -> Optional[User]:
        """Get a user only if their type is one of ``user_types``."""
        result = await self.session.execute(
            select(User).where(User.id == user_id, User.user_type.in_(list(user_types)))
        )
        return result.scalar_one_or_none()
