"""Address repository."""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Address

OWNER_COLUMNS = ("user_id", "school_id", "parking_id")


def _owner(owner_column: str):
    if owner_column not in OWNER_COLUMNS:
        raise ValueError(f"Unknown address owner column: {owner_column}")
    return getattr(Address, owner_column)


class AddressRepository:
    """Addresses keyed by their single owner (a user, a school or a parking)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, owner_column: str, owner_id: UUID) -> Optional[Address]:
        result = await self.session.execute(
            select(Address)
            .where(_owner(owner_column) == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def upsert(self, owner_column: str, owner_id: UUID, values: Dict[str, Any]) -> Address:
        """Replace the owner's address fields, creating the row if it is missing."""
        existing = await self.find(owner_column, owner_id)
        if existing is None:
            address = Address(**{owner_column: owner_id}, **values)
            self.session.add(address)
            await self.session.flush()
            await self.session.refresh(address)
            return address

        await self.session.execute(
            update(Address)
            .where(Address.id == existing.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return await self.find(owner_column, owner_id)

    async def move(
        self, owner_column: str, owner_id: UUID, latitude: float, longitude: float
    ) -> None:
        """Update the coordinates of the owner's address, if it has one."""
        await self.session.execute(
            update(Address)
            .where(_owner(owner_column) == owner_id)
            .values(latitude=latitude, longitude=longitude)
            .execution_options(synchronize_session=False)
        )
