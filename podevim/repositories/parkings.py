"""Parking and spot repositories."""

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Address, Parking, ParkingSpot
from podevim.db.models.enums import ParkingStatus, ParkingType, SpotStatus


class ParkingRepository:
    """Queries and writes on parkings and their addresses."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, parking_id: UUID) -> Optional[Parking]:
        result = await self.session.execute(
            select(Parking)
            .where(Parking.id == parking_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_status(
        self,
        status: ParkingStatus,
        parking_type: Optional[ParkingType] = None,
    ) -> List[Parking]:
        query = select(Parking).where(Parking.status == status)
        if parking_type:
            query = query.where(Parking.type == parking_type)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def add(self, parking: Parking, address: Optional[Address] = None) -> Parking:
        self.session.add(parking)
        await self.session.flush()
        if address is not None:
            address.parking_id = parking.id
            self.session.add(address)
            await self.session.flush()
        await self.session.refresh(parking)
        return parking

    async def update(self, parking_id: UUID, values: Dict[str, Any]) -> Optional[Parking]:
        await self.session.execute(
            update(Parking)
            .where(Parking.id == parking_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return await self.get(parking_id)


class SpotRepository:
    """Queries and conditional writes on parking spots."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_parking(
        self,
        spot_id: UUID,
        parking_id: UUID,
        status: Optional[SpotStatus] = None,
    ) -> Optional[ParkingSpot]:
        query = select(ParkingSpot).where(
            ParkingSpot.id == spot_id,
            ParkingSpot.parking_id == parking_id,
        )
        if status:
            query = query.where(ParkingSpot.status == status)
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def list_for_parking(
        self,
        parking_id: UUID,
        status: Optional[SpotStatus] = None,
    ) -> List[ParkingSpot]:
        query = select(ParkingSpot).where(ParkingSpot.parking_id == parking_id)
        if status:
            query = query.where(ParkingSpot.status == status)
        result = await self.session.execute(query.order_by(ParkingSpot.identifier))
        return list(result.scalars().all())

    async def add(self, spot: ParkingSpot) -> ParkingSpot:
        self.session.add(spot)
        await self.session.flush()
        await self.session.refresh(spot)
        return spot

    async def transition(
        self,
        spot_id: UUID,
        expected: Iterable[SpotStatus],
        new_status: SpotStatus,
    ) -> bool:
        """Move the spot to ``new_status`` if it is still in ``expected``."""
        result = await self.session.execute(
            update(ParkingSpot)
            .where(ParkingSpot.id == spot_id, ParkingSpot.status.in_(list(expected)))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def set_status(self, spot_id: UUID, new_status: SpotStatus) -> None:
        await self.session.execute(
            update(ParkingSpot)
            .where(ParkingSpot.id == spot_id)
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
