"""Parking reservation repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import ParkingReservation, ParkingSpot
from podevim.db.models.enums import BLOCKING_RESERVATION_STATUSES, ReservationStatus


@dataclass(frozen=True)
class ReservationWithSpot:
    """A reservation together with the spot it books."""

    reservation: ParkingReservation
    spot: ParkingSpot


def overlap_clause(start_time: datetime, end_time: datetime):
    """Closed-interval intersection with ``[start_time, end_time]``.

    Touching endpoints count as overlapping.
    """
    return (ParkingReservation.start_time <= end_time) & (ParkingReservation.end_time >= start_time)


class ReservationRepository:
    """Queries and conditional writes on reservations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, reservation_id: UUID) -> Optional[ParkingReservation]:
        result = await self.session.execute(
            select(ParkingReservation)
            .where(ParkingReservation.id == reservation_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_with_spot(
        self,
        reservation_id: UUID,
        statuses: Iterable[ReservationStatus],
    ) -> Optional[ReservationWithSpot]:
        """Get a reservation and its spot, only if it is in one of ``statuses``."""
        result = await self.session.execute(
            select(ParkingReservation, ParkingSpot)
            .join(ParkingSpot, ParkingSpot.id == ParkingReservation.spot_id)
            .where(
                ParkingReservation.id == reservation_id,
                ParkingReservation.status.in_(list(statuses)),
            )
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return ReservationWithSpot(reservation=row[0], spot=row[1])

    async def find_overlapping(
        self,
        spot_id: UUID,
        start_time: datetime,
        end_time: datetime,
    ) -> Optional[ParkingReservation]:
        """First scheduled or active reservation of the spot overlapping the window."""
        result = await self.session.execute(
            select(ParkingReservation)
            .where(
                ParkingReservation.spot_id == spot_id,
                ParkingReservation.status.in_(BLOCKING_RESERVATION_STATUSES),
                overlap_clause(start_time, end_time),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def spots_with_overlap(
        self,
        spot_ids: List[UUID],
        start_time: datetime,
        end_time: datetime,
    ) -> set:
        """Ids among ``spot_ids`` that have an overlapping blocking reservation."""
        if not spot_ids:
            return set()
        result = await self.session.execute(
            select(ParkingReservation.spot_id)
            .where(
                ParkingReservation.spot_id.in_(spot_ids),
                ParkingReservation.status.in_(BLOCKING_RESERVATION_STATUSES),
                overlap_clause(start_time, end_time),
            )
            .distinct()
        )
        return set(result.scalars().all())

    async def add(self, reservation: ParkingReservation) -> ParkingReservation:
        self.session.add(reservation)
        await self.session.flush()
        await self.session.refresh(reservation)
        return reservation

    async def transition(
        self,
        reservation_id: UUID,
        expected: Iterable[ReservationStatus],
        **values,
    ) -> Optional[ParkingReservation]:
        """
        Write ``values`` only if the reservation is still in one of ``expected``.

        Returns the updated row, or None when nothing matched.
        """
        result = await self.session.execute(
            update(ParkingReservation)
            .where(
                ParkingReservation.id == reservation_id,
                ParkingReservation.status.in_(list(expected)),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        return await self.get(reservation_id)

    async def list_for_user(
        self,
        user_id: UUID,
        status: Optional[ReservationStatus] = None,
    ) -> List[ParkingReservation]:
        query = select(ParkingReservation).where(ParkingReservation.user_id == user_id)
        if status:
            query = query.where(ParkingReservation.status == status)
        result = await self.session.execute(query.order_by(ParkingReservation.start_time.desc()))
        return list(result.scalars().all())
