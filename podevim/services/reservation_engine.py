"""Parking reservation engine.

A reservation moves SCHEDULED -> ACTIVE -> COMPLETED, or to CANCELLED from
either open state. EXPIRED is only ever set from outside this service.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import ParkingReservation, ParkingSpot
from podevim.db.models.enums import BLOCKING_RESERVATION_STATUSES, ReservationStatus, SpotStatus
from podevim.db.session import atomic
from podevim.db.types import as_utc, utcnow
from podevim.exceptions import ConflictError, NotFoundError
from podevim.repositories import ReservationRepository, SpotRepository
from podevim.services.notes import append_note
from podevim.services.pricing import calculate_price, duration_hours

logger = logging.getLogger(__name__)


class ReservationEngine:
    """Books spots and drives reservations through check-in and check-out."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.spots = SpotRepository(session)
        self.reservations = ReservationRepository(session)

    async def create_reservation(
        self,
        spot_id: UUID,
        parking_id: UUID,
        user_id: UUID,
        start_time: datetime,
        end_time: datetime,
        payment_method: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ParkingReservation:
        """
        Book an available spot for ``[start_time, end_time]``.

        The overlap check, the insert and the AVAILABLE -> RESERVED write on
        the spot share one atomic unit. The spot write is conditional, so of
        two concurrent bookings only one can claim the spot; the other fails
        with ConflictError and its insert is rolled back.
        """
        start_time, end_time = as_utc(start_time), as_utc(end_time)
        async with atomic(self.session):
            spot = await self.spots.get_in_parking(spot_id, parking_id, SpotStatus.AVAILABLE)
            if spot is None:
                raise NotFoundError("Parking spot not found or not available")

            conflicting = await self.reservations.find_overlapping(spot_id, start_time, end_time)
            if conflicting is not None:
                logger.warning(
                    f"Spot {spot_id} already booked by {conflicting.id} "
                    f"for [{start_time}, {end_time}]"
                )
                raise ConflictError("The spot is already reserved for the requested period")

            reservation = await self.reservations.add(
                ParkingReservation(
                    spot_id=spot_id,
                    parking_id=parking_id,
                    user_id=user_id,
                    start_time=start_time,
                    end_time=end_time,
                    status=ReservationStatus.SCHEDULED,
                    estimated_price=calculate_price(spot, duration_hours(start_time, end_time)),
                    payment_method=payment_method,
                    notes=notes,
                )
            )

            claimed = await self.spots.transition(
                spot_id, (SpotStatus.AVAILABLE,), SpotStatus.RESERVED
            )
            if not claimed:
                raise ConflictError("The spot was just reserved by another request")

        logger.info(
            f"Reservation {reservation.id} created for spot {spot_id}, "
            f"estimated {reservation.estimated_price}"
        )
        return reservation

    async def check_in(self, reservation_id: UUID) -> ParkingReservation:
        """SCHEDULED -> ACTIVE, recording the entry time."""
        async with atomic(self.session):
            reservation = await self.reservations.transition(
                reservation_id,
                (ReservationStatus.SCHEDULED,),
                status=ReservationStatus.ACTIVE,
                entry_time=utcnow(),
            )
            if reservation is None:
                raise NotFoundError("Reservation not found or not scheduled")

        logger.info(f"Reservation {reservation_id} checked in")
        return reservation

    async def check_out(
        self,
        reservation_id: UUID,
        transaction_id: Optional[str] = None,
    ) -> ParkingReservation:
        """ACTIVE -> COMPLETED, pricing the actual stay and freeing the spot."""
        not_found = "Reservation not found or not active"
        async with atomic(self.session):
            found = await self.reservations.get_with_spot(
                reservation_id, (ReservationStatus.ACTIVE,)
            )
            if found is None:
                raise NotFoundError(not_found)

            exit_time = utcnow()
            final_price = calculate_price(
                found.spot, duration_hours(found.reservation.entry_time, exit_time)
            )
            reservation = await self.reservations.transition(
                reservation_id,
                (ReservationStatus.ACTIVE,),
                status=ReservationStatus.COMPLETED,
                exit_time=exit_time,
                final_price=final_price,
                transaction_id=transaction_id,
            )
            if reservation is None:
                raise NotFoundError(not_found)

            await self.spots.set_status(found.spot.id, SpotStatus.AVAILABLE)

        logger.info(f"Reservation {reservation_id} checked out, final {final_price}")
        return reservation

    async def cancel_reservation(
        self,
        reservation_id: UUID,
        reason: Optional[str] = None,
    ) -> ParkingReservation:
        """Cancel a scheduled or active reservation and free the spot."""
        not_found = "Reservation not found or cannot be cancelled"
        async with atomic(self.session):
            found = await self.reservations.get_with_spot(
                reservation_id, BLOCKING_RESERVATION_STATUSES
            )
            if found is None:
                raise NotFoundError(not_found)

            reservation = await self.reservations.transition(
                reservation_id,
                BLOCKING_RESERVATION_STATUSES,
                status=ReservationStatus.CANCELLED,
                notes=append_note(found.reservation.notes, reason, prefix="Cancellation: "),
            )
            if reservation is None:
                raise NotFoundError(not_found)

            await self.spots.set_status(found.spot.id, SpotStatus.AVAILABLE)

        logger.info(f"Reservation {reservation_id} cancelled")
        return reservation

    async def user_reservations(
        self,
        user_id: UUID,
        status: Optional[ReservationStatus] = None,
    ) -> List[ParkingReservation]:
        return await self.reservations.list_for_user(user_id, status)

    async def available_spots(
        self,
        parking_id: UUID,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[ParkingSpot]:
        """Available spots of a parking, minus those booked during the window if one is given."""
        spots = await self.spots.list_for_parking(parking_id, SpotStatus.AVAILABLE)
        if start_time is None or end_time is None:
            return spots

        busy = await self.reservations.spots_with_overlap(
            [spot.id for spot in spots], as_utc(start_time), as_utc(end_time)
        )
        return [spot for spot in spots if spot.id not in busy]
