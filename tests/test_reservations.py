"""Tests for the parking reservation engine."""

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import ParkingReservation, ParkingSpot
from podevim.db.models.enums import ReservationStatus, SpotStatus
from podevim.exceptions import ConflictError, NotFoundError
from podevim.services.reservation_engine import ReservationEngine

BASE = datetime(2025, 6, 2, 8, 0, tzinfo=timezone.utc)


def at(hours: float) -> datetime:
    return BASE + timedelta(hours=hours)


async def free_spot(session: AsyncSession, spot_id):
    """Put a booked spot back to AVAILABLE without touching its reservations."""
    await session.execute(
        update(ParkingSpot).where(ParkingSpot.id == spot_id).values(status=SpotStatus.AVAILABLE)
    )
    await session.commit()


@pytest.fixture
def clock(monkeypatch):
    state = {"now": at(0)}
    monkeypatch.setattr("podevim.services.reservation_engine.utcnow", lambda: state["now"])
    return state


@pytest.mark.asyncio
async def test_create_reservation(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)

    reservation = await engine.create_reservation(
        spot.id, parking.id, driver.id, at(1), at(3), payment_method="pix", notes="Sedan"
    )

    assert reservation.status == ReservationStatus.SCHEDULED
    assert reservation.estimated_price == Decimal("20.00")
    assert reservation.final_price is None
    assert reservation.start_time == at(1)
    assert reservation.end_time == at(3)
    assert reservation.payment_method == "pix"
    await db_session.refresh(spot)
    assert spot.status == SpotStatus.RESERVED


@pytest.mark.asyncio
async def test_create_reservation_uses_day_rate(
    service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(0), at(24))
    assert reservation.estimated_price == Decimal("80.00")


@pytest.mark.asyncio
async def test_create_reservation_charges_started_days(
    service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(0), at(30))
    assert reservation.estimated_price == Decimal("160.00")


@pytest.mark.asyncio
async def test_create_reservation_unknown_spot(service_session: AsyncSession, parking, driver):
    engine = ReservationEngine(service_session)
    with pytest.raises(NotFoundError):
        await engine.create_reservation(uuid4(), parking.id, driver.id, at(1), at(2))


@pytest.mark.asyncio
async def test_create_reservation_spot_of_other_parking(
    service_session: AsyncSession, make_parking, spot, driver
):
    other = await make_parking(name="Other")
    engine = ReservationEngine(service_session)
    with pytest.raises(NotFoundError):
        await engine.create_reservation(spot.id, other.id, driver.id, at(1), at(2))


@pytest.mark.asyncio
async def test_reserved_spot_is_not_bookable(service_session: AsyncSession, parking, spot, driver):
    engine = ReservationEngine(service_session)
    await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(2))

    # Even for a disjoint window, until the spot is released
    with pytest.raises(NotFoundError):
        await engine.create_reservation(spot.id, parking.id, driver.id, at(10), at(11))


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [SpotStatus.MAINTENANCE, SpotStatus.UNAVAILABLE, SpotStatus.OCCUPIED])
async def test_spot_out_of_service_is_not_bookable(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver, status
):
    spot.status = status
    await db_session.commit()

    engine = ReservationEngine(service_session)
    with pytest.raises(NotFoundError):
        await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(2))


@pytest.mark.asyncio
async def test_overlapping_booking_is_rejected(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))
    await free_spot(db_session, spot.id)

    with pytest.raises(ConflictError):
        await engine.create_reservation(spot.id, parking.id, driver.id, at(2), at(4))

    count = await db_session.scalar(select(func.count()).select_from(ParkingReservation))
    assert count == 1


@pytest.mark.asyncio
async def test_touching_windows_overlap(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))
    await free_spot(db_session, spot.id)

    with pytest.raises(ConflictError):
        await engine.create_reservation(spot.id, parking.id, driver.id, at(3), at(5))


@pytest.mark.asyncio
async def test_cancelled_reservation_does_not_block(
    service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    first = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))
    await engine.cancel_reservation(first.id)

    second = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))
    assert second.status == ReservationStatus.SCHEDULED


@pytest.mark.asyncio
async def test_overlap_detection_matches_interval_intersection(
    db_session: AsyncSession, service_session: AsyncSession, parking, make_spot, driver
):
    """Random window pairs: the second booking fails exactly when the windows intersect."""
    rng = random.Random(20250602)
    engine = ReservationEngine(service_session)

    for index in range(20):
        spot = await make_spot(identifier=f"R-{index}")
        a_start = rng.randint(0, 20)
        a_end = a_start + rng.randint(1, 6)
        b_start = rng.randint(0, 20)
        b_end = b_start + rng.randint(1, 6)

        await engine.create_reservation(spot.id, parking.id, driver.id, at(a_start), at(a_end))
        await free_spot(db_session, spot.id)

        intersects = a_start <= b_end and a_end >= b_start
        if intersects:
            with pytest.raises(ConflictError):
                await engine.create_reservation(spot.id, parking.id, driver.id, at(b_start), at(b_end))
        else:
            await engine.create_reservation(spot.id, parking.id, driver.id, at(b_start), at(b_end))


@pytest.mark.asyncio
async def test_concurrent_bookings_for_same_spot(session_maker, monkeypatch, parking, spot, driver):
    """Two bookings that both pass the overlap check: exactly one is stored."""
    async with session_maker() as first_session, session_maker() as second_session:
        first = ReservationEngine(first_session)
        second = ReservationEngine(second_session)
        original = first.reservations.find_overlapping

        async def interleaved(spot_id, start_time, end_time):
            found = await original(spot_id, start_time, end_time)
            await second.create_reservation(spot_id, parking.id, driver.id, start_time, end_time)
            return found

        monkeypatch.setattr(first.reservations, "find_overlapping", interleaved)

        with pytest.raises(ConflictError):
            await first.create_reservation(spot.id, parking.id, driver.id, at(1), at(2))

    async with session_maker() as session:
        count = await session.scalar(
            select(func.count())
            .select_from(ParkingReservation)
            .where(ParkingReservation.spot_id == spot.id)
        )
        spot_status = await session.scalar(
            select(ParkingSpot.status).where(ParkingSpot.id == spot.id)
        )
    assert count == 1
    assert spot_status == SpotStatus.RESERVED


@pytest.mark.asyncio
async def test_check_in_and_check_out(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver, clock
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))

    clock["now"] = at(1)
    reservation = await engine.check_in(reservation.id)
    assert reservation.status == ReservationStatus.ACTIVE
    assert reservation.entry_time == at(1)

    clock["now"] = at(3.5)
    reservation = await engine.check_out(reservation.id, transaction_id="tx-123")
    assert reservation.status == ReservationStatus.COMPLETED
    assert reservation.exit_time == at(3.5)
    # Priced on the actual 2.5 h stay, not the booked 2 h
    assert reservation.final_price == Decimal("25.00")
    assert reservation.estimated_price == Decimal("20.00")
    assert reservation.transaction_id == "tx-123"
    await db_session.refresh(spot)
    assert spot.status == SpotStatus.AVAILABLE


@pytest.mark.asyncio
async def test_check_in_twice(service_session: AsyncSession, parking, spot, driver):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))
    await engine.check_in(reservation.id)

    with pytest.raises(NotFoundError):
        await engine.check_in(reservation.id)


@pytest.mark.asyncio
async def test_check_out_requires_check_in(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(3))

    with pytest.raises(NotFoundError):
        await engine.check_out(reservation.id)

    await db_session.refresh(spot)
    assert spot.status == SpotStatus.RESERVED


@pytest.mark.asyncio
async def test_unknown_reservation(service_session: AsyncSession):
    engine = ReservationEngine(service_session)
    with pytest.raises(NotFoundError):
        await engine.check_in(uuid4())
    with pytest.raises(NotFoundError):
        await engine.check_out(uuid4())
    with pytest.raises(NotFoundError):
        await engine.cancel_reservation(uuid4())


@pytest.mark.asyncio
async def test_cancel_active_reservation(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(
        spot.id, parking.id, driver.id, at(1), at(3), notes="Sedan"
    )
    await engine.check_in(reservation.id)

    reservation = await engine.cancel_reservation(reservation.id, reason="Plans changed")
    assert reservation.status == ReservationStatus.CANCELLED
    assert reservation.notes == "Sedan\nCancellation: Plans changed"
    assert reservation.final_price is None
    await db_session.refresh(spot)
    assert spot.status == SpotStatus.AVAILABLE


@pytest.mark.asyncio
async def test_terminal_reservations_reject_every_transition(
    service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    completed = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(2))
    await engine.check_in(completed.id)
    await engine.check_out(completed.id)

    cancelled = await engine.create_reservation(spot.id, parking.id, driver.id, at(5), at(6))
    await engine.cancel_reservation(cancelled.id)

    for reservation_id in (completed.id, cancelled.id):
        with pytest.raises(NotFoundError):
            await engine.check_in(reservation_id)
        with pytest.raises(NotFoundError):
            await engine.check_out(reservation_id)
        with pytest.raises(NotFoundError):
            await engine.cancel_reservation(reservation_id)


@pytest.mark.asyncio
async def test_expired_reservation_cannot_be_cancelled(
    db_session: AsyncSession, service_session: AsyncSession, parking, spot, driver
):
    engine = ReservationEngine(service_session)
    reservation = await engine.create_reservation(spot.id, parking.id, driver.id, at(1), at(2))
    await db_session.execute(
        update(ParkingReservation)
        .where(ParkingReservation.id == reservation.id)
        .values(status=ReservationStatus.EXPIRED)
    )
    await db_session.commit()

    with pytest.raises(NotFoundError):
        await engine.cancel_reservation(reservation.id)


@pytest.mark.asyncio
async def test_user_reservations(service_session: AsyncSession, parking, make_spot, driver):
    engine = ReservationEngine(service_session)
    spot_a = await make_spot(identifier="A-1")
    spot_b = await make_spot(identifier="B-1")
    early = await engine.create_reservation(spot_a.id, parking.id, driver.id, at(1), at(2))
    late = await engine.create_reservation(spot_b.id, parking.id, driver.id, at(5), at(6))
    await engine.cancel_reservation(early.id)

    everything = await engine.user_reservations(driver.id)
    assert [r.id for r in everything] == [late.id, early.id]

    cancelled = await engine.user_reservations(driver.id, ReservationStatus.CANCELLED)
    assert [r.id for r in cancelled] == [early.id]


@pytest.mark.asyncio
async def test_available_spots(
    db_session: AsyncSession, service_session: AsyncSession, parking, make_spot, driver
):
    engine = ReservationEngine(service_session)
    spot_a = await make_spot(identifier="A-1")
    spot_b = await make_spot(identifier="B-1")
    spot_c = await make_spot(identifier="C-1")
    spot_c.status = SpotStatus.MAINTENANCE
    await db_session.commit()

    await engine.create_reservation(spot_a.id, parking.id, driver.id, at(10), at(12))
    available = await engine.available_spots(parking.id)
    assert [s.id for s in available] == [spot_b.id]

    # Booked spot back in service, but its reservation still blocks the window
    await free_spot(db_session, spot_a.id)
    during = await engine.available_spots(parking.id, at(11), at(13))
    assert [s.id for s in during] == [spot_b.id]

    after = await engine.available_spots(parking.id, at(13), at(14))
    assert [s.id for s in after] == [spot_a.id, spot_b.id]
