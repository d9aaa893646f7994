"""Parking reservation endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.api.deps import Caller, get_current_caller, get_db_session
from podevim.db.models.enums import ReservationStatus
from podevim.schemas.reservation import (
    ReservationCancel,
    ReservationCheckOut,
    ReservationCreate,
    ReservationResponse,
)
from podevim.services.reservation_engine import ReservationEngine

router = APIRouter()


def get_reservation_engine(db: AsyncSession = Depends(get_db_session)) -> ReservationEngine:
    return ReservationEngine(db)


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    caller: Caller = Depends(get_current_caller),
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Book a spot for the caller."""
    return await engine.create_reservation(
        spot_id=reservation_data.spot_id,
        parking_id=reservation_data.parking_id,
        user_id=caller.id,
        start_time=reservation_data.start_time,
        end_time=reservation_data.end_time,
        payment_method=reservation_data.payment_method,
        notes=reservation_data.notes,
    )


@router.post("/{reservation_id}/check-in", response_model=ReservationResponse)
async def check_in(
    reservation_id: UUID,
    caller: Caller = Depends(get_current_caller),
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Record arrival at the spot."""
    return await engine.check_in(reservation_id)


@router.post("/{reservation_id}/check-out", response_model=ReservationResponse)
async def check_out(
    reservation_id: UUID,
    payment: Optional[ReservationCheckOut] = None,
    caller: Caller = Depends(get_current_caller),
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Record departure and compute the final price."""
    transaction_id = payment.transaction_id if payment else None
    return await engine.check_out(reservation_id, transaction_id=transaction_id)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: UUID,
    cancel_data: Optional[ReservationCancel] = None,
    caller: Caller = Depends(get_current_caller),
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """Cancel a scheduled or active reservation."""
    reason = cancel_data.reason if cancel_data else None
    return await engine.cancel_reservation(reservation_id, reason=reason)


@router.get("/user/{user_id}", response_model=List[ReservationResponse])
async def list_user_reservations(
    user_id: UUID,
    reservation_status: Optional[ReservationStatus] = Query(None, alias="status"),
    caller: Caller = Depends(get_current_caller),
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    """List a user's reservations, latest start first."""
    return await engine.user_reservations(user_id, reservation_status)
