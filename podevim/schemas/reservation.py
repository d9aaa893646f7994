"""ParkingReservation schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from podevim.db.models.enums import ReservationStatus
from podevim.schemas.parking import TimeWindow


class ReservationCreate(TimeWindow):
    """Schema for booking a spot. The user is the caller."""

    spot_id: UUID
    parking_id: UUID
    payment_method: Optional[str] = Field(None, max_length=64)
    notes: Optional[str] = Field(None, max_length=2000)


class ReservationCheckOut(BaseModel):
    """Schema for checking out."""

    transaction_id: Optional[str] = Field(None, max_length=255)


class ReservationCancel(BaseModel):
    """Schema for cancelling a reservation."""

    reason: Optional[str] = Field(None, max_length=2000)


class ReservationResponse(BaseModel):
    """Schema for reservation response."""

    id: UUID
    spot_id: UUID
    parking_id: UUID
    user_id: UUID
    start_time: datetime
    end_time: datetime
    entry_time: Optional[datetime]
    exit_time: Optional[datetime]
    status: ReservationStatus
    estimated_price: Decimal
    final_price: Optional[Decimal]
    payment_method: Optional[str]
    transaction_id: Optional[str]
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}
