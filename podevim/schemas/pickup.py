"""StudentPickup schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from podevim.db.models.enums import PickupStatus
from podevim.schemas.common import Coordinates


class PickupRequestCreate(BaseModel):
    """Schema for requesting a pickup. The guardian is the caller."""

    student_id: UUID
    location: Optional[Coordinates] = None
    notes: Optional[str] = Field(None, max_length=2000)


class PickupRelease(BaseModel):
    """Schema for releasing a student. The staff member is the caller."""

    notes: Optional[str] = Field(None, max_length=2000)


class PickupConfirm(BaseModel):
    """Schema for confirming a pickup."""

    confirmation_photo: Optional[str] = Field(None, max_length=512)
    location: Optional[Coordinates] = None


class PickupCancel(BaseModel):
    """Schema for cancelling a pickup."""

    reason: Optional[str] = Field(None, max_length=2000)


class PickupResponse(BaseModel):
    """Schema for pickup response."""

    id: UUID
    student_id: UUID
    guardian_id: UUID
    school_id: UUID
    status: PickupStatus
    request_time: datetime
    release_time: Optional[datetime]
    pickup_time: Optional[datetime]
    wait_time: Optional[int]
    staff_id: Optional[UUID]
    guardian_location: Optional[dict]
    confirmation_photos: List[str] = []
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}
