"""Parking and parking spot schemas."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from podevim.db.models.enums import ParkingStatus, ParkingType, SpotStatus, SpotType
from podevim.db.types import as_utc
from podevim.schemas.common import AddressCreate, Coordinates, PartialUpdate


class ParkingCreate(BaseModel):
    """Schema for creating a parking. The owner is the caller."""

    name: str = Field(..., min_length=1, max_length=255)
    type: ParkingType
    coordinates: Coordinates
    description: Optional[str] = None
    rules: Optional[str] = None
    address: Optional[AddressCreate] = None


class ParkingUpdate(PartialUpdate):
    """Schema for updating a parking. Omitted fields are left unchanged."""

    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    rules: Optional[str] = None
    status: Optional[ParkingStatus] = None
    coordinates: Optional[Coordinates] = None
    address: Optional[AddressCreate] = None


class ParkingResponse(BaseModel):
    """Schema for parking response."""

    id: UUID
    owner_id: UUID
    name: str
    type: ParkingType
    latitude: float
    longitude: float
    description: Optional[str]
    rules: Optional[str]
    status: ParkingStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class ParkingWithDistance(ParkingResponse):
    """Schema for parking search result."""

    distance_meters: float


class SpotCreate(BaseModel):
    """Schema for creating a parking spot."""

    identifier: Optional[str] = Field(None, max_length=32)
    type: SpotType = SpotType.STANDARD
    price_minute: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    price_hour: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    price_day: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    price_month: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class SpotResponse(BaseModel):
    """Schema for parking spot response."""

    id: UUID
    parking_id: UUID
    identifier: Optional[str]
    type: SpotType
    price_minute: Optional[Decimal]
    price_hour: Decimal
    price_day: Optional[Decimal]
    price_month: Optional[Decimal]
    status: SpotStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class TimeWindow(BaseModel):
    """Closed time window."""

    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self
