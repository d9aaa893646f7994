"""School and class schemas."""

from datetime import datetime
from typing import ClassVar, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field

from podevim.db.models.enums import ClassPeriod, SchoolStatus
from podevim.schemas.common import AddressCreate, PartialUpdate


class SchoolCreate(BaseModel):
    """Schema for registering a school."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=32)
    responsible_user_id: UUID
    notification_radius: int = Field(500, gt=0, description="Meters")
    address: Optional[AddressCreate] = None


class SchoolUpdate(PartialUpdate):
    """Schema for updating a school. Omitted fields are left unchanged."""

    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "email", "status", "notification_radius")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=32)
    status: Optional[SchoolStatus] = None
    notification_radius: Optional[int] = Field(None, gt=0)
    address: Optional[AddressCreate] = None


class SchoolResponse(BaseModel):
    """Schema for school response."""

    id: UUID
    name: str
    email: str
    phone_number: Optional[str]
    responsible_user_id: UUID
    status: SchoolStatus
    notification_radius: int
    created_at: datetime

    model_config = {"from_attributes": True}


class ClassCreate(BaseModel):
    """Schema for creating a class."""

    name: str = Field(..., min_length=1, max_length=255)
    period: ClassPeriod


class ClassResponse(BaseModel):
    """Schema for class response."""

    id: UUID
    school_id: UUID
    name: str
    period: ClassPeriod
    created_at: datetime

    model_config = {"from_attributes": True}
