"""Student and guardian schemas."""

from datetime import datetime
from typing import ClassVar, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from podevim.db.models.enums import ExitStatus
from podevim.schemas.common import PartialUpdate


class GuardianCreate(BaseModel):
    """Schema for linking a guardian to a student."""

    user_id: UUID
    relation: str = Field(..., min_length=1, max_length=64)
    is_primary: bool = False
    can_pickup: bool = True
    end_date: Optional[datetime] = None


class GuardianResponse(BaseModel):
    """Schema for guardian link response."""

    id: UUID
    student_id: UUID
    user_id: UUID
    relation: str
    is_primary: bool
    verified: bool
    can_pickup: bool
    start_date: datetime
    end_date: Optional[datetime]
    created_at: datetime

    model_config = {"from_attributes": True}


class StudentCreate(BaseModel):
    """Schema for enrolling a student, optionally with their guardians."""

    name: str = Field(..., min_length=1, max_length=255)
    school_id: UUID
    class_id: UUID
    photo: Optional[str] = Field(None, max_length=512)
    special_needs: Optional[str] = None
    guardians: List[GuardianCreate] = Field(default_factory=list)

    @field_validator("guardians")
    @classmethod
    def check_guardians(cls, guardians: List[GuardianCreate]) -> List[GuardianCreate]:
        if len({guardian.user_id for guardian in guardians}) != len(guardians):
            raise ValueError("A guardian can only be listed once")
        if sum(1 for guardian in guardians if guardian.is_primary) > 1:
            raise ValueError("Only one guardian can be primary")
        return guardians


class StudentUpdate(PartialUpdate):
    """Schema for updating a student. The exit status is not editable here."""

    non_nullable: ClassVar[Tuple[str, ...]] = ("name", "class_id")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    class_id: Optional[UUID] = None
    photo: Optional[str] = Field(None, max_length=512)
    special_needs: Optional[str] = None


class StudentResponse(BaseModel):
    """Schema for student response."""

    id: UUID
    name: str
    school_id: UUID
    class_id: UUID
    photo: Optional[str]
    exit_status: ExitStatus
    special_needs: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}
