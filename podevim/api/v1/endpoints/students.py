"""Student and guardian endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.api.deps import Caller, get_current_caller, get_db_session
from podevim.db.models.enums import ExitStatus
from podevim.schemas.student import (
    GuardianCreate,
    GuardianResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)
from podevim.services.guardians import GuardianService
from podevim.services.students import StudentService

router = APIRouter()


def get_student_service(db: AsyncSession = Depends(get_db_session)) -> StudentService:
    return StudentService(db)


def get_guardian_service(db: AsyncSession = Depends(get_db_session)) -> GuardianService:
    return GuardianService(db)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    caller: Caller = Depends(get_current_caller),
    service: StudentService = Depends(get_student_service),
):
    """Enroll a student, optionally linking guardians."""
    return await service.create_student(caller.id, student_data)


@router.get("/class/{class_id}", response_model=List[StudentResponse])
async def list_class_students(
    class_id: UUID,
    caller: Caller = Depends(get_current_caller),
    service: StudentService = Depends(get_student_service),
):
    """List the students of a class."""
    return await service.list_class_students(class_id)


@router.get("/school/{school_id}", response_model=List[StudentResponse])
async def list_school_students(
    school_id: UUID,
    name: Optional[str] = Query(None, description="Part of the student name"),
    class_id: Optional[UUID] = Query(None),
    exit_status: Optional[ExitStatus] = Query(None),
    caller: Caller = Depends(get_current_caller),
    service: StudentService = Depends(get_student_service),
):
    """List the students of a school, optionally filtered."""
    return await service.list_school_students(school_id, name, class_id, exit_status)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: UUID,
    caller: Caller = Depends(get_current_caller),
    service: StudentService = Depends(get_student_service),
):
    """Get a specific student by ID."""
    return await service.get_student(student_id)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: UUID,
    student_data: StudentUpdate,
    caller: Caller = Depends(get_current_caller),
    service: StudentService = Depends(get_student_service),
):
    """Update a student's record."""
    return await service.update_student(caller.id, student_id, student_data)


@router.get("/{student_id}/guardians", response_model=List[GuardianResponse])
async def list_guardians(
    student_id: UUID,
    caller: Caller = Depends(get_current_caller),
    service: GuardianService = Depends(get_guardian_service),
):
    """List the guardians linked to a student."""
    return await service.list_guardians(student_id)


@router.post(
    "/{student_id}/guardians",
    response_model=GuardianResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_guardian(
    student_id: UUID,
    guardian_data: GuardianCreate,
    caller: Caller = Depends(get_current_caller),
    service: GuardianService = Depends(get_guardian_service),
):
    """Link a guardian to a student."""
    return await service.add_guardian(student_id, **guardian_data.model_dump())


@router.delete("/{student_id}/guardians/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_guardian(
    student_id: UUID,
    link_id: UUID,
    caller: Caller = Depends(get_current_caller),
    service: GuardianService = Depends(get_guardian_service),
):
    """Remove a guardian link."""
    await service.remove_guardian(student_id, link_id)
