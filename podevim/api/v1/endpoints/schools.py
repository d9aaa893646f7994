"""School and class endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.api.deps import Caller, get_current_caller, get_db_session
from podevim.db.models.enums import SchoolStatus
from podevim.schemas.school import (
    ClassCreate,
    ClassResponse,
    SchoolCreate,
    SchoolResponse,
    SchoolUpdate,
)
from podevim.services.schools import SchoolService

router = APIRouter()


def get_school_service(db: AsyncSession = Depends(get_db_session)) -> SchoolService:
    return SchoolService(db)


@router.get("", response_model=List[SchoolResponse])
async def find_schools(
    name: Optional[str] = Query(None, description="Part of the school name"),
    school_status: Optional[SchoolStatus] = Query(None, alias="status"),
    responsible_user_id: Optional[UUID] = Query(None),
    service: SchoolService = Depends(get_school_service),
):
    """Find schools, optionally filtered."""
    return await service.find_schools(name, school_status, responsible_user_id)


@router.post("", response_model=SchoolResponse, status_code=status.HTTP_201_CREATED)
async def create_school(
    school_data: SchoolCreate,
    caller: Caller = Depends(get_current_caller),
    service: SchoolService = Depends(get_school_service),
):
    """Register a school."""
    return await service.create_school(caller.id, school_data)


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(
    school_id: UUID,
    service: SchoolService = Depends(get_school_service),
):
    """Get a specific school by ID."""
    return await service.get_school(school_id)


@router.put("/{school_id}", response_model=SchoolResponse)
async def update_school(
    school_id: UUID,
    school_data: SchoolUpdate,
    caller: Caller = Depends(get_current_caller),
    service: SchoolService = Depends(get_school_service),
):
    """Update a school."""
    return await service.update_school(caller.id, school_id, school_data)


@router.post(
    "/{school_id}/classes",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_class(
    school_id: UUID,
    class_data: ClassCreate,
    caller: Caller = Depends(get_current_caller),
    service: SchoolService = Depends(get_school_service),
):
    """Create a class in a school."""
    return await service.create_class(caller.id, school_id, class_data)


@router.get("/{school_id}/classes", response_model=List[ClassResponse])
async def list_classes(
    school_id: UUID,
    service: SchoolService = Depends(get_school_service),
):
    """List the classes of a school."""
    return await service.list_classes(school_id)
