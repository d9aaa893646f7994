"""Student pickup endpoints."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.api.deps import Caller, get_current_caller, get_db_session
from podevim.db.models.enums import PickupStatus
from podevim.schemas.pickup import (
    PickupCancel,
    PickupConfirm,
    PickupRelease,
    PickupRequestCreate,
    PickupResponse,
)
from podevim.services.pickup_workflow import PickupWorkflow

router = APIRouter()


def get_pickup_workflow(db: AsyncSession = Depends(get_db_session)) -> PickupWorkflow:
    return PickupWorkflow(db)


@router.post("", response_model=PickupResponse, status_code=status.HTTP_201_CREATED)
async def request_pickup(
    pickup_data: PickupRequestCreate,
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """Request the pickup of a student. The caller is the guardian."""
    return await workflow.request_pickup(
        student_id=pickup_data.student_id,
        guardian_id=caller.id,
        location=pickup_data.location,
        notes=pickup_data.notes,
    )


@router.post("/{pickup_id}/release", response_model=PickupResponse)
async def release_student(
    pickup_id: UUID,
    release_data: Optional[PickupRelease] = None,
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """Release the student to the guardian. The caller is the staff member."""
    notes = release_data.notes if release_data else None
    return await workflow.release_student(pickup_id, staff_id=caller.id, notes=notes)


@router.post("/{pickup_id}/confirm", response_model=PickupResponse)
async def confirm_pickup(
    pickup_id: UUID,
    confirm_data: Optional[PickupConfirm] = None,
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """Confirm the student was picked up."""
    confirm_data = confirm_data or PickupConfirm()
    return await workflow.confirm_pickup(
        pickup_id,
        photo=confirm_data.confirmation_photo,
        location=confirm_data.location,
    )


@router.post("/{pickup_id}/cancel", response_model=PickupResponse)
async def cancel_pickup(
    pickup_id: UUID,
    cancel_data: Optional[PickupCancel] = None,
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """Cancel an open pickup request."""
    reason = cancel_data.reason if cancel_data else None
    return await workflow.cancel_pickup(pickup_id, reason=reason)


@router.get("/active", response_model=List[PickupResponse])
async def list_active_pickups(
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """List the caller's open pickup requests."""
    return await workflow.active_pickups_for_guardian(caller.id)


@router.get("/school/{school_id}", response_model=List[PickupResponse])
async def list_school_pickups(
    school_id: UUID,
    pickup_status: Optional[PickupStatus] = Query(None, alias="status"),
    day: Optional[date] = Query(None, alias="date", description="Only requests made that day"),
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """List pickups of a school, newest first."""
    return await workflow.list_school_pickups(school_id, pickup_status, day)


@router.get("/student/{student_id}/history", response_model=List[PickupResponse])
async def student_pickup_history(
    student_id: UUID,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    caller: Caller = Depends(get_current_caller),
    workflow: PickupWorkflow = Depends(get_pickup_workflow),
):
    """Pickup history of a student."""
    return await workflow.student_pickup_history(student_id, start_date, end_date)
