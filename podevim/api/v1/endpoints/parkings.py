"""Parking and spot endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.api.deps import Caller, get_current_caller, get_db_session
from podevim.db.models.enums import ParkingType
from podevim.exceptions import ValidationError
from podevim.schemas.parking import (
    ParkingCreate,
    ParkingResponse,
    ParkingUpdate,
    ParkingWithDistance,
    SpotCreate,
    SpotResponse,
    TimeWindow,
)
from podevim.services.parking_directory import ParkingDirectory
from podevim.services.reservation_engine import ReservationEngine

router = APIRouter()


def get_parking_directory(db: AsyncSession = Depends(get_db_session)) -> ParkingDirectory:
    return ParkingDirectory(db)


@router.post("", response_model=ParkingResponse, status_code=status.HTTP_201_CREATED)
async def create_parking(
    parking_data: ParkingCreate,
    caller: Caller = Depends(get_current_caller),
    directory: ParkingDirectory = Depends(get_parking_directory),
):
    """Register a parking owned by the caller."""
    return await directory.create_parking(caller.id, parking_data)


@router.get("/nearby", response_model=List[ParkingWithDistance])
async def find_nearby_parkings(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in meters"),
    parking_type: Optional[ParkingType] = Query(None, alias="type"),
    directory: ParkingDirectory = Depends(get_parking_directory),
):
    """Find active parkings near a point, nearest first."""
    nearby = await directory.find_nearby(latitude, longitude, radius, parking_type)
    return [
        ParkingWithDistance(
            **ParkingResponse.model_validate(parking).model_dump(),
            distance_meters=round(distance, 1),
        )
        for parking, distance in nearby
    ]


@router.get("/{parking_id}", response_model=ParkingResponse)
async def get_parking(
    parking_id: UUID,
    directory: ParkingDirectory = Depends(get_parking_directory),
):
    """Get a specific parking by ID."""
    return await directory.get_parking(parking_id)


@router.put("/{parking_id}", response_model=ParkingResponse)
async def update_parking(
    parking_id: UUID,
    parking_data: ParkingUpdate,
    caller: Caller = Depends(get_current_caller),
    directory: ParkingDirectory = Depends(get_parking_directory),
):
    """Update a parking. Only the owner or an admin may do so."""
    return await directory.update_parking(caller.id, parking_id, parking_data)


@router.post(
    "/{parking_id}/spots",
    response_model=SpotResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_spot(
    parking_id: UUID,
    spot_data: SpotCreate,
    caller: Caller = Depends(get_current_caller),
    directory: ParkingDirectory = Depends(get_parking_directory),
):
    """Add a spot to a parking."""
    return await directory.create_spot(parking_id, spot_data)


@router.get("/{parking_id}/spots/available", response_model=List[SpotResponse])
async def list_available_spots(
    parking_id: UUID,
    start_time: Optional[datetime] = Query(None),
    end_time: Optional[datetime] = Query(None),
    db: AsyncSession = Depends(get_db_session),
):
    """List available spots, optionally only those free during a window."""
    if (start_time is None) != (end_time is None):
        raise ValidationError("start_time and end_time must be given together")
    if start_time is not None:
        try:
            window = TimeWindow(start_time=start_time, end_time=end_time)
        except ValueError as exc:
            raise ValidationError("end_time must be after start_time") from exc
        start_time, end_time = window.start_time, window.end_time

    return await ReservationEngine(db).available_spots(parking_id, start_time, end_time)
