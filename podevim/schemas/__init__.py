"""Schemas package."""

from podevim.schemas.common import AddressCreate, Coordinates, ErrorResponse, PartialUpdate
from podevim.schemas.parking import (
    ParkingCreate,
    ParkingResponse,
    ParkingUpdate,
    ParkingWithDistance,
    SpotCreate,
    SpotResponse,
    TimeWindow,
)
from podevim.schemas.pickup import (
    PickupCancel,
    PickupConfirm,
    PickupRelease,
    PickupRequestCreate,
    PickupResponse,
)
from podevim.schemas.reservation import (
    ReservationCancel,
    ReservationCheckOut,
    ReservationCreate,
    ReservationResponse,
)
from podevim.schemas.school import (
    ClassCreate,
    ClassResponse,
    SchoolCreate,
    SchoolResponse,
    SchoolUpdate,
)
from podevim.schemas.student import (
    GuardianCreate,
    GuardianResponse,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "AddressCreate",
    "ClassCreate",
    "ClassResponse",
    "Coordinates",
    "ErrorResponse",
    "GuardianCreate",
    "GuardianResponse",
    "ParkingCreate",
    "ParkingResponse",
    "ParkingUpdate",
    "ParkingWithDistance",
    "PartialUpdate",
    "PickupCancel",
    "PickupConfirm",
    "PickupRelease",
    "PickupRequestCreate",
    "PickupResponse",
    "ReservationCancel",
    "ReservationCheckOut",
    "ReservationCreate",
    "ReservationResponse",
    "SchoolCreate",
    "SchoolResponse",
    "SchoolUpdate",
    "SpotCreate",
    "SpotResponse",
    "StudentCreate",
    "StudentResponse",
    "StudentUpdate",
    "TimeWindow",
]
