"""Database models package."""

from podevim.db.base import Base
from podevim.db.models.address import Address
from podevim.db.models.parking import Parking
from podevim.db.models.parking_reservation import ParkingReservation
from podevim.db.models.parking_spot import ParkingSpot
from podevim.db.models.school import School, SchoolClass
from podevim.db.models.student import Student
from podevim.db.models.student_guardian import StudentGuardian
from podevim.db.models.student_pickup import StudentPickup
from podevim.db.models.user import User

__all__ = [
    "Base",
    "Address",
    "Parking",
    "ParkingReservation",
    "ParkingSpot",
    "School",
    "SchoolClass",
    "Student",
    "StudentGuardian",
    "StudentPickup",
    "User",
]
