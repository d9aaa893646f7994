"""Typed query functions, one repository per aggregate."""

from podevim.repositories.addresses import AddressRepository
from podevim.repositories.parkings import ParkingRepository, SpotRepository
from podevim.repositories.pickups import PickupRepository, PickupWithStudent
from podevim.repositories.reservations import ReservationRepository, ReservationWithSpot
from podevim.repositories.schools import ClassRepository, SchoolRepository
from podevim.repositories.students import GuardianRepository, StudentRepository
from podevim.repositories.users import UserRepository

__all__ = [
    "AddressRepository",
    "ClassRepository",
    "GuardianRepository",
    "ParkingRepository",
    "PickupRepository",
    "PickupWithStudent",
    "ReservationRepository",
    "ReservationWithSpot",
    "SchoolRepository",
    "SpotRepository",
    "StudentRepository",
    "UserRepository",
]
