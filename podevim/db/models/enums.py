"""Status and type enumerations stored on models."""

import enum


class UserType(str, enum.Enum):
    ADMIN = "ADMIN"
    SCHOOL = "SCHOOL"
    PARENT = "PARENT"
    STUDENT = "STUDENT"
    PARKING_PROVIDER = "PARKING_PROVIDER"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class SchoolStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"


class ClassPeriod(str, enum.Enum):
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    FULL_TIME = "FULL_TIME"


class ExitStatus(str, enum.Enum):
    """Where a student is in the end-of-day exit flow."""

    AT_SCHOOL = "AT_SCHOOL"
    WAITING_EXIT = "WAITING_EXIT"
    RELEASED = "RELEASED"
    PICKED_UP = "PICKED_UP"


class PickupStatus(str, enum.Enum):
    REQUESTED = "REQUESTED"
    RELEASED = "RELEASED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


ACTIVE_PICKUP_STATUSES = (PickupStatus.REQUESTED, PickupStatus.RELEASED)


class ParkingType(str, enum.Enum):
    COMMERCIAL = "COMMERCIAL"
    RESIDENTIAL = "RESIDENTIAL"
    LAND = "LAND"


class ParkingStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING_APPROVAL = "PENDING_APPROVAL"


class SpotType(str, enum.Enum):
    STANDARD = "STANDARD"
    ACCESSIBLE = "ACCESSIBLE"
    SENIOR = "SENIOR"
    ELECTRIC = "ELECTRIC"
    MOTORCYCLE = "MOTORCYCLE"


class SpotStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    UNAVAILABLE = "UNAVAILABLE"
    MAINTENANCE = "MAINTENANCE"


class ReservationStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    # Set by an external sweeper; nothing in this service drives it.
    EXPIRED = "EXPIRED"


BLOCKING_RESERVATION_STATUSES = (ReservationStatus.SCHEDULED, ReservationStatus.ACTIVE)
