"""Parking model."""

from uuid import uuid4

from sqlalchemy import Column, Enum, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import ParkingStatus, ParkingType
from podevim.db.types import UTCDateTime


class Parking(Base):
    """Parking facility run by a parking provider."""

    __tablename__ = "parkings"

    id = Column(Uuid, primary_key=True, default=uuid4)
    owner_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    type = Column(
        Enum(ParkingType, name="parking_type", native_enum=False, length=16, create_constraint=True),
        nullable=False,
    )
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    rules = Column(Text, nullable=True)
    status = Column(
        Enum(ParkingStatus, name="parking_status", native_enum=False, length=24, create_constraint=True),
        default=ParkingStatus.PENDING_APPROVAL,
        nullable=False,
    )
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Parking(id={self.id}, name={self.name}, status={self.status})>"
