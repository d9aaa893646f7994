"""ParkingSpot model."""

from uuid import uuid4

from sqlalchemy import Column, Enum, ForeignKey, Numeric, String, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import SpotStatus, SpotType
from podevim.db.types import UTCDateTime


class ParkingSpot(Base):
    """Bookable spot inside a parking, with tiered prices."""

    __tablename__ = "parking_spots"

    id = Column(Uuid, primary_key=True, default=uuid4)
    parking_id = Column(
        Uuid,
        ForeignKey("parkings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    identifier = Column(String(32), nullable=True)  # e.g. "A-12"
    type = Column(
        Enum(SpotType, name="spot_type", native_enum=False, length=16, create_constraint=True),
        default=SpotType.STANDARD,
        nullable=False,
    )

    # Prices
    price_minute = Column(Numeric(10, 2), nullable=True)
    price_hour = Column(Numeric(10, 2), nullable=False)
    price_day = Column(Numeric(10, 2), nullable=True)
    price_month = Column(Numeric(10, 2), nullable=True)

    status = Column(
        Enum(SpotStatus, name="spot_status", native_enum=False, length=16, create_constraint=True),
        default=SpotStatus.AVAILABLE,
        nullable=False,
    )
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<ParkingSpot(id={self.id}, identifier={self.identifier}, status={self.status})>"
