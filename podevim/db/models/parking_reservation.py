"""ParkingReservation model."""

from uuid import uuid4

from sqlalchemy import Column, Enum, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import ReservationStatus
from podevim.db.types import UTCDateTime


class ParkingReservation(Base):
    """Booking of a spot for a time window."""

    __tablename__ = "parking_reservations"

    id = Column(Uuid, primary_key=True, default=uuid4)
    spot_id = Column(
        Uuid,
        ForeignKey("parking_spots.id", ondelete="CASCADE"),
        nullable=False,
    )
    parking_id = Column(
        Uuid,
        ForeignKey("parkings.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Booked window and actual usage
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    entry_time = Column(UTCDateTime, nullable=True)
    exit_time = Column(UTCDateTime, nullable=True)

    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            native_enum=False,
            length=16,
            create_constraint=True,
        ),
        default=ReservationStatus.SCHEDULED,
        nullable=False,
    )
    estimated_price = Column(Numeric(10, 2), nullable=False)
    final_price = Column(Numeric(10, 2), nullable=True)
    payment_method = Column(String(64), nullable=True)
    transaction_id = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_parking_reservations_spot_window", "spot_id", "start_time", "end_time"),
    )

    def __repr__(self):
        return f"<ParkingReservation(id={self.id}, spot_id={self.spot_id}, status={self.status})>"
