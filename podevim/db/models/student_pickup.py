"""StudentPickup model."""

from uuid import uuid4

from sqlalchemy import JSON, Column, Enum, ForeignKey, Index, Integer, Text, Uuid, text
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import PickupStatus
from podevim.db.types import UTCDateTime


class StudentPickup(Base):
    """One pickup attempt for a student, from request to completion."""

    __tablename__ = "student_pickups"

    id = Column(Uuid, primary_key=True, default=uuid4)
    student_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    guardian_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    school_id = Column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
    )
    status = Column(
        Enum(PickupStatus, name="pickup_status", native_enum=False, length=16, create_constraint=True),
        default=PickupStatus.REQUESTED,
        nullable=False,
    )

    # Time information
    request_time = Column(UTCDateTime, nullable=False)
    release_time = Column(UTCDateTime, nullable=True)
    pickup_time = Column(UTCDateTime, nullable=True)
    wait_time = Column(Integer, nullable=True)  # minutes between request and pickup

    staff_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    # GeoJSON point: {"type": "Point", "coordinates": [lon, lat]}
    guardian_location = Column(JSON, nullable=True)
    confirmation_photos = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)

    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_student_pickups_school_request_time", "school_id", "request_time"),
        Index("ix_student_pickups_guardian_id", "guardian_id"),
        # At most one open pickup per student
        Index(
            "uq_student_pickups_active_student",
            "student_id",
            unique=True,
            postgresql_where=text("status IN ('REQUESTED', 'RELEASED')"),
            sqlite_where=text("status IN ('REQUESTED', 'RELEASED')"),
        ),
    )

    def __repr__(self):
        return f"<StudentPickup(id={self.id}, student_id={self.student_id}, status={self.status})>"
