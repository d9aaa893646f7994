"""School and class models."""

from uuid import uuid4

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import ClassPeriod, SchoolStatus
from podevim.db.types import UTCDateTime


class School(Base):
    """A school whose students can be picked up through the app."""

    __tablename__ = "schools"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone_number = Column(String(32), nullable=True)
    responsible_user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    status = Column(
        Enum(SchoolStatus, name="school_status", native_enum=False, length=16, create_constraint=True),
        default=SchoolStatus.ACTIVE,
        nullable=False,
    )
    notification_radius = Column(Integer, default=500, nullable=False)  # meters
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<School(id={self.id}, name={self.name})>"


class SchoolClass(Base):
    """A class (group of students) within a school."""

    __tablename__ = "classes"

    id = Column(Uuid, primary_key=True, default=uuid4)
    school_id = Column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(String(255), nullable=False)
    period = Column(
        Enum(ClassPeriod, name="class_period", native_enum=False, length=16, create_constraint=True),
        nullable=False,
    )
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<SchoolClass(id={self.id}, name={self.name})>"
