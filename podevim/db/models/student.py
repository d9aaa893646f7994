"""Student model."""

from uuid import uuid4

from sqlalchemy import Column, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import ExitStatus
from podevim.db.types import UTCDateTime


class Student(Base):
    """Student enrolled in a school class."""

    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    photo = Column(String(512), nullable=True)
    school_id = Column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    class_id = Column(
        Uuid,
        ForeignKey("classes.id", ondelete="RESTRICT"),
        nullable=False,
    )
    # Only pickup workflow transitions change this
    exit_status = Column(
        Enum(ExitStatus, name="exit_status", native_enum=False, length=16, create_constraint=True),
        default=ExitStatus.AT_SCHOOL,
        nullable=False,
    )
    special_needs = Column(Text, nullable=True)
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Student(id={self.id}, name={self.name}, exit_status={self.exit_status})>"
