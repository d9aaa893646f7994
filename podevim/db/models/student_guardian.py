"""StudentGuardian model."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, UniqueConstraint, Uuid, text
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.types import UTCDateTime


class StudentGuardian(Base):
    """Link between a student and an adult allowed to act for them."""

    __tablename__ = "student_guardians"

    id = Column(Uuid, primary_key=True, default=uuid4)
    student_id = Column(
        Uuid,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    relation = Column(String(64), nullable=False)  # mother, father, grandparent...
    is_primary = Column(Boolean, default=False, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    can_pickup = Column(Boolean, default=True, nullable=False)
    start_date = Column(UTCDateTime, server_default=func.now(), nullable=False)
    end_date = Column(UTCDateTime, nullable=True)  # temporary authorizations
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("student_id", "user_id", name="uq_student_guardians_student_user"),
        Index(
            "uq_student_guardians_primary",
            "student_id",
            unique=True,
            postgresql_where=text("is_primary"),
            sqlite_where=text("is_primary = 1"),
        ),
    )

    def __repr__(self):
        return (
            f"<StudentGuardian(student_id={self.student_id}, user_id={self.user_id}, "
            f"can_pickup={self.can_pickup})>"
        )
