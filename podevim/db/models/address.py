"""Address model."""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, String, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.types import UTCDateTime


class Address(Base):
    """Postal address attached to exactly one user, school or parking."""

    __tablename__ = "addresses"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
    )
    school_id = Column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
    )
    parking_id = Column(
        Uuid,
        ForeignKey("parkings.id", ondelete="CASCADE"),
        nullable=True,
        unique=True,
    )

    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255), nullable=True)
    city = Column(String(128), nullable=False)
    state = Column(String(64), nullable=False)
    postal_code = Column(String(32), nullable=False)
    country = Column(String(64), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN user_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN school_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN parking_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="check_single_owner",
        ),
    )

    def __repr__(self):
        return f"<Address(id={self.id}, city={self.city})>"
