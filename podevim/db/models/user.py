"""User model."""

from uuid import uuid4

from sqlalchemy import Column, Enum, String, Uuid
from sqlalchemy.sql import func

from podevim.db.base import Base
from podevim.db.models.enums import UserStatus, UserType
from podevim.db.types import UTCDateTime


class User(Base):
    """Identity projection of an account.

    Credentials and tokens live in the identity store; this table only keeps
    what the workflows need to make decisions.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone_number = Column(String(32), nullable=True)
    user_type = Column(
        Enum(UserType, name="user_type", native_enum=False, length=32, create_constraint=True),
        nullable=False,
    )
    status = Column(
        Enum(UserStatus, name="user_status", native_enum=False, length=16, create_constraint=True),
        default=UserStatus.ACTIVE,
        nullable=False,
    )
    created_at = Column(
        UTCDateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, type={self.user_type})>"
