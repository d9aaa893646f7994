"""initial_schema

Revision ID: 4f2a9c1e7b3d
Revises:
Create Date: 2026-10-19 09:12:40.218411

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4f2a9c1e7b3d"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _enum(name: str, *values: str, length: int = 16) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, length=length, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=True),
        sa.Column(
            "user_type",
            _enum("user_type", "ADMIN", "SCHOOL", "PARENT", "STUDENT", "PARKING_PROVIDER", length=32),
            nullable=False,
        ),
        sa.Column("status", _enum("user_status", "ACTIVE", "INACTIVE", "SUSPENDED"), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "schools",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=True),
        sa.Column("responsible_user_id", sa.Uuid(), nullable=False),
        sa.Column("status", _enum("school_status", "ACTIVE", "INACTIVE", "PENDING"), nullable=False),
        sa.Column("notification_radius", sa.Integer(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["responsible_user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "classes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("school_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("period", _enum("class_period", "MORNING", "AFTERNOON", "FULL_TIME"), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("photo", sa.String(length=512), nullable=True),
        sa.Column("school_id", sa.Uuid(), nullable=False),
        sa.Column("class_id", sa.Uuid(), nullable=False),
        sa.Column(
            "exit_status",
            _enum("exit_status", "AT_SCHOOL", "WAITING_EXIT", "RELEASED", "PICKED_UP"),
            nullable=False,
        ),
        sa.Column("special_needs", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_students_school_id", "students", ["school_id"])

    op.create_table(
        "student_guardians",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("relation", sa.String(length=64), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("can_pickup", sa.Boolean(), nullable=False),
        sa.Column(
            "start_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_id", "user_id", name="uq_student_guardians_student_user"),
    )
    op.create_index(
        "uq_student_guardians_primary",
        "student_guardians",
        ["student_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    op.create_table(
        "student_pickups",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("student_id", sa.Uuid(), nullable=False),
        sa.Column("guardian_id", sa.Uuid(), nullable=False),
        sa.Column("school_id", sa.Uuid(), nullable=False),
        sa.Column(
            "status",
            _enum("pickup_status", "REQUESTED", "RELEASED", "COMPLETED", "CANCELLED"),
            nullable=False,
        ),
        sa.Column("request_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("release_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("pickup_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("wait_time", sa.Integer(), nullable=True),
        sa.Column("staff_id", sa.Uuid(), nullable=True),
        sa.Column("guardian_location", sa.JSON(), nullable=True),
        sa.Column("confirmation_photos", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["guardian_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["staff_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_student_pickups_school_request_time",
        "student_pickups",
        ["school_id", "request_time"],
    )
    op.create_index("ix_student_pickups_guardian_id", "student_pickups", ["guardian_id"])
    # At most one open pickup per student
    op.create_index(
        "uq_student_pickups_active_student",
        "student_pickups",
        ["student_id"],
        unique=True,
        postgresql_where=sa.text("status IN ('REQUESTED', 'RELEASED')"),
    )

    op.create_table(
        "parkings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", _enum("parking_type", "COMMERCIAL", "RESIDENTIAL", "LAND"), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rules", sa.Text(), nullable=True),
        sa.Column(
            "status",
            _enum("parking_status", "ACTIVE", "INACTIVE", "PENDING_APPROVAL", length=24),
            nullable=False,
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_parkings_owner_id", "parkings", ["owner_id"])

    op.create_table(
        "parking_spots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("parking_id", sa.Uuid(), nullable=False),
        sa.Column("identifier", sa.String(length=32), nullable=True),
        sa.Column(
            "type",
            _enum("spot_type", "STANDARD", "ACCESSIBLE", "SENIOR", "ELECTRIC", "MOTORCYCLE"),
            nullable=False,
        ),
        sa.Column("price_minute", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_hour", sa.Numeric(10, 2), nullable=False),
        sa.Column("price_day", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_month", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "status",
            _enum("spot_status", "AVAILABLE", "OCCUPIED", "RESERVED", "UNAVAILABLE", "MAINTENANCE"),
            nullable=False,
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["parking_id"], ["parkings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_parking_spots_parking_id", "parking_spots", ["parking_id"])

    op.create_table(
        "parking_reservations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("spot_id", sa.Uuid(), nullable=False),
        sa.Column("parking_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("entry_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("exit_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "status",
            _enum(
                "reservation_status",
                "SCHEDULED",
                "ACTIVE",
                "COMPLETED",
                "CANCELLED",
                "EXPIRED",
            ),
            nullable=False,
        ),
        sa.Column("estimated_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("final_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("payment_method", sa.String(length=64), nullable=True),
        sa.Column("transaction_id", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["parking_id"], ["parkings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["spot_id"], ["parking_spots.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_parking_reservations_user_id", "parking_reservations", ["user_id"])
    op.create_index(
        "ix_parking_reservations_spot_window",
        "parking_reservations",
        ["spot_id", "start_time", "end_time"],
    )

    op.create_table(
        "addresses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("school_id", sa.Uuid(), nullable=True),
        sa.Column("parking_id", sa.Uuid(), nullable=True),
        sa.Column("line1", sa.String(length=255), nullable=False),
        sa.Column("line2", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=128), nullable=False),
        sa.Column("state", sa.String(length=64), nullable=False),
        sa.Column("postal_code", sa.String(length=32), nullable=False),
        sa.Column("country", sa.String(length=64), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "(CASE WHEN user_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN school_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN parking_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="check_single_owner",
        ),
        sa.ForeignKeyConstraint(["parking_id"], ["parkings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.UniqueConstraint("school_id"),
        sa.UniqueConstraint("parking_id"),
    )


def downgrade() -> None:
    op.drop_table("addresses")

    op.drop_index("ix_parking_reservations_spot_window", table_name="parking_reservations")
    op.drop_index("ix_parking_reservations_user_id", table_name="parking_reservations")
    op.drop_table("parking_reservations")

    op.drop_index("ix_parking_spots_parking_id", table_name="parking_spots")
    op.drop_table("parking_spots")

    op.drop_index("ix_parkings_owner_id", table_name="parkings")
    op.drop_table("parkings")

    op.drop_index("uq_student_pickups_active_student", table_name="student_pickups")
    op.drop_index("ix_student_pickups_guardian_id", table_name="student_pickups")
    op.drop_index("ix_student_pickups_school_request_time", table_name="student_pickups")
    op.drop_table("student_pickups")

    op.drop_index("uq_student_guardians_primary", table_name="student_guardians")
    op.drop_table("student_guardians")

    op.drop_index("ix_students_school_id", table_name="students")
    op.drop_table("students")

    op.drop_table("classes")
    op.drop_table("schools")
    op.drop_table("users")
