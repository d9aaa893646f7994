"""Pytest configuration and fixtures."""

import os
from decimal import Decimal
from typing import AsyncGenerator, Callable, Dict
from uuid import uuid4

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Settings are read on import; the signing key has no default
os.environ.setdefault("JWT_SECRET", "podevim-test-signing-key-not-for-production")

from podevim.config import settings  # noqa: E402
from podevim.db.base import Base  # noqa: E402
from podevim.db.models import (  # noqa: E402
    Parking,
    ParkingSpot,
    School,
    SchoolClass,
    Student,
    StudentGuardian,
    User,
)
from podevim.db.models.enums import ClassPeriod, ParkingStatus, ParkingType, UserType  # noqa: E402
from podevim.db.session import get_db  # noqa: E402
from podevim.main import app  # noqa: E402

# Set TEST_DATABASE_URL to run against PostgreSQL; defaults to a SQLite file per test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a fresh schema for each test."""
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_maker(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a clean database session for each test."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def service_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session for the code under test.

    Kept apart from ``db_session`` so a rolled back operation does not expire
    the objects the fixtures created.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def async_client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with one session per request."""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Build a bearer header for a user."""

    def _auth_headers(user: User) -> Dict[str, str]:
        token = jwt.encode(
            {"id": str(user.id), "email": user.email, "user_type": user.user_type.value},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


async def _save(session: AsyncSession, obj):
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


@pytest.fixture
def make_user(db_session: AsyncSession):
    async def _make_user(user_type: UserType = UserType.PARENT, name: str = "Test User") -> User:
        return await _save(
            db_session,
            User(name=name, email=f"{uuid4().hex[:12]}@example.com", user_type=user_type),
        )

    return _make_user


@pytest.fixture
async def staff(make_user) -> User:
    return await make_user(UserType.SCHOOL, name="School Office")


@pytest.fixture
async def parent(make_user) -> User:
    return await make_user(UserType.PARENT, name="Maria Silva")


@pytest.fixture
async def school(db_session: AsyncSession, staff: User) -> School:
    return await _save(
        db_session,
        School(name="Escola Central", email="central@example.com", responsible_user_id=staff.id),
    )


@pytest.fixture
async def school_class(db_session: AsyncSession, school: School) -> SchoolClass:
    return await _save(
        db_session,
        SchoolClass(school_id=school.id, name="3A", period=ClassPeriod.MORNING),
    )


@pytest.fixture
def make_student(db_session: AsyncSession, school: School, school_class: SchoolClass):
    async def _make_student(name: str = "Lucas Silva") -> Student:
        return await _save(
            db_session,
            Student(name=name, school_id=school.id, class_id=school_class.id),
        )

    return _make_student


@pytest.fixture
async def student(make_student) -> Student:
    return await make_student()


@pytest.fixture
def link_guardian(db_session: AsyncSession):
    async def _link_guardian(student: Student, user: User, **overrides) -> StudentGuardian:
        values = {"relation": "mother", "is_primary": False, "verified": False, "can_pickup": True}
        values.update(overrides)
        return await _save(
            db_session,
            StudentGuardian(student_id=student.id, user_id=user.id, **values),
        )

    return _link_guardian


@pytest.fixture
async def guardian_link(link_guardian, student: Student, parent: User) -> StudentGuardian:
    return await link_guardian(student, parent, is_primary=True)


@pytest.fixture
async def provider(make_user) -> User:
    return await make_user(UserType.PARKING_PROVIDER, name="Estacionamento Bom")


@pytest.fixture
async def driver(make_user) -> User:
    return await make_user(UserType.PARENT, name="Driver")


@pytest.fixture
def make_parking(db_session: AsyncSession, provider: User):
    async def _make_parking(
        latitude: float = -23.5505,
        longitude: float = -46.6333,
        status: ParkingStatus = ParkingStatus.ACTIVE,
        parking_type: ParkingType = ParkingType.COMMERCIAL,
        name: str = "Centro Parking",
    ) -> Parking:
        return await _save(
            db_session,
            Parking(
                owner_id=provider.id,
                name=name,
                type=parking_type,
                latitude=latitude,
                longitude=longitude,
                status=status,
            ),
        )

    return _make_parking


@pytest.fixture
async def parking(make_parking) -> Parking:
    return await make_parking()


@pytest.fixture
def make_spot(db_session: AsyncSession, parking: Parking):
    async def _make_spot(
        identifier: str = "A-1",
        price_hour: str = "10.00",
        price_day=None,
        price_month=None,
    ) -> ParkingSpot:
        return await _save(
            db_session,
            ParkingSpot(
                parking_id=parking.id,
                identifier=identifier,
                price_hour=Decimal(price_hour),
                price_day=Decimal(price_day) if price_day is not None else None,
                price_month=Decimal(price_month) if price_month is not None else None,
            ),
        )

    return _make_spot


@pytest.fixture
async def spot(make_spot) -> ParkingSpot:
    return await make_spot(price_day="80.00")
