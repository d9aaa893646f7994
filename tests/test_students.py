"""Tests for student enrollment and lookups."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import School, SchoolClass, Student, StudentGuardian
from podevim.db.models.enums import ClassPeriod, ExitStatus, UserType
from podevim.exceptions import ForbiddenError, NotFoundError
from podevim.schemas.student import StudentCreate, StudentUpdate
from podevim.services.students import StudentService


@pytest.fixture
async def other_class(db_session: AsyncSession, school) -> SchoolClass:
    school_class = SchoolClass(school_id=school.id, name="4B", period=ClassPeriod.AFTERNOON)
    db_session.add(school_class)
    await db_session.commit()
    await db_session.refresh(school_class)
    return school_class


@pytest.mark.asyncio
async def test_create_student_with_guardians(
    db_session: AsyncSession,
    service_session: AsyncSession,
    school,
    school_class,
    staff,
    parent,
    make_user,
):
    father = await make_user(UserType.PARENT, name="Father")
    service = StudentService(service_session)
    student = await service.create_student(
        staff.id,
        StudentCreate(
            name="Ana Souza",
            school_id=school.id,
            class_id=school_class.id,
            special_needs="Peanut allergy",
            guardians=[
                {"user_id": parent.id, "relation": "mother", "is_primary": True},
                {"user_id": father.id, "relation": "father", "can_pickup": False},
            ],
        ),
    )

    assert student.exit_status == ExitStatus.AT_SCHOOL
    assert student.special_needs == "Peanut allergy"

    result = await db_session.execute(
        select(StudentGuardian)
        .where(StudentGuardian.student_id == student.id)
        .order_by(StudentGuardian.relation)
    )
    links = result.scalars().all()
    assert [(link.relation, link.is_primary, link.can_pickup) for link in links] == [
        ("father", False, False),
        ("mother", True, True),
    ]
    assert all(link.verified is False for link in links)


@pytest.mark.asyncio
async def test_create_student_with_unknown_guardian_stores_nothing(
    db_session: AsyncSession, service_session: AsyncSession, school, school_class, staff
):
    service = StudentService(service_session)
    with pytest.raises(NotFoundError):
        await service.create_student(
            staff.id,
            StudentCreate(
                name="Ana Souza",
                school_id=school.id,
                class_id=school_class.id,
                guardians=[{"user_id": staff.id, "relation": "uncle"}],
            ),
        )

    assert (await db_session.execute(select(Student))).scalars().all() == []


@pytest.mark.asyncio
async def test_create_student_class_of_other_school(
    service_session: AsyncSession, db_session: AsyncSession, school, staff
):
    other_school = School(name="Outra", email="outra@example.com", responsible_user_id=staff.id)
    db_session.add(other_school)
    await db_session.commit()
    foreign_class = SchoolClass(school_id=other_school.id, name="1A", period=ClassPeriod.MORNING)
    db_session.add(foreign_class)
    await db_session.commit()

    service = StudentService(service_session)
    with pytest.raises(NotFoundError):
        await service.create_student(
            staff.id,
            StudentCreate(name="Ana", school_id=school.id, class_id=foreign_class.id),
        )


@pytest.mark.asyncio
async def test_create_student_requires_staff(
    service_session: AsyncSession, school, school_class, parent
):
    service = StudentService(service_session)
    with pytest.raises(ForbiddenError):
        await service.create_student(
            parent.id,
            StudentCreate(name="Ana", school_id=school.id, class_id=school_class.id),
        )


def test_student_guardians_must_be_distinct():
    user_id = uuid4()
    with pytest.raises(ValidationError):
        StudentCreate(
            name="Ana",
            school_id=uuid4(),
            class_id=uuid4(),
            guardians=[
                {"user_id": user_id, "relation": "mother"},
                {"user_id": user_id, "relation": "aunt"},
            ],
        )


def test_student_has_at_most_one_primary_guardian():
    with pytest.raises(ValidationError):
        StudentCreate(
            name="Ana",
            school_id=uuid4(),
            class_id=uuid4(),
            guardians=[
                {"user_id": uuid4(), "relation": "mother", "is_primary": True},
                {"user_id": uuid4(), "relation": "father", "is_primary": True},
            ],
        )


@pytest.mark.asyncio
async def test_update_student(service_session: AsyncSession, student, other_class, staff):
    service = StudentService(service_session)
    updated = await service.update_student(
        staff.id, student.id, StudentUpdate(class_id=other_class.id, photo="ana.jpg")
    )
    assert updated.class_id == other_class.id
    assert updated.photo == "ana.jpg"
    assert updated.name == student.name
    assert updated.exit_status == ExitStatus.AT_SCHOOL


@pytest.mark.asyncio
async def test_update_student_rejects_class_of_other_school(
    service_session: AsyncSession, student, staff
):
    service = StudentService(service_session)
    with pytest.raises(NotFoundError):
        await service.update_student(staff.id, student.id, StudentUpdate(class_id=uuid4()))
    with pytest.raises(NotFoundError):
        await service.update_student(staff.id, uuid4(), StudentUpdate(name="Ghost"))


@pytest.mark.asyncio
async def test_list_students(
    service_session: AsyncSession, school, school_class, other_class, make_student, db_session
):
    await make_student("Bruno")
    await make_student("Ana")
    carla = await make_student("Carla")
    carla.class_id = other_class.id
    carla.exit_status = ExitStatus.WAITING_EXIT
    await db_session.commit()

    service = StudentService(service_session)
    everyone = await service.list_school_students(school.id)
    assert [s.name for s in everyone] == ["Ana", "Bruno", "Carla"]
    assert [s.name for s in await service.list_school_students(school.id, name="an")] == ["Ana"]
    assert [
        s.name for s in await service.list_school_students(school.id, class_id=other_class.id)
    ] == ["Carla"]
    assert [
        s.name
        for s in await service.list_school_students(school.id, exit_status=ExitStatus.WAITING_EXIT)
    ] == ["Carla"]
    assert [s.name for s in await service.list_class_students(school_class.id)] == ["Ana", "Bruno"]


@pytest.mark.asyncio
async def test_enrolled_student_can_be_picked_up(
    async_client: AsyncClient, auth_headers, school, staff, parent
):
    response = await async_client.post(
        f"/api/v1/schools/{school.id}/classes",
        json={"name": "2A", "period": "FULL_TIME"},
        headers=auth_headers(staff),
    )
    assert response.status_code == 201
    class_id = response.json()["id"]

    response = await async_client.post(
        "/api/v1/students",
        json={
            "name": "Davi Lima",
            "school_id": str(school.id),
            "class_id": class_id,
            "guardians": [{"user_id": str(parent.id), "relation": "mother", "is_primary": True}],
        },
        headers=auth_headers(staff),
    )
    assert response.status_code == 201
    student = response.json()
    assert student["exit_status"] == "AT_SCHOOL"

    response = await async_client.post(
        "/api/v1/pickups",
        json={"student_id": student["id"]},
        headers=auth_headers(parent),
    )
    assert response.status_code == 201

    response = await async_client.get(
        f"/api/v1/students/{student['id']}", headers=auth_headers(staff)
    )
    assert response.json()["exit_status"] == "WAITING_EXIT"

    response = await async_client.get(
        f"/api/v1/students/school/{school.id}",
        params={"exit_status": "WAITING_EXIT"},
        headers=auth_headers(staff),
    )
    assert [s["id"] for s in response.json()] == [student["id"]]

    response = await async_client.get(
        f"/api/v1/students/class/{class_id}", headers=auth_headers(staff)
    )
    assert [s["name"] for s in response.json()] == ["Davi Lima"]


@pytest.mark.asyncio
async def test_update_student_endpoint_ignores_exit_status(
    async_client: AsyncClient, auth_headers, student, staff
):
    response = await async_client.put(
        f"/api/v1/students/{student.id}",
        json={"name": "Lucas S. Silva", "exit_status": "PICKED_UP"},
        headers=auth_headers(staff),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Lucas S. Silva"
    assert data["exit_status"] == "AT_SCHOOL"

    response = await async_client.put(
        f"/api/v1/students/{student.id}",
        json={"class_id": None},
        headers=auth_headers(staff),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_unknown_student(async_client: AsyncClient, auth_headers, staff):
    response = await async_client.get(f"/api/v1/students/{uuid4()}", headers=auth_headers(staff))
    assert response.status_code == 404
    assert response.json() == {"error": "Student not found"}
