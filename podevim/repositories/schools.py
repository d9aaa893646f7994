"""School and class repositories."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podevim.db.models import Address, School, SchoolClass
from podevim.db.models.enums import SchoolStatus


class SchoolRepository:
    """Queries and writes on schools."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, school_id: UUID) -> Optional[School]:
        result = await self.session.execute(
            select(School)
            .where(School.id == school_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def search(
        self,
        name: Optional[str] = None,
        status: Optional[SchoolStatus] = None,
        responsible_user_id: Optional[UUID] = None,
    ) -> List[School]:
        query = select(School)
        if name:
            query = query.where(School.name.ilike(f"%{name}%"))
        if status:
            query = query.where(School.status == status)
        if responsible_user_id:
            query = query.where(School.responsible_user_id == responsible_user_id)
        result = await self.session.execute(query.order_by(School.name))
        return list(result.scalars().all())

    async def add(self, school: School, address: Optional[Address] = None) -> School:
        self.session.add(school)
        await self.session.flush()
        if address is not None:
            address.school_id = school.id
            self.session.add(address)
            await self.session.flush()
        await self.session.refresh(school)
        return school

    async def update(self, school_id: UUID, values: Dict[str, Any]) -> Optional[School]:
        await self.session.execute(
            update(School)
            .where(School.id == school_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return await self.get(school_id)


class ClassRepository:
    """Queries and writes on school classes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_school(self, class_id: UUID, school_id: UUID) -> Optional[SchoolClass]:
        result = await self.session.execute(
            select(SchoolClass).where(
                SchoolClass.id == class_id,
                SchoolClass.school_id == school_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_school(self, school_id: UUID) -> List[SchoolClass]:
        result = await self.session.execute(
            select(SchoolClass)
            .where(SchoolClass.school_id == school_id)
            .order_by(SchoolClass.name)
        )
        return list(result.scalars().all())

    async def add(self, school_class: SchoolClass) -> SchoolClass:
        self.session.add(school_class)
        await self.session.flush()
        await self.session.refresh(school_class)
        return school_class
