"""Database engine, session factory and the atomic unit of work."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from podevim.config import settings


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for one request."""
    async with async_session_maker() as session:
        yield session


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Run a block as one all-or-nothing unit.

    Commits when the block finishes, rolls back when anything propagates
    out of it, then re-raises.
    """
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
