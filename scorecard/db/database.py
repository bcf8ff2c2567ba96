"""
Database engine and session management.

Two stores: the card store (read/write) and the optional card-set
reference store (read-only). The reference store may share the card
store's database; when no URL is configured it is disabled.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from scorecard.config import settings
from scorecard.models.db import Base
from scorecard.services.reference_db import ReferenceDatabase

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

reference_session_factory: async_sessionmaker[AsyncSession] | None = None
if settings.reference_database_url:
    reference_engine = create_async_engine(
        settings.reference_database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )
    reference_session_factory = async_sessionmaker(
        reference_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a card-store session.

    Commits when the request handler returns; rolls back on database errors.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


def get_reference_database() -> ReferenceDatabase | None:
    """Reference-store accessor, None when no reference URL is configured."""
    if reference_session_factory is None:
        return None
    return ReferenceDatabase(reference_session_factory)


async def init_db() -> None:
    """
    Initialize card-store tables.

    Should be called once at application startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db() -> None:
    """
    Drop all card-store tables.

    WARNING: Destroys all data. Use only for testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
