from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from myauth.errors import StorageError


class Base(DeclarativeBase):
    """Declarative base for all tables; Core creates them from Base.metadata on startup."""


@asynccontextmanager
async def transaction(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Open a session, commit on success, roll back on failure.

    Constraint violations surface as StorageError so callers never see driver exceptions.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise StorageError(str(e.orig)) from e
        except Exception:
            await session.rollback()
            raise
