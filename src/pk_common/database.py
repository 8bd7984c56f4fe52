"""PostgreSQL engine and per-request sessions.

Every balance, listing and asset row lives here. The buy path takes
SELECT ... FOR UPDATE locks on the listing and asset rows, so a request holds
its pooled connection for the whole transaction; size the pool for the number
of concurrent purchases, not for the number of HTTP workers.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the reference ORM models; the repositories use raw SQL."""


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# expire_on_commit=False: services read columns back after commit to build responses.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request. Services commit or roll back; this only closes."""
    async with async_session_factory() as session:
        yield session
