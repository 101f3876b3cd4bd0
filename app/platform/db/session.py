from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.platform.db.base import Base
from app.platform.logger import get_logger

logger = get_logger("database")


def build_engine(database_url: str) -> AsyncEngine:
    options = {"echo": False, "future": True, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_recycle=1800,
            pool_size=20,
            max_overflow=30,  # (burst capacity)
            pool_timeout=30,
        )
    return create_async_engine(database_url, **options)


class Database:
    """Process-wide engine and session factory, created once at startup."""

    def __init__(self, database_url: str):
        self.engine = build_engine(database_url)
        self.SessionLocal = async_sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False, autocommit=False
        )

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.db.SessionLocal() as session:
        yield session
