from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.pool import NullPool
from typing import AsyncGenerator

from mini_jira.core import get_settings

settings = get_settings()


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Cascading deletes depend on SQLite enforcing foreign keys per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    poolclass=NullPool,
)

if engine.dialect.name == "sqlite":
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

async_session_factory = async_sessionmaker(
    engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


# Dependency for FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    async with engine.begin() as conn:
        # Import here so every model is registered on the metadata
        from mini_jira.db import models  # noqa: F401
        from mini_jira.db.base import Base
        await conn.run_sync(Base.metadata.create_all)
