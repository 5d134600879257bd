# application_service/infrastructure/database.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _sqlite_foreign_keys_on(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enforce_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite leaves foreign keys unchecked unless each new connection opts in."""
    if engine.dialect.name != "sqlite":
        return
    if not event.contains(engine.sync_engine, "connect", _sqlite_foreign_keys_on):
        event.listen(engine.sync_engine, "connect", _sqlite_foreign_keys_on)


class Database:
    def __init__(self, engine: AsyncEngine):
        enforce_foreign_keys(engine)
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_tables(self) -> None:
        import application_service.infrastructure.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def connect(self) -> None:
        await self.create_tables()

    async def disconnect(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            yield session


def create_database(engine: AsyncEngine) -> Database:
    return Database(engine)
