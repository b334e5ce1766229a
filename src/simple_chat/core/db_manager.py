from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.exc import DatabaseError, IntegrityError
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import os

from simple_chat.config import Config
from .database import Base
from .exceptions import StoreUnavailable


class DatabaseManager:
    """
    Owns the async SQLite engine and hands out sessions.

    A session commits when its block exits cleanly and rolls back otherwise.
    Engine-level failures (missing or unreadable database file, locked
    database, broken schema) are raised as StoreUnavailable so callers never
    deal with driver exceptions.
    """
    def __init__(self, config: Config, logger: logging.Logger | None = None):
        self.config = config
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self._logger = logger or logging.getLogger(__name__)

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.config.db.path}"

    async def initialize(self):
        directory = os.path.dirname(self.config.db.path)
        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                self._logger.error("Cannot create database directory %s: %s", directory, e)
                raise StoreUnavailable(f"Chat storage is unavailable: {e}") from e

        self.engine = create_async_engine(
            url=self.url,
            echo=self.config.db.echo,
        )

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._logger.debug("Database engine created for %s", self.config.db.path)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if not self.engine:
            await self.initialize()

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise
            except DatabaseError as e:
                await session.rollback()
                raise StoreUnavailable(f"Chat storage is unavailable: {e.orig}") from e
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self):
        if not self.engine:
            await self.initialize()

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except DatabaseError as e:
            self._logger.error("Error creating tables in %s: %s", self.config.db.path, e)
            raise StoreUnavailable(f"Chat storage is unavailable: {e.orig}") from e

    async def close(self):
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
