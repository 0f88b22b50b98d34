"""Process-wide connection pool with a start/stop lifecycle and background reconnect."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from school_admin.core.config import Settings
from school_admin.core.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; cascades depend on it.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class ConnectionManager:
    """
    Owns the engine (and therefore the pool) for one application instance.

    start() connects once; on failure it schedules a retry task with a fixed
    delay instead of raising, and every acquire() fails fast with
    StoreConnectionError until a connection succeeds. stop() cancels the retry
    task and disposes of the pool.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 5,
        pool_timeout: float = 30.0,
        pool_recycle: int = 300,
        retry_delay: float = 5.0,
        max_retries: int = 0,
    ) -> None:
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.retry_delay = retry_delay
        self.max_retries = max_retries

        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._retry_task: Optional[asyncio.Task] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionManager":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            retry_delay=settings.db_retry_delay,
            max_retries=settings.db_max_retries,
        )

    @property
    def is_available(self) -> bool:
        return self._sessionmaker is not None

    @property
    def is_retrying(self) -> bool:
        return self._retry_task is not None and not self._retry_task.done()

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreConnectionError("store unavailable")
        return self._engine

    def _engine_kwargs(self) -> Dict[str, Any]:
        # pool_pre_ping: check connection is alive before use.
        # pool_recycle: discard connections after this many seconds.
        kwargs: Dict[str, Any] = {"echo": False, "pool_pre_ping": True}
        if self.database_url.startswith("sqlite"):
            return kwargs
        kwargs.update(
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_timeout=self.pool_timeout,
            pool_recycle=self.pool_recycle,
        )
        return kwargs

    async def _connect(self) -> None:
        engine = create_async_engine(self.database_url, **self._engine_kwargs())
        if engine.dialect.name == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            raise
        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(
            "Store connected (%s, pool %d+%d)",
            engine.url.render_as_string(hide_password=True),
            self.pool_size,
            self.max_overflow,
        )

    async def start(self) -> None:
        if self._engine is not None or self.is_retrying:
            return
        try:
            await self._connect()
        except (OSError, SQLAlchemyError) as e:
            logger.warning("Store connection failed: %s; retrying every %ss", e, self.retry_delay)
            self._retry_task = asyncio.create_task(self._retry_loop())

    async def _retry_loop(self) -> None:
        attempt = 0
        while self._engine is None:
            await asyncio.sleep(self.retry_delay)
            attempt += 1
            try:
                await self._connect()
            except Exception as e:
                if self.max_retries and attempt >= self.max_retries:
                    logger.error("Store still unavailable after %d retries, giving up", attempt)
                    return
                logger.warning("Store connection retry %d failed: %s", attempt, e)

    async def stop(self) -> None:
        if self._retry_task is not None:
            self._retry_task.cancel()
            try:
                await self._retry_task
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.exception("Store retry task failed")
            self._retry_task = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info("Store connections closed")

    async def acquire(self) -> AsyncSession:
        """Check out a unit of work. The pooled connection is taken on first use."""
        if self._sessionmaker is None:
            raise StoreConnectionError("store unavailable")
        return self._sessionmaker()

    async def release(self, session: AsyncSession) -> None:
        await session.close()

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[AsyncSession]:
        session = await self.acquire()
        try:
            yield session
        finally:
            await self.release(session)
