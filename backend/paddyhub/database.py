"""
PaddyHub Backend: Document Store Adapters
=========================================

What:  One async SQLAlchemy engine + session factory per data domain.
Why:   Car arrivals, QR scans and stock entries are independent collections
       living in separate databases; nothing relates one to another.
How:   A `DocumentStore` wraps an engine, a session factory and the metadata
       of the tables it owns. The module-level `stores` registry holds the
       three live instances, and the `get_*_session` dependencies hand out
       per-request sessions from them.

Session lifecycle (per request):
    1. A session is opened from the store's factory
    2. The route handler runs its single logical operation
    3. Success commits, any exception rolls back, the session always closes

Connection Pooling:
    Each store keeps its own pool (db_pool_size + db_max_overflow). SQLite
    URLs (used by the test-suite) skip the sizing arguments because that
    dialect manages its own pool.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import MetaData, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from paddyhub.config import settings

logger = logging.getLogger(__name__)


# ── Declarative Bases ─────────────────────────────────────────────────────
# One base per store so create_all() and alembic only ever see the tables
# belonging to that database.
class CarBase(DeclarativeBase):
    """Tables of the car-arrival database."""


class QrBase(DeclarativeBase):
    """Tables of the QR scanner database."""


class StockBase(DeclarativeBase):
    """Tables of the stock database."""


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
    }
    if make_url(url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


class DocumentStore:
    """
    A single independently addressable database.

    Attributes:
        name:      Short label used in logs and the health report
        metadata:  Metadata of the tables this store owns
        engine:    Async engine holding the connection pool
    """

    def __init__(self, name: str, url: str, metadata: MetaData):
        self.name = name
        self.metadata = metadata
        self.engine = create_async_engine(url, **_engine_options(url))
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def __repr__(self) -> str:
        return f"<DocumentStore(name='{self.name}', url='{self.engine.url!r}')>"

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session, commit on success, roll back on error, always close.

        Raises:
            Whatever the caller raised; it is re-raised after rollback so the
            global exception handlers can answer the request.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create any missing table of this store."""
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.drop_all)

    async def ping(self) -> bool:
        """Run SELECT 1; False when the database cannot be reached."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Store '%s' unreachable: %s", self.name, str(e))
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


class StoreRegistry:
    """
    The three live stores.

    Dependencies look stores up here at call time, so tests can swap a
    store for a throwaway SQLite one without touching the routes.
    """

    def __init__(self, car: DocumentStore, qr: DocumentStore, stock: DocumentStore):
        self.car = car
        self.qr = qr
        self.stock = stock

    @classmethod
    def from_settings(cls) -> "StoreRegistry":
        return cls(
            car=DocumentStore("car", settings.car_database_url, CarBase.metadata),
            qr=DocumentStore("qr", settings.qr_database_url, QrBase.metadata),
            stock=DocumentStore("stock", settings.stock_database_url, StockBase.metadata),
        )

    def __iter__(self):
        return iter((self.car, self.qr, self.stock))


stores = StoreRegistry.from_settings()


# ── Session Dependencies ──────────────────────────────────────────────────
async def get_car_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: a session on the car-arrival store."""
    async with stores.car.transaction() as session:
        yield session


async def get_qr_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: a session on the QR scan store."""
    async with stores.qr.transaction() as session:
        yield session


async def get_stock_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: a session on the stock store."""
    async with stores.stock.transaction() as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_collections() -> None:
    """
    Create the tables of every store that does not have them yet.

    A store that is down is logged and skipped; the other domains keep
    serving and the affected routes answer 500 until it comes back.
    """
    for store in stores:
        try:
            await store.create_all()
        except Exception as e:
            logger.error("Could not prepare tables of store '%s': %s", store.name, str(e))
            continue
        logger.info("Store '%s' ready", store.name)


async def dispose_engines() -> None:
    """Close the connection pools of all stores."""
    for store in stores:
        await store.dispose()
