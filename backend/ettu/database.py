"""
ETTU Backend — Database Connection Management
===============================================

What:  Pooled async SQLAlchemy engine, migrations, health probe, and FastAPI dependencies.
Why:   Centralizes all database connection logic in one place.
How:   Database.connect() builds an engine with a bounded pool and verifies it
       with a liveness query. The resulting handle is stored on app.state and
       shared by every request.
Who:   Created by the lifespan handler in main.py; read by routes via Depends().
When:  Connected once at startup; sessions are created per-request.

Connection Pooling Strategy:
    pool_size=DB_MIN_CONNECTIONS (5):       Persistent connections for normal load
    max_overflow=MAX-MIN (15):              Burst connections (total never exceeds 20)
    pool_timeout=DB_ACQUIRE_TIMEOUT (30s):  How long a request waits for a free connection
    pool_recycle=DB_MAX_LIFETIME (1800s):   Hard age limit for any connection
    idle check=DB_IDLE_TIMEOUT (300s):      Connections idle longer than this are
                                            discarded when next checked out
    pool_pre_ping:                          Validates connections before use

Degraded Mode:
    The server is allowed to start without a database. In that case
    app.state.database is None; /health reports "not_configured" and handlers
    that need a session get DatabaseUnavailableError (503).
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from alembic import command
from alembic.config import Config as AlembicConfig
from fastapi import Request
from sqlalchemy import event, exc, text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ettu.config import Settings
from ettu.exceptions import DatabaseError, DatabaseUnavailableError, ValidationError

logger = logging.getLogger(__name__)

# Alembic scripts live next to the package: backend/alembic
MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "alembic"


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic reads for
    --autogenerate.
    """
    pass


def _pool_options(database_url: str, settings: Settings) -> dict:
    """Engine keyword arguments for the connection pool."""
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite (tests) uses a single-connection pool that takes no sizing
        return {}
    return {
        "pool_size": settings.db_min_connections,
        "max_overflow": settings.db_max_connections - settings.db_min_connections,
        "pool_timeout": settings.db_acquire_timeout,
        "pool_recycle": settings.db_max_lifetime,
        "pool_pre_ping": True,
    }


def _install_idle_timeout(engine: AsyncEngine, idle_timeout: int) -> None:
    """
    Discard pooled connections that sat idle for longer than idle_timeout.

    How: stamp each connection on checkin; on checkout, raising
    DisconnectionError makes the pool drop the connection and hand out a
    fresh one.
    """

    @event.listens_for(engine.sync_engine, "checkin")
    def _stamp_checkin(dbapi_connection, connection_record):
        connection_record.info["checked_in_at"] = time.monotonic()

    @event.listens_for(engine.sync_engine, "checkout")
    def _discard_idle(dbapi_connection, connection_record, connection_proxy):
        checked_in_at = connection_record.info.pop("checked_in_at", None)
        if checked_in_at is None:
            return
        idle_for = time.monotonic() - checked_in_at
        if idle_for > idle_timeout:
            logger.debug("Discarding connection idle for %.0fs", idle_for)
            raise exc.DisconnectionError(f"Connection idle for {idle_for:.0f}s")


def _upgrade_to_head(connection: Connection) -> None:
    """Run Alembic's upgrade command on an already-open connection."""
    alembic_cfg = AlembicConfig()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # env.py picks this up instead of opening its own engine
    alembic_cfg.attributes["connection"] = connection
    command.upgrade(alembic_cfg, "head")


class Database:
    """
    Shared handle around one pooled AsyncEngine.

    Lifecycle:
        db = await Database.connect(url, settings)   # raises if unreachable
        await db.migrate()                            # Alembic upgrade head
        await db.health_check()                       # SELECT 1 AS health
        async with db.session() as session: ...
        await db.close()
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        # expire_on_commit=False: attributes stay readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    async def connect(cls, database_url: str, settings: Settings) -> "Database":
        """
        Create the pooled engine and verify the database answers.

        Raises:
            Any driver or SQLAlchemy error from the first connection attempt.
            The engine is disposed before the error propagates.
        """
        logger.info("Connecting to database...")
        engine = create_async_engine(
            database_url,
            echo=settings.log_level == "DEBUG",
            **_pool_options(database_url, settings),
        )
        _install_idle_timeout(engine, settings.db_idle_timeout)

        database = cls(engine)
        try:
            await database.health_check()
        except Exception:
            await engine.dispose()
            raise

        logger.info("Database connection established")
        return database

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def migrate(self) -> None:
        """Apply all pending Alembic migrations."""
        logger.info("Running database migrations...")
        async with self._engine.begin() as conn:
            await conn.run_sync(_upgrade_to_head)
        logger.info("Database migrations completed")

    async def health_check(self) -> None:
        """
        Liveness probe.

        What:    Executes SELECT 1 AS health and checks the value.
        Raises:  DatabaseError if the query answers anything but 1; driver
                 errors propagate unchanged so callers can report them.
        """
        async with self._engine.connect() as conn:
            result = await conn.execute(text("SELECT 1 AS health"))
            health = result.scalar_one()
        if health != 1:
            raise DatabaseError(
                message="Database health check returned an unexpected value",
                context={"health": health},
            )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scope: commit on success, roll back on any error, always close.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self._engine.dispose()


# ── Identifier Helpers ────────────────────────────────────────────────────
def generate_id() -> uuid.UUID:
    """New random (version 4) identifier for a record."""
    return uuid.uuid4()


def parse_uuid(value: str) -> uuid.UUID:
    """Parse a textual UUID, raising ValidationError when malformed."""
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(message=f"'{value}' is not a valid UUID", field="id") from None


# ── FastAPI Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Optional[Database]:
    """The shared database handle, or None in database-less mode."""
    return getattr(request.app.state, "database", None)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Raises:
        DatabaseUnavailableError: the server started without a database (→ 503)
    """
    database = get_database(request)
    if database is None:
        raise DatabaseUnavailableError()
    async with database.session() as session:
        yield session
