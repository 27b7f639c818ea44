import asyncio
import logging
import threading
import time
from enum import Enum
from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from interview_prep.config import (
    DATABASE_URL,
    DB_CONNECT_POLL_SECONDS,
    DB_CONNECT_WAIT_SECONDS,
)

logger = logging.getLogger(__name__)

Base = declarative_base()


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class DatabaseUnavailableError(RuntimeError):
    """Raised when the database cannot be reached."""


class DatabaseManager:
    """Owns the engine, the session factory and the connection state.

    ``connect()`` is idempotent and safe to call from several threads: the
    first caller opens the engine, checks it with ``SELECT 1`` and creates
    the tables; later callers return immediately once the state is
    ``CONNECTED``.
    """

    def __init__(
        self,
        url: str,
        wait_timeout: float = DB_CONNECT_WAIT_SECONDS,
        poll_interval: float = DB_CONNECT_POLL_SECONDS,
        **engine_kwargs,
    ):
        self.url = url
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self._engine_kwargs = engine_kwargs
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._state = ConnectionState.DISCONNECTED
        self._lock = threading.Lock()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def engine(self) -> Engine:
        return self._build_engine()

    def _build_engine(self) -> Engine:
        if self._engine is None:
            kwargs = dict(self._engine_kwargs)
            if self.url.startswith("sqlite"):
                kwargs.setdefault("connect_args", {"check_same_thread": False})
            else:
                kwargs.setdefault("pool_pre_ping", True)
                kwargs.setdefault("pool_size", 10)
            self._engine = create_engine(self.url, **kwargs)
            self._session_factory = sessionmaker(
                autocommit=False, autoflush=False, bind=self._engine
            )
        return self._engine

    def connect(self, timeout: Optional[float] = None) -> None:
        """Open and verify the connection.

        ``timeout`` bounds how long to wait for a connect already running in
        another thread; ``None`` waits indefinitely.
        """
        if self._state == ConnectionState.CONNECTED:
            return

        acquired = self._lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            raise DatabaseUnavailableError("Timed out waiting for database connection")
        try:
            if self._state == ConnectionState.CONNECTED:
                return
            self._state = ConnectionState.CONNECTING
            try:
                engine = self.engine
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                from interview_prep import models  # noqa: F401

                Base.metadata.create_all(bind=engine)
            except SQLAlchemyError as e:
                self._state = ConnectionState.DISCONNECTED
                logger.error("Error connecting to database: %s", e)
                raise DatabaseUnavailableError(str(e)) from e

            self._state = ConnectionState.CONNECTED
            logger.info("Database connected")
        finally:
            self._lock.release()

    def mark_disconnected(self) -> None:
        if self._state != ConnectionState.DISCONNECTED:
            logger.warning("Database disconnected")
        self._state = ConnectionState.DISCONNECTED

    async def ensure_connected(self) -> None:
        """Wait for an in-flight connect, then try once more before giving up."""
        if self.is_connected:
            return

        if self._state == ConnectionState.CONNECTING:
            deadline = time.monotonic() + self.wait_timeout
            while (
                self._state == ConnectionState.CONNECTING
                and time.monotonic() < deadline
            ):
                await asyncio.sleep(self.poll_interval)
            if self.is_connected:
                return

        await asyncio.to_thread(self.connect, self.wait_timeout)

    def session(self) -> Session:
        self._build_engine()
        return self._session_factory()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._state = ConnectionState.DISCONNECTED


db_manager = DatabaseManager(DATABASE_URL)


def get_db_manager() -> DatabaseManager:
    return db_manager


async def require_database(
    manager: DatabaseManager = Depends(get_db_manager),
) -> DatabaseManager:
    """Dependency that fails with 503 when the database cannot be reached."""
    try:
        await manager.ensure_connected()
    except DatabaseUnavailableError:
        logger.error("Database connection failed while handling request")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection unavailable. Please try again in a moment.",
        )
    return manager


def get_db(manager: DatabaseManager = Depends(require_database)):
    """Dependency that provides a database session."""
    db = manager.session()
    try:
        yield db
    except OperationalError:
        db.rollback()
        manager.mark_disconnected()
        raise
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()
