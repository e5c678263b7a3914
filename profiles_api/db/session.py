"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from profiles_api.core.config import Settings
from profiles_api.core.errors import StoreUnavailableError

Base = declarative_base()

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError)


def _install_sqlite_hooks(engine: Engine) -> None:
    # pysqlite must not emit its own BEGIN; write transactions open with
    # BEGIN IMMEDIATE so the database lock is taken before any statement.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin", "")
        conn.exec_driver_sql(f"BEGIN {mode}".strip())


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    kwargs: dict = {"future": True, "pool_pre_ping": True, "echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        _install_sqlite_hooks(engine)
    return engine


class Database:
    """Owns one engine and hands out sessions.

    ``session()`` is for reads. ``transaction()`` yields a session inside a
    transaction that commits when the block exits normally and rolls back on
    any exception, cancellation included.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.engine = create_db_engine(url, echo=echo)
        self._sessionmaker = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False, future=True
        )
        self._tx_sessionmaker = sessionmaker(
            bind=self.engine.execution_options(sqlite_begin="IMMEDIATE"),
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.sql_echo)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        except _UNAVAILABLE_ERRORS as exc:
            logger.warning("Database unavailable: %s", exc)
            raise StoreUnavailableError("Database unavailable") from exc
        finally:
            session.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            with self._tx_sessionmaker.begin() as session:
                yield session
        except _UNAVAILABLE_ERRORS as exc:
            logger.warning("Transaction aborted, database unavailable: %s", exc)
            raise StoreUnavailableError("Database unavailable") from exc

    def create_all(self) -> None:
        from . import models  # noqa: F401  # register tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
