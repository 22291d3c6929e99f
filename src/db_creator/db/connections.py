"""
db_creator.db.connections

Connection methods: how a provisioning command physically reaches the server.

Responsibilities:
- Define the `ConnectionMethod` tags and their accepted spellings.
- Provide one opener per method (raw DBAPI, ORM session, Core connection).
- Resolve a user-supplied method name to an opener (case-insensitive).
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from db_creator.errors import UnsupportedStrategy


class ConnectionMethod(enum.StrEnum):
    raw = "raw"  # plain DBAPI connection + cursor
    orm = "orm"  # SQLAlchemy ORM Session
    core = "core"  # SQLAlchemy Core Connection


# Names used by existing operator configuration for the same three methods.
_ALIASES: dict[str, ConnectionMethod] = {
    "ado.net": ConnectionMethod.raw,
    "efcore": ConnectionMethod.orm,
    "dapper": ConnectionMethod.core,
}

_LOOKUP: dict[str, ConnectionMethod] = {
    **{m.value: m for m in ConnectionMethod},
    **_ALIASES,
}


class SqlExecutor(Protocol):
    def execute(self, sql: str) -> None: ...


class ConnectionOpener(Protocol):
    method: ConnectionMethod

    def open(
        self, url: str, *, connect_timeout: int | None = None
    ) -> AbstractContextManager[SqlExecutor]: ...


def _connect_args(url: str, connect_timeout: int | None) -> dict[str, Any]:
    if connect_timeout is None:
        return {}
    backend = make_url(url).get_backend_name()
    if backend in ("postgresql", "mysql", "mariadb"):
        return {"connect_timeout": connect_timeout}
    # pyodbc and sqlite3 both take `timeout`.
    return {"timeout": connect_timeout}


def _engine(url: str, connect_timeout: int | None) -> Engine:
    # CREATE DATABASE is rejected inside a transaction by most servers, hence AUTOCOMMIT.
    # NullPool: every command gets a fresh connection that is closed on release.
    return create_engine(
        url,
        poolclass=NullPool,
        isolation_level="AUTOCOMMIT",
        connect_args=_connect_args(url, connect_timeout),
    )


class _CursorExecutor:
    def __init__(self, dbapi_connection: Any) -> None:
        self._conn = dbapi_connection

    def execute(self, sql: str) -> None:
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql)
        finally:
            cursor.close()
        self._conn.commit()


class _SessionExecutor:
    def __init__(self, session: Session) -> None:
        self._session = session

    def execute(self, sql: str) -> None:
        # Driver-level execution: script text may contain colons that text() would bind.
        self._session.connection().exec_driver_sql(sql)
        self._session.commit()


class _ConnectionExecutor:
    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def execute(self, sql: str) -> None:
        self._connection.exec_driver_sql(sql)
        self._connection.commit()


class RawDbapiOpener:
    method = ConnectionMethod.raw

    @contextmanager
    def open(self, url: str, *, connect_timeout: int | None = None) -> Iterator[SqlExecutor]:
        engine = _engine(url, connect_timeout)
        try:
            dbapi_connection = engine.raw_connection()
            try:
                yield _CursorExecutor(dbapi_connection)
            finally:
                dbapi_connection.close()
        finally:
            engine.dispose()


class OrmSessionOpener:
    method = ConnectionMethod.orm

    @contextmanager
    def open(self, url: str, *, connect_timeout: int | None = None) -> Iterator[SqlExecutor]:
        engine = _engine(url, connect_timeout)
        try:
            with Session(engine) as session:
                yield _SessionExecutor(session)
        finally:
            engine.dispose()


class CoreConnectionOpener:
    method = ConnectionMethod.core

    @contextmanager
    def open(self, url: str, *, connect_timeout: int | None = None) -> Iterator[SqlExecutor]:
        engine = _engine(url, connect_timeout)
        try:
            with engine.connect() as connection:
                yield _ConnectionExecutor(connection)
        finally:
            engine.dispose()


OPENERS: dict[ConnectionMethod, ConnectionOpener] = {
    ConnectionMethod.raw: RawDbapiOpener(),
    ConnectionMethod.orm: OrmSessionOpener(),
    ConnectionMethod.core: CoreConnectionOpener(),
}


def parse_method(name: str | None) -> ConnectionMethod:
    method = _LOOKUP.get((name or "").strip().lower())
    if method is None:
        raise UnsupportedStrategy(name)
    return method


def resolve(name: str | None) -> ConnectionOpener:
    """
    Maps a method name (any case, canonical or alias) to its opener.
    Raises UnsupportedStrategy for unknown, empty or None names.
    """

    return OPENERS[parse_method(name)]


# --- Module Notes -----------------------------------------------------------
# Openers are stateless and shared; all per-call state lives inside `open()`.
# New methods only need an enum member, an opener, and an OPENERS entry.
