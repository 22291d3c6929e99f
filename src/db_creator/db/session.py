"""
db_creator.db.session

SQLAlchemy engine + session factory helpers for the history database.

Responsibilities:
- Create the engine from a URL.
- Create the sessionmaker with safe defaults.
- Provide a session scope helper that commits or rolls back.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.orm import Session, sessionmaker


def create_engine(url: str) -> Engine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    return sa_create_engine(url, pool_pre_ping=True)


def create_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False avoids surprising lazy loads after commits.
    return sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Unit of work: commit on success, roll back on any exception.
    """

    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


# --- Module Notes -----------------------------------------------------------
# Provisioning commands do not use this engine; they open short-lived engines through
# `db.connections` so the active connection method decides how the server is reached.
