"""
db_creator.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create the history table for local development and tests.
- Keep production migration workflow separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy import Engine

from db_creator.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from db_creator.db.base import Base


def init_db(engine: Engine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    # Use a transactional DDL block when supported by the backend.
    with engine.begin() as conn:
        Base.metadata.create_all(conn)


# --- Module Notes -----------------------------------------------------------
# Not used in prod. Production workflows run
# Alembic migrations as part of deployment.
