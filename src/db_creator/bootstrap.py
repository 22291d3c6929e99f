"""
db_creator.bootstrap

Composition root shared by the console and HTTP front ends.

Responsibilities:
- Build the provisioning repo + service from settings.
- Own the history engine (created once, disposed on shutdown).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db_creator.db.init_db import init_db
from db_creator.db.repositories.provisioning import ProvisioningRepo
from db_creator.db.session import create_engine, create_sessionmaker
from db_creator.observability.logging import get_logger
from db_creator.services.provisioning_service import ProvisioningService
from db_creator.settings import Settings

log = get_logger(__name__)


@dataclass(slots=True)
class Runtime:
    service: ProvisioningService
    history_engine: Engine | None = None
    history_sessions: sessionmaker[Session] | None = None

    def close(self) -> None:
        # Dispose the engine to close pools/FDs gracefully.
        if self.history_engine is not None:
            self.history_engine.dispose()


def build_runtime(settings: Settings, *, admin_url: str | None = None) -> Runtime:
    """
    `admin_url` overrides the configured administrative URL (console prompt / CLI flag).
    """

    admin = admin_url or settings.admin_database_url

    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None
    if settings.history_enabled:
        engine = _open_history(settings.history_database_url or admin, env=settings.env)
        if engine is not None:
            sessions = create_sessionmaker(engine)

    repo = ProvisioningRepo(
        admin_url=admin,
        connection_method=settings.connection_method,
        history_sessions=sessions,
        connect_timeout=settings.connect_timeout,
    )
    log.info(
        "runtime_ready",
        env=settings.env,
        connection_method=str(repo.connection_method),
        history_enabled=sessions is not None,
    )
    return Runtime(
        service=ProvisioningService(repo=repo),
        history_engine=engine,
        history_sessions=sessions,
    )


def _open_history(url: str, *, env: str) -> Engine | None:
    """
    History is an audit side channel: an unreachable store or a missing driver
    disables it for this run instead of stopping the tool.
    """

    engine: Engine | None = None
    try:
        engine = create_engine(url)
        if env in ("dev", "test"):
            # Dev/test convenience: create the history table. Prod should use Alembic migrations.
            init_db(engine)
    except (SQLAlchemyError, ImportError) as e:
        log.warning("history_unavailable", error=str(e), error_type=type(e).__name__)
        if engine is not None:
            engine.dispose()
        return None
    return engine


# --- Module Notes -----------------------------------------------------------
# Keep construction here so front ends stay thin and tests can build a Runtime
# against SQLite without going through argparse or FastAPI.
