"""
db_creator.db.repositories.provisioning

Repository that turns provisioning intents into server commands.

Responsibilities:
- Hold the active connection method (validated before it is switched).
- Create one database, or several in one multi-statement submission.
- Run a `GO`-separated script against one specific database.
- Append outcome rows to the history table without ever failing the caller.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from sqlalchemy.orm import Session, sessionmaker

from db_creator.db import connections
from db_creator.db.connections import ConnectionMethod, ConnectionOpener
from db_creator.db.repositories.history import HistoryRepo
from db_creator.db.session import session_scope
from db_creator.db.sql import render_create, render_create_batch, split_script, target_url
from db_creator.errors import ProvisioningError
from db_creator.observability.logging import get_logger

log = get_logger(__name__)


class ProvisioningRepo:
    def __init__(
        self,
        *,
        admin_url: str,
        connection_method: str = ConnectionMethod.raw,
        history_sessions: sessionmaker[Session] | None = None,
        connect_timeout: int | None = None,
    ) -> None:
        self._admin_url = admin_url
        self._history_sessions = history_sessions
        self._connect_timeout = connect_timeout

        # Method and opener always change together under the lock.
        self._lock = threading.Lock()
        self._opener: ConnectionOpener = connections.resolve(connection_method)

    @property
    def connection_method(self) -> ConnectionMethod:
        with self._lock:
            return self._opener.method

    def set_strategy(self, name: str | None) -> ConnectionMethod:
        # Resolve before taking the lock: an unknown name must leave the current opener alone.
        opener = connections.resolve(name)
        with self._lock:
            previous = self._opener.method
            self._opener = opener
        log.info("connection_method_changed", previous=str(previous), current=str(opener.method))
        return opener.method

    def _current_opener(self) -> ConnectionOpener:
        with self._lock:
            return self._opener

    def create_single(self, name: str) -> None:
        opener = self._current_opener()
        try:
            sql = render_create(self._admin_url, name)
            with opener.open(self._admin_url, connect_timeout=self._connect_timeout) as db:
                db.execute(sql)
        except Exception as e:
            log.error("database_create_failed", db_name=name, method=str(opener.method), error=str(e))
            raise ProvisioningError(
                operation="create_single",
                target=name,
                message=f"Failed to create database '{name}': {e}",
            ) from e
        log.info("database_created", db_name=name, method=str(opener.method))

    def create_batch(self, names: Sequence[str]) -> None:
        """
        One connection, one submission holding every CREATE DATABASE statement.

        A failure says nothing about which statements the server already applied;
        callers must not assume the submission was atomic.
        """

        if not names:
            log.info("batch_create_skipped", reason="empty")
            return

        opener = self._current_opener()
        try:
            sql = render_create_batch(self._admin_url, names)
            with opener.open(self._admin_url, connect_timeout=self._connect_timeout) as db:
                db.execute(sql)
        except Exception as e:
            log.error(
                "batch_create_failed",
                db_count=len(names),
                method=str(opener.method),
                error=str(e),
            )
            raise ProvisioningError(
                operation="create_batch",
                target=None,
                message=f"Batch creation of {len(names)} databases failed: {e}",
            ) from e
        log.info("batch_created", db_count=len(names), method=str(opener.method))

    def run_script(self, name: str, script: str | None) -> None:
        if not script or not script.strip():
            log.warning("script_skipped", db_name=name, reason="empty script")
            return

        batches = split_script(script)
        if not batches:
            log.warning("script_skipped", db_name=name, reason="only separators")
            return

        opener = self._current_opener()
        executed = 0
        try:
            url = target_url(self._admin_url, name)
            with opener.open(url, connect_timeout=self._connect_timeout) as db:
                for batch in batches:
                    db.execute(batch)
                    executed += 1
        except Exception as e:
            log.error(
                "script_failed",
                db_name=name,
                batch_index=executed,
                batch_count=len(batches),
                error=str(e),
            )
            raise ProvisioningError(
                operation="run_script",
                target=name,
                message=f"Error executing script against database '{name}' "
                f"(batch {executed + 1} of {len(batches)}): {e}",
            ) from e
        log.info("script_executed", db_name=name, batch_count=len(batches))

    def record_history(self, outcomes: Sequence[tuple[str, bool]], *, mode: str) -> None:
        """
        Best effort: history is an audit side channel, so errors are logged and dropped.
        """

        if self._history_sessions is None:
            log.info("history_disabled", record_count=len(outcomes))
            return

        method = str(self.connection_method)
        try:
            with session_scope(self._history_sessions) as session:
                HistoryRepo(session).add_many(outcomes, mode=mode, connection_method=method)
        except Exception:
            log.exception("history_write_failed", record_count=len(outcomes))
            return
        log.info("history_recorded", record_count=len(outcomes), mode=mode)


# --- Module Notes -----------------------------------------------------------
# The administrative URL is fixed for the lifetime of the repo; switching servers means
# building a new repo (see cli.app for the connection-URL override prompt).
