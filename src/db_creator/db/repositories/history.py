"""
db_creator.db.repositories.history

Repository for the `db_info` history table.

Responsibilities:
- Append one row per creation attempt within the caller's session.
- Query recent rows and the rows for one database.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from db_creator.db.models import DbInfo


class HistoryRepo:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add_many(
        self,
        records: Iterable[tuple[str, bool]],
        *,
        mode: str,
        connection_method: str,
    ) -> list[DbInfo]:
        # History is append-only (no update/delete) in normal operation.
        rows = [
            DbInfo(
                db_name=name,
                is_created=created,
                mode=mode,
                connection_method=connection_method,
            )
            for name, created in records
        ]
        self._session.add_all(rows)
        self._session.flush()
        return rows

    def list_recent(self, *, limit: int = 50) -> list[DbInfo]:
        stmt = select(DbInfo).order_by(desc(DbInfo.created_at), desc(DbInfo.id)).limit(limit)
        return list(self._session.execute(stmt).scalars().all())

    def list_for_database(self, db_name: str) -> list[DbInfo]:
        stmt = select(DbInfo).where(DbInfo.db_name == db_name).order_by(DbInfo.id)
        return list(self._session.execute(stmt).scalars().all())


# --- Module Notes -----------------------------------------------------------
# The caller owns the transaction (see `db.session.session_scope`); add_many only flushes.
