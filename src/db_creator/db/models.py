"""
db_creator.db.models

History schema.

Responsibilities:
- Define `DbInfo`, one append-only row per database creation attempt.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db_creator.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC: SQL Server DATETIME columns carry no offset.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DbInfo(Base):
    __tablename__ = "db_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    db_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    is_created: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # "single" or "batch"; see services.results.ProvisioningMode.
    mode: Mapped[str] = mapped_column(String(16), nullable=False)
    connection_method: Mapped[str] = mapped_column(String(16), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_db_info_name_created", "db_name", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# Rows are never updated: a retried database gets a second row.
