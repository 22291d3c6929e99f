"""
db_creator.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide the liveness check (`/healthz`).
- Provide the readiness check (`/readyz`) with history-database connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text

from db_creator.api.deps import runtime_from_app
from db_creator.bootstrap import Runtime

router = APIRouter()


@router.get("/healthz")
def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
def readyz(runtime: Runtime = Depends(runtime_from_app)) -> dict[str, str]:
    # Readiness: verify the history database is reachable when history is on.
    if runtime.history_engine is not None:
        with runtime.history_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# The administrative server is not checked: every check would open a
# connection with CREATE DATABASE privileges.
