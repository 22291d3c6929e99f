"""
db_creator.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for the runtime, service, and history sessions.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from db_creator.bootstrap import Runtime
from db_creator.services.provisioning_service import ProvisioningService


def runtime_from_app(request: Request) -> Runtime:
    # The runtime is built in the lifespan of `db_creator.api.app.create_app`.
    return request.app.state.runtime  # type: ignore[attr-defined]


def provisioning_service(runtime: Runtime = Depends(runtime_from_app)) -> ProvisioningService:
    return runtime.service


def history_session(runtime: Runtime = Depends(runtime_from_app)) -> Iterator[Session]:
    if runtime.history_sessions is None:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="History is disabled")
    with runtime.history_sessions() as session:
        yield session


def request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


# --- Module Notes -----------------------------------------------------------
# Read-only history sessions are request-scoped; provisioning opens its own connections.
