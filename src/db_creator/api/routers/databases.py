"""
db_creator.api.routers.databases

Provisioning, history and connection-method endpoints.

Responsibilities:
- Run single-execution or batch provisioning and return the OperationResult.
- Confine HTTP-supplied script paths to the configured script directory.
- Expose recent history rows and the active connection method.
- Require a bearer token on every route; mutating routes need the provisioner role.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db_creator.api.deps import history_session, provisioning_service, request_id
from db_creator.auth.deps import require_any_role, settings_from_app
from db_creator.auth.models import ROLE_PROVISIONER, ROLE_VIEWER, Principal
from db_creator.db.repositories.history import HistoryRepo
from db_creator.errors import UnsupportedStrategy
from db_creator.observability.logging import get_logger
from db_creator.services.provisioning_service import ProvisioningService
from db_creator.services.results import OperationResult
from db_creator.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["databases"])

can_provision = require_any_role(ROLE_PROVISIONER)
can_read = require_any_role(ROLE_PROVISIONER, ROLE_VIEWER)


class ProvisionRequest(BaseModel):
    # null is accepted and reported through the result, like any other expected failure.
    names: list[str] | None = Field(default_factory=list)
    mode: Literal["single", "batch"] = "single"
    # Relative to DBC_API_SCRIPT_DIR.
    script_path: str | None = None


class OutcomeOut(BaseModel):
    name: str
    created: bool


class ProvisionResponse(BaseModel):
    success: bool
    summary: str
    mode: str | None
    created_names: list[str]
    outcomes: list[OutcomeOut]

    @classmethod
    def from_result(cls, result: OperationResult) -> ProvisionResponse:
        return cls(
            success=result.success,
            summary=result.summary,
            mode=str(result.mode) if result.mode is not None else None,
            created_names=list(result.created_names),
            outcomes=[OutcomeOut(name=o.name, created=o.created) for o in result.outcomes],
        )


class ConnectionMethodBody(BaseModel):
    method: str


class HistoryOut(BaseModel):
    db_name: str
    is_created: bool
    mode: str
    connection_method: str
    created_at: datetime


def resolve_script_path(script_path: str | None, script_dir: str | None) -> str | None:
    """
    Maps a client-supplied script name onto a file under `script_dir`.
    Raises 422 when scripts are disabled or the path escapes the directory.
    """

    if script_path is None or not script_path.strip():
        return None
    if script_dir is None:
        raise HTTPException(status_code=422, detail="Script execution over HTTP is disabled")

    root = Path(script_dir).resolve()
    candidate = (root / script_path.strip()).resolve()
    if not candidate.is_relative_to(root):
        log.warning("script_path_rejected", script_path=script_path)
        raise HTTPException(status_code=422, detail="Script path must stay inside the script directory")
    return str(candidate)


@router.post("/databases")
def provision_databases(
    body: ProvisionRequest,
    service: ProvisioningService = Depends(provisioning_service),
    settings: Settings = Depends(settings_from_app),
    principal: Principal = Depends(can_provision),
    operation_id: str | None = Depends(request_id),
) -> ProvisionResponse:
    script_path = resolve_script_path(body.script_path, settings.api_script_dir)
    log.info("provisioning_requested", subject=principal.subject, mode=body.mode)

    # Expected failures come back as success=false with HTTP 200; the summary says why.
    if body.mode == "batch":
        result = service.batch(body.names, script_path, operation_id=operation_id)
    else:
        result = service.single_execution(body.names, script_path, operation_id=operation_id)
    return ProvisionResponse.from_result(result)


@router.get("/databases/history", dependencies=[Depends(can_read)])
def list_history(
    limit: int = Query(default=50, ge=1, le=500),
    session: Session = Depends(history_session),
) -> list[HistoryOut]:
    rows = HistoryRepo(session).list_recent(limit=limit)
    return [
        HistoryOut(
            db_name=r.db_name,
            is_created=r.is_created,
            mode=r.mode,
            connection_method=r.connection_method,
            created_at=r.created_at,
        )
        for r in rows
    ]


@router.get("/connection-method", dependencies=[Depends(can_read)])
def get_connection_method(
    service: ProvisioningService = Depends(provisioning_service),
) -> dict[str, str]:
    return {"method": str(service.connection_method)}


@router.put("/connection-method")
def set_connection_method(
    body: ConnectionMethodBody,
    service: ProvisioningService = Depends(provisioning_service),
    principal: Principal = Depends(can_provision),
) -> dict[str, str]:
    try:
        method = service.set_database_connection_method(body.method)
    except UnsupportedStrategy as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    log.info("connection_method_set_via_api", subject=principal.subject, method=str(method))
    return {"method": str(method)}


# --- Module Notes -----------------------------------------------------------
# The active connection method is process-wide: a PUT changes it for every caller.
