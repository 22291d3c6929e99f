"""
db_creator.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Enforce role checks via a reusable dependency factory.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from db_creator.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from db_creator.auth.models import Principal
from db_creator.observability.logging import get_logger
from db_creator.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def settings_from_app(request: Request) -> Settings:
    # Set by `db_creator.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_from_app),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        log.warning("auth_rejected", reason=str(e))
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    return Principal(subject=subject, roles=frozenset(str(r) for r in roles_raw))


def require_any_role(*accepted: str):
    accepted_set = frozenset(accepted)

    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.has_any(accepted_set):
            log.warning("auth_forbidden", subject=principal.subject, required=sorted(accepted_set))
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Settings come from app.state rather than `get_settings()` so each app built by
# `create_app(settings=...)` validates tokens against its own secret.
