"""
db_creator.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated caller (`Principal`) and the roles the API checks.
"""

from __future__ import annotations

from dataclasses import dataclass

# Create databases, run scripts, switch the connection method.
ROLE_PROVISIONER = "db_provisioner"
# Read history and the active connection method.
ROLE_VIEWER = "db_viewer"
ROLE_ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Principal:
    subject: str
    roles: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles

    def has_any(self, roles: frozenset[str]) -> bool:
        return self.is_admin or bool(self.roles & roles)


# --- Module Notes -----------------------------------------------------------
# A provisioner can also read: routes that only read accept either role.
