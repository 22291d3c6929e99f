"""
db_creator.errors

Domain-specific exceptions.

Responsibilities:
- Signal an unknown connection method (fails fast, no state change).
- Wrap server-execution failures with the operation and target database.
- Signal unusable configuration at startup.
"""

from __future__ import annotations


class DbCreatorError(Exception):
    pass


class UnsupportedStrategy(DbCreatorError):
    """
    Raised when a connection method name matches none of the known tags.
    """

    def __init__(self, method: str | None) -> None:
        super().__init__(f"Connection method '{method or ''}' is not supported.")
        self.method = method


class ProvisioningError(DbCreatorError):
    """
    Raised by the provisioning repository when the server rejects a command.
    `target` is None for operations spanning several databases.
    """

    def __init__(self, *, operation: str, target: str | None, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.target = target


class ConfigurationError(DbCreatorError):
    pass


# --- Module Notes -----------------------------------------------------------
# Provisioning errors are folded into OperationResult by the service layer; only
# UnsupportedStrategy and ConfigurationError are expected to reach the front ends.
