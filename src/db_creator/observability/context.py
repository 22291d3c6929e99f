"""
db_creator.observability.context

Operation-scoped logging context.

Responsibilities:
- Generate an operation id for each provisioning call.
- Bind call metadata into structlog contextvars and restore the previous
  context when the call ends.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


@contextmanager
def operation_context(**fields: Any) -> Iterator[str]:
    """
    Binds `operation_id` plus `fields` for the duration of the block.
    A caller-provided `operation_id` (e.g. an HTTP request id) is kept.
    """

    operation_id = str(fields.pop("operation_id", None) or uuid.uuid4())
    tokens = structlog.contextvars.bind_contextvars(operation_id=operation_id, **fields)
    try:
        yield operation_id
    finally:
        # Nested calls (API request -> service call) must not wipe the outer context.
        structlog.contextvars.reset_contextvars(**tokens)


# --- Module Notes -----------------------------------------------------------
# The HTTP middleware binds a request id first; service calls reuse it as the
# operation id so one request maps to one correlatable set of log lines.
