"""
db_creator.services.provisioning_service

Provisioning workflows (failure-policy owner).

Responsibilities:
- Validate the request and read the optional post-creation script.
- SingleExecution: create each database independently, isolating failures.
- Batch: create all databases in one submission, all-or-nothing accounting.
- Run the script on each created database without letting it undo creation.
- Record every outcome and return one OperationResult per call.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from db_creator.db.connections import ConnectionMethod
from db_creator.db.repositories.provisioning import ProvisioningRepo
from db_creator.errors import ProvisioningError
from db_creator.observability.context import operation_context
from db_creator.observability.logging import get_logger
from db_creator.services.results import DbOutcome, OperationResult, ProvisioningMode, summarize

log = get_logger(__name__)

NULL_INPUT_SUMMARY = "Input database names list was null."
EMPTY_INPUT_SUMMARY = "No databases requested."


class ProvisioningService:
    def __init__(self, *, repo: ProvisioningRepo) -> None:
        self._repo = repo

    @property
    def connection_method(self) -> ConnectionMethod:
        return self._repo.connection_method

    def set_database_connection_method(self, name: str | None) -> ConnectionMethod:
        # Misuse is the caller's problem: UnsupportedStrategy propagates.
        return self._repo.set_strategy(name)

    def single_execution(
        self,
        names: Sequence[str] | None,
        script_path: str | None = None,
        *,
        operation_id: str | None = None,
    ) -> OperationResult:
        mode = ProvisioningMode.single
        with operation_context(operation_id=operation_id, mode=str(mode)):
            if not names:
                return _early_result(names, mode)

            script = _read_script(script_path)
            outcomes = [self._create_one(name, script) for name in names]

            return self._finish(outcomes, mode=mode)

    def batch(
        self,
        names: Sequence[str] | None,
        script_path: str | None = None,
        *,
        operation_id: str | None = None,
    ) -> OperationResult:
        mode = ProvisioningMode.batch
        with operation_context(operation_id=operation_id, mode=str(mode)):
            if not names:
                return _early_result(names, mode)

            script = _read_script(script_path)
            requested = list(names)
            log.info("batch_create_started", db_count=len(requested))
            try:
                self._repo.create_batch(requested)
            except ProvisioningError as e:
                log.error("batch_create_rejected", operation=e.operation, error=str(e))
                created = False
            except Exception:
                log.exception("batch_create_unexpected_error", db_count=len(requested))
                created = False
            else:
                created = True

            # No per-statement signal exists, so every name shares the batch's fate.
            outcomes = [DbOutcome(name=name, created=created) for name in requested]
            if created and script is not None:
                for name in requested:
                    self._run_script(name, script)

            return self._finish(outcomes, mode=mode)

    def _create_one(self, name: str, script: str | None) -> DbOutcome:
        log.info("database_create_started", db_name=name)
        try:
            self._repo.create_single(name)
        except ProvisioningError as e:
            log.error("database_create_rejected", db_name=name, operation=e.operation, error=str(e))
            return DbOutcome(name=name, created=False)
        except Exception:
            log.exception("database_create_unexpected_error", db_name=name)
            return DbOutcome(name=name, created=False)

        if script is not None:
            self._run_script(name, script)
        return DbOutcome(name=name, created=True)

    def _run_script(self, name: str, script: str) -> None:
        # The database exists whatever happens here; failures are only logged.
        try:
            self._repo.run_script(name, script)
        except ProvisioningError as e:
            log.error("script_rejected", db_name=name, operation=e.operation, error=str(e))
        except Exception:
            log.exception("script_unexpected_error", db_name=name)

    def _finish(self, outcomes: list[DbOutcome], *, mode: ProvisioningMode) -> OperationResult:
        self._repo.record_history([(o.name, o.created) for o in outcomes], mode=str(mode))

        created_names = tuple(o.name for o in outcomes if o.created)
        if mode is ProvisioningMode.batch:
            success = len(created_names) == len(outcomes)
        else:
            success = len(created_names) > 0

        summary = summarize(outcomes)
        log.info(
            "provisioning_finished",
            created=len(created_names),
            total=len(outcomes),
            success=success,
        )
        return OperationResult(
            created_names=created_names,
            summary=summary,
            success=success,
            mode=mode,
            outcomes=tuple(outcomes),
        )


def _early_result(names: Sequence[str] | None, mode: ProvisioningMode) -> OperationResult:
    if names is None:
        log.warning("provisioning_rejected", reason="null input")
        return OperationResult(created_names=(), summary=NULL_INPUT_SUMMARY, success=False, mode=mode)
    log.info("provisioning_skipped", reason="empty input")
    return OperationResult(created_names=(), summary=EMPTY_INPUT_SUMMARY, success=True, mode=mode)


def _read_script(script_path: str | None) -> str | None:
    """
    Returns the script text, or None when no path was given or it cannot be read.
    An unreadable script never blocks database creation.
    """

    if script_path is None or not script_path.strip():
        return None
    path = Path(script_path.strip())
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        log.error("script_read_failed", path=str(path), error=str(e), error_type=type(e).__name__)
        return None
    if not content.strip():
        log.warning("script_empty", path=str(path))
        return None
    log.info("script_loaded", path=str(path), size=len(content))
    return content


# --- Module Notes -----------------------------------------------------------
# This service never raises for expected conditions; only set_database_connection_method
# lets UnsupportedStrategy through. History failures are absorbed by the repository.
