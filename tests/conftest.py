"""
tests.conftest

Shared fixtures and fakes.

Responsibilities:
- Provide a recording fake of the provisioning repository for service/console tests.
- Provide a recording connection opener for repository tests.
- Keep settings isolated from the developer's environment.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import pytest

from db_creator.db import connections
from db_creator.db.connections import ConnectionMethod
from db_creator.errors import ProvisioningError


class FakeProvisioningRepo:
    """
    Stands in for ProvisioningRepo. Names listed in `fail_create` / `fail_script`
    raise ProvisioningError; `batch_error` is raised by create_batch.
    """

    def __init__(
        self,
        *,
        fail_create: Iterable[str] = (),
        fail_script: Iterable[str] = (),
        batch_error: Exception | None = None,
    ) -> None:
        self.fail_create = set(fail_create)
        self.fail_script = set(fail_script)
        self.batch_error = batch_error
        self.method = ConnectionMethod.raw

        self.created: list[str] = []
        self.batches: list[list[str]] = []
        self.scripts: list[tuple[str, str]] = []
        self.history: list[tuple[list[tuple[str, bool]], str]] = []

    @property
    def connection_method(self) -> ConnectionMethod:
        return self.method

    def set_strategy(self, name: str | None) -> ConnectionMethod:
        self.method = connections.parse_method(name)
        return self.method

    def create_single(self, name: str) -> None:
        self.created.append(name)
        if name in self.fail_create:
            raise ProvisioningError(operation="create_single", target=name, message="boom")

    def create_batch(self, names: Sequence[str]) -> None:
        self.batches.append(list(names))
        if self.batch_error is not None:
            raise self.batch_error

    def run_script(self, name: str, script: str) -> None:
        self.scripts.append((name, script))
        if name in self.fail_script:
            raise ProvisioningError(operation="run_script", target=name, message="bad script")

    def record_history(self, outcomes: Sequence[tuple[str, bool]], *, mode: str) -> None:
        self.history.append((list(outcomes), mode))

    @property
    def touched(self) -> bool:
        return bool(self.created or self.batches or self.scripts or self.history)


class RecordingOpener:
    """
    Connection opener that records opened URLs and executed SQL.
    Any statement containing `fail_on` raises RuntimeError.
    """

    def __init__(self, method: ConnectionMethod, *, fail_on: str | None = None) -> None:
        self.method = method
        self.fail_on = fail_on
        self.opened: list[str] = []
        self.executed: list[str] = []
        self.released = 0

    @contextmanager
    def open(self, url: str, *, connect_timeout: int | None = None) -> Iterator[RecordingOpener]:
        self.opened.append(url)
        try:
            yield self
        finally:
            self.released += 1

    def execute(self, sql: str) -> None:
        if self.fail_on is not None and self.fail_on in sql:
            raise RuntimeError(f"server rejected: {sql}")
        self.executed.append(sql)


@pytest.fixture
def fake_repo() -> FakeProvisioningRepo:
    return FakeProvisioningRepo()


@pytest.fixture
def make_repo() -> type[FakeProvisioningRepo]:
    return FakeProvisioningRepo


@pytest.fixture
def recording_openers(monkeypatch: pytest.MonkeyPatch) -> dict[ConnectionMethod, RecordingOpener]:
    openers = {m: RecordingOpener(m) for m in ConnectionMethod}
    for method, opener in openers.items():
        monkeypatch.setitem(connections.OPENERS, method, opener)
    return openers


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str], str]:
    def _write(content: str, name: str = "script.sql") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # No DBC_* variables or .env file from the developer machine leak into tests.
    import os

    for key in list(os.environ):
        if key.startswith("DBC_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


# --- Module Notes -----------------------------------------------------------
# Fakes are hand-written rather than MagicMock so that call order and arguments are
# asserted on plain lists.
