"""
tests.test_provisioning_repo

Provisioning repository behaviour.

Responsibilities:
- Ensure strategy switching is validated and leaves state alone on failure.
- Ensure commands reach the right URL through the active opener.
- Ensure server failures are wrapped with operation and target.
- Ensure history writes are best effort.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect, text

from db_creator.db.connections import ConnectionMethod
from db_creator.db.init_db import init_db
from db_creator.db.repositories.history import HistoryRepo
from db_creator.db.repositories.provisioning import ProvisioningRepo
from db_creator.db.session import create_sessionmaker
from db_creator.errors import ProvisioningError, UnsupportedStrategy

ADMIN_URL = "mssql+pyodbc://sa:pw@server/master?driver=x"


def test_strategy_round_trip(recording_openers) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL)
    assert repo.connection_method is ConnectionMethod.raw

    assert repo.set_strategy("EFCORE") is ConnectionMethod.orm
    assert repo.connection_method is ConnectionMethod.orm

    with pytest.raises(UnsupportedStrategy):
        repo.set_strategy("odbc")
    assert repo.connection_method is ConnectionMethod.orm


def test_unknown_initial_method_is_rejected() -> None:
    with pytest.raises(UnsupportedStrategy):
        ProvisioningRepo(admin_url=ADMIN_URL, connection_method="odbc")


def test_create_single_uses_the_active_opener(recording_openers) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL, connection_method="core")

    repo.create_single("Sales")

    core = recording_openers[ConnectionMethod.core]
    assert core.opened == [ADMIN_URL]
    assert core.executed == ["CREATE DATABASE [Sales]"]
    assert core.released == 1
    assert recording_openers[ConnectionMethod.raw].opened == []


def test_create_single_wraps_server_errors(recording_openers) -> None:
    recording_openers[ConnectionMethod.raw].fail_on = "Sales"
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    with pytest.raises(ProvisioningError) as exc:
        repo.create_single("Sales")

    assert exc.value.operation == "create_single"
    assert exc.value.target == "Sales"
    assert "Sales" in str(exc.value)
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert recording_openers[ConnectionMethod.raw].released == 1


def test_create_batch_is_one_submission(recording_openers) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    repo.create_batch(["a", "b", "c"])

    raw = recording_openers[ConnectionMethod.raw]
    assert raw.opened == [ADMIN_URL]
    assert raw.executed == ["CREATE DATABASE [a];\nCREATE DATABASE [b];\nCREATE DATABASE [c]"]


def test_create_batch_empty_makes_no_call(recording_openers) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    repo.create_batch([])

    assert all(not o.opened for o in recording_openers.values())


def test_create_batch_wraps_server_errors(recording_openers) -> None:
    recording_openers[ConnectionMethod.raw].fail_on = "[b]"
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    with pytest.raises(ProvisioningError) as exc:
        repo.create_batch(["a", "b"])

    assert exc.value.operation == "create_batch"
    assert exc.value.target is None


def test_run_script_targets_the_named_database(recording_openers) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL, connection_method="orm")

    repo.run_script("Sales", "CREATE TABLE t (id INT)\nGO\nINSERT INTO t VALUES (1)\n")

    orm = recording_openers[ConnectionMethod.orm]
    assert len(orm.opened) == 1
    assert orm.opened[0].split("?")[0] == "mssql+pyodbc://sa:pw@server/Sales"
    assert orm.executed == ["CREATE TABLE t (id INT)", "INSERT INTO t VALUES (1)"]


def test_run_script_stops_at_first_failing_batch(recording_openers) -> None:
    recording_openers[ConnectionMethod.raw].fail_on = "broken"
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    with pytest.raises(ProvisioningError) as exc:
        repo.run_script("Sales", "SELECT 1\nGO\nbroken\nGO\nSELECT 3")

    assert exc.value.operation == "run_script"
    assert exc.value.target == "Sales"
    assert "batch 2 of 3" in str(exc.value)
    assert recording_openers[ConnectionMethod.raw].executed == ["SELECT 1"]


@pytest.mark.parametrize("script", [None, "", "   \n", "GO\ngo\n"])
def test_run_script_skips_empty_scripts(recording_openers, script: str | None) -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL)

    repo.run_script("Sales", script)

    assert recording_openers[ConnectionMethod.raw].opened == []


def test_run_script_against_real_sqlite(tmp_path: Path) -> None:
    repo = ProvisioningRepo(admin_url=f"sqlite:///{tmp_path / 'admin.db'}")
    target = str(tmp_path / "tenant.db")

    repo.run_script(target, "CREATE TABLE a (id INTEGER)\nGO\nCREATE TABLE b (id INTEGER)\n")

    engine = create_engine(f"sqlite:///{target}")
    try:
        assert set(inspect(engine).get_table_names()) == {"a", "b"}
    finally:
        engine.dispose()


def test_create_single_against_sqlite_fails_cleanly(tmp_path: Path) -> None:
    repo = ProvisioningRepo(admin_url=f"sqlite:///{tmp_path / 'admin.db'}")

    with pytest.raises(ProvisioningError):
        repo.create_single("tenant")


def test_record_history_writes_rows(recording_openers) -> None:
    engine = create_engine("sqlite://")
    init_db(engine)
    sessions = create_sessionmaker(engine)
    repo = ProvisioningRepo(admin_url=ADMIN_URL, connection_method="core", history_sessions=sessions)

    repo.record_history([("a", True), ("b", False)], mode="single")

    with sessions() as session:
        rows = HistoryRepo(session).list_recent()
    assert {(r.db_name, r.is_created) for r in rows} == {("a", True), ("b", False)}
    assert {r.mode for r in rows} == {"single"}
    assert {r.connection_method for r in rows} == {"core"}
    engine.dispose()


def test_record_history_never_raises(recording_openers) -> None:
    engine = create_engine("sqlite://")
    init_db(engine)
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE db_info"))
    repo = ProvisioningRepo(admin_url=ADMIN_URL, history_sessions=create_sessionmaker(engine))

    repo.record_history([("a", True)], mode="batch")
    engine.dispose()


def test_record_history_disabled_is_a_no_op() -> None:
    repo = ProvisioningRepo(admin_url=ADMIN_URL)
    repo.record_history([("a", True)], mode="single")


# --- Module Notes -----------------------------------------------------------
# The mssql admin URL is never connected to; RecordingOpener replaces the openers
# wherever a test would otherwise reach a server.
