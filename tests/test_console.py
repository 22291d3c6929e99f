"""
tests.test_console

Console prompts and rendering.

Responsibilities:
- Ensure prompts re-ask on invalid input and degrade on a closed stream.
- Ensure the connection-method prompt falls back to the configured default.
- Ensure results render with the created-database list.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable

import pytest
from rich.console import Console

from db_creator.cli.console import ConsoleUI
from db_creator.db.connections import ConnectionMethod
from db_creator.services.results import DbOutcome, OperationResult


def scripted(lines: Iterable[str]) -> Callable[[str], str]:
    """
    Returns a `read_line` that answers prompts in order, then behaves like a closed stdin.
    """

    answers = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    return read_line


def make_ui(lines: Iterable[str]) -> tuple[ConsoleUI, io.StringIO]:
    out = io.StringIO()
    console = Console(file=out, width=120, color_system=None, highlight=False)
    return ConsoleUI(console=console, read_line=scripted(lines)), out


def test_select_option_reasks_until_integer() -> None:
    ui, out = make_ui(["x", "", "2"])

    assert ui.select_option() == 2
    assert out.getvalue().count("Invalid input. Try again...") == 2


def test_select_option_exits_on_closed_stream() -> None:
    ui, _ = make_ui([])
    assert ui.select_option() == 0


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("1", ConnectionMethod.raw), ("2", ConnectionMethod.orm), ("3", ConnectionMethod.core)],
)
def test_connection_method_choice(answer: str, expected: ConnectionMethod) -> None:
    ui, _ = make_ui([answer])
    assert ui.get_connection_method_choice() is expected


def test_connection_method_invalid_choice_uses_default() -> None:
    ui, out = make_ui(["9"])

    assert ui.get_connection_method_choice() is ConnectionMethod.raw
    assert "Invalid choice. Using default raw." in out.getvalue()


def test_connection_method_empty_choice_uses_default() -> None:
    ui, out = make_ui([""])

    assert ui.get_connection_method_choice() is ConnectionMethod.raw
    assert "No choice entered. Using default raw." in out.getvalue()


def test_connection_method_empty_choice_uses_the_given_default() -> None:
    ui, out = make_ui([""])

    assert ui.get_connection_method_choice(ConnectionMethod.core) is ConnectionMethod.core
    assert "3. SQLAlchemy Core connection (Default)" in out.getvalue()


def test_get_database_names_reasks_on_bad_count() -> None:
    ui, out = make_ui(["-1", "two", "2", "alpha", " beta "])

    assert ui.get_database_names() == ["alpha", "beta"]
    assert out.getvalue().count("Invalid input. Try again...") == 2


def test_get_database_names_zero_and_closed_stream() -> None:
    ui, _ = make_ui(["0"])
    assert ui.get_database_names() == []

    ui, _ = make_ui([])
    assert ui.get_database_names() == []

    ui, _ = make_ui(["3", "only-one"])
    assert ui.get_database_names() == ["only-one"]


def test_get_script_path() -> None:
    ui, _ = make_ui(["Y", "/tmp/setup.sql"])
    assert ui.get_script_path() == "/tmp/setup.sql"

    ui, _ = make_ui(["n"])
    assert ui.get_script_path() is None

    ui, out = make_ui(["y", "  "])
    assert ui.get_script_path() is None
    assert "No script path entered. Script execution will be skipped." in out.getvalue()


def test_connection_url_input() -> None:
    ui, _ = make_ui([""])
    assert ui.get_connection_url_input() is None

    ui, _ = make_ui(["postgresql://u:p@host/postgres"])
    assert ui.get_connection_url_input() == "postgresql://u:p@host/postgres"

    ui, out = make_ui(["definitely not a url"])
    assert ui.get_connection_url_input() is None
    assert "ERROR: Invalid database URL" in out.getvalue()


def test_display_result_lists_created_databases() -> None:
    ui, out = make_ui([])
    result = OperationResult(
        created_names=("a", "c"),
        summary="2 out of 3 databases were created successfully. 1 databases failed to be created.",
        success=True,
        outcomes=(DbOutcome("a", True), DbOutcome("b", False), DbOutcome("c", True)),
    )

    ui.display_result(result)

    text = out.getvalue()
    assert "2 out of 3 databases were created successfully." in text
    assert "ERROR:" not in text
    assert "Final list of created databases:" in text
    assert "1. a" in text
    assert "2. c" in text


def test_display_result_without_creations() -> None:
    ui, out = make_ui([])

    ui.display_result(OperationResult(created_names=(), summary="[bad] input", success=False))

    text = out.getvalue()
    assert "ERROR: [bad] input" in text
    assert "No database created!" in text


# --- Module Notes -----------------------------------------------------------
# color_system=None keeps markup out of the captured text so assertions read plainly.
