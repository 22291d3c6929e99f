"""
db_creator.cli.console

Console prompts and rendering for the interactive front end.

Responsibilities:
- Show the banner and command menu.
- Prompt for connection URL override, connection method, database names, script path.
- Render results with a success/error colour distinction.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console
from rich.markup import escape
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from db_creator.db.connections import ConnectionMethod
from db_creator.observability.logging import get_logger
from db_creator.services.results import OperationResult

log = get_logger(__name__)

METHOD_CHOICES: dict[str, ConnectionMethod] = {
    "1": ConnectionMethod.raw,
    "2": ConnectionMethod.orm,
    "3": ConnectionMethod.core,
}
DEFAULT_METHOD = ConnectionMethod.raw
METHOD_LABELS: dict[ConnectionMethod, str] = {
    ConnectionMethod.raw: "Raw DBAPI connection",
    ConnectionMethod.orm: "SQLAlchemy ORM session",
    ConnectionMethod.core: "SQLAlchemy Core connection",
}


class ConsoleUI:
    def __init__(
        self,
        *,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self._console = console or Console(highlight=False)
        self._read_line = read_line or self._console.input

    def _ask(self, prompt: str) -> str | None:
        # None means the input stream is closed.
        try:
            return self._read_line(prompt).strip()
        except EOFError:
            return None

    def print(self, text: str = "") -> None:
        self._console.print(escape(text))

    def display_app_name(self) -> None:
        self._console.print("[bold]" + "*" * 42 + "[/bold]")
        self._console.print("[bold]" + " DATABASE CREATOR ".center(42, "*") + "[/bold]")
        self._console.print("[bold]" + "*" * 42 + "[/bold]")

    def display_commands(self) -> None:
        self.print("\nCOMMANDS:")
        self.print("1. Create database(s) with single execution.")
        self.print("2. Create database(s) with batch.")
        self.print("0. Exit.")

    def select_option(self) -> int:
        while True:
            raw = self._ask("Please enter an option or '0' to exit: ")
            if raw is None:
                return 0
            try:
                return int(raw)
            except ValueError:
                self.print("Invalid input. Try again...\n")

    def get_connection_url_input(self) -> str | None:
        """
        Optional override of the configured administrative URL. Blank keeps the
        configured one; an unparsable URL is reported and ignored.
        """

        raw = self._ask(
            "\n(Optional) Enter the administrative database URL "
            "(press Enter to use the configured one): "
        )
        if not raw:
            return None
        try:
            make_url(raw)
        except ArgumentError:
            log.warning("connection_url_override_rejected")
            self.display_message("Invalid database URL. Using the configured one.", is_error=True)
            return None
        log.info("connection_url_override_accepted")
        return raw

    def get_connection_method_choice(
        self, default: ConnectionMethod = DEFAULT_METHOD
    ) -> ConnectionMethod:
        """
        `default` is the configured method; a blank or unknown answer keeps it.
        """

        default_key = next(k for k, m in METHOD_CHOICES.items() if m is default)
        self.print("\nChoose a database connection method:")
        for key, method in METHOD_CHOICES.items():
            suffix = " (Default)" if method is default else ""
            self.print(f"  {key}. {METHOD_LABELS[method]}{suffix}")
        choice = self._ask(f"Enter your choice (1-3, default is {default_key}): ")

        method = METHOD_CHOICES.get(choice or "")
        if method is not None:
            log.info("connection_method_selected", method=str(method))
            return method

        log.info("connection_method_defaulted", choice=choice, method=str(default))
        if choice:
            self.print(f"Invalid choice. Using default {default}.")
        else:
            self.print(f"No choice entered. Using default {default}.")
        return default

    def get_database_names(self) -> list[str]:
        while True:
            raw = self._ask("\nHow many databases do you want to create? ")
            if raw is None:
                return []
            try:
                count = int(raw)
            except ValueError:
                count = -1
            if count >= 0:
                break
            self.print("Invalid input. Try again...\n")

        names: list[str] = []
        if count:
            self.print(f"Please enter {count} database names:")
        for i in range(count):
            name = self._ask(f"  {i + 1}. ")
            if name is None:
                break
            names.append(name)
        return names

    def get_script_path(self) -> str | None:
        choice = self._ask("\nDo you want to execute a SQL script on the created database(s)? (y/n) ")
        if (choice or "").lower() != "y":
            log.info("script_declined")
            return None

        path = self._ask("Enter the full path to the SQL script file: ")
        if not path:
            log.warning("script_path_missing")
            self.print("No script path entered. Script execution will be skipped.")
            return None
        return path

    def display_message(self, message: str, *, is_error: bool = False) -> None:
        if is_error:
            self._console.print(f"\n[red]ERROR: {escape(message)}[/red]")
        else:
            self._console.print(f"\n[green]{escape(message)}[/green]")

    def display_result(self, result: OperationResult) -> None:
        self.display_message(result.summary, is_error=not result.success)
        if not result.created_names:
            self.print("\nNo database created!")
            return
        self.print("\nFinal list of created databases:")
        for i, name in enumerate(result.created_names, start=1):
            self.print(f"{i}. {name}")

    def pause(self) -> None:
        self._ask("\nPress Enter to continue...")


# --- Module Notes -----------------------------------------------------------
# `read_line` is injectable so tests can script a session without touching stdin.
