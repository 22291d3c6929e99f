"""
db_creator.cli.app

Menu loop for the console front end.

Responsibilities:
- Apply the connection-method choice to the service.
- Dispatch menu options to single-execution or batch provisioning.
"""

from __future__ import annotations

from db_creator.cli.console import ConsoleUI
from db_creator.errors import UnsupportedStrategy
from db_creator.observability.logging import get_logger
from db_creator.services.provisioning_service import ProvisioningService
from db_creator.services.results import OperationResult

log = get_logger(__name__)


class App:
    def __init__(self, *, ui: ConsoleUI, service: ProvisioningService) -> None:
        self._ui = ui
        self._service = service

    def choose_connection_method(self, name: str | None = None) -> None:
        """
        Uses `name` when given (CLI flag), otherwise prompts. The configured method
        (DBC_CONNECTION_METHOD) is the default for a blank answer, and it is kept
        when `name` is unsupported.
        """

        configured = self._service.connection_method
        choice = name if name is not None else self._ui.get_connection_method_choice(configured)
        try:
            self._service.set_database_connection_method(choice)
        except UnsupportedStrategy as e:
            log.warning("connection_method_rejected", method=choice, kept=str(configured))
            self._ui.display_message(f"{e} Using default {configured}.", is_error=True)

    def run(self) -> None:
        log.info("app_started", connection_method=str(self._service.connection_method))
        while True:
            self._ui.display_app_name()
            self._ui.display_commands()
            option = self._ui.select_option()
            if option == 0:
                break
            self.execute_operation(option)
            self._ui.pause()
        log.info("app_stopped")

    def execute_operation(self, option: int) -> OperationResult | None:
        if option == 1:
            result = self.single_execution()
        elif option == 2:
            result = self.batch()
        else:
            self._ui.display_message("Invalid option.", is_error=True)
            return None
        self._ui.display_result(result)
        return result

    def single_execution(self) -> OperationResult:
        names = self._ui.get_database_names()
        script_path = self._ui.get_script_path() if names else None
        return self._service.single_execution(names, script_path)

    def batch(self) -> OperationResult:
        names = self._ui.get_database_names()
        script_path = self._ui.get_script_path() if names else None
        return self._service.batch(names, script_path)
