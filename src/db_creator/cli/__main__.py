"""
db_creator.cli.__main__

Entrypoint for the console front end (`db-creator` or `python -m db_creator.cli`).

Responsibilities:
- Parse flags and load settings (fail fast on bad configuration).
- Configure logging, build the runtime, run the menu loop.
"""

from __future__ import annotations

import argparse
import sys

from db_creator.bootstrap import Runtime, build_runtime
from db_creator.cli.app import App
from db_creator.cli.console import ConsoleUI
from db_creator.errors import ConfigurationError
from db_creator.observability.logging import configure_logging, get_logger
from db_creator.settings import load_settings

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="db-creator",
        description="Create databases and optionally run a SQL script against each.",
    )
    parser.add_argument(
        "--database-url",
        help="Administrative database URL (overrides DBC_ADMIN_DATABASE_URL; skips the prompt).",
    )
    parser.add_argument(
        "--connection-method",
        help="raw, orm or core (skips the prompt).",
    )
    parser.add_argument("--log-level", help="Overrides DBC_LOG_LEVEL.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides: dict[str, object] = {}
    if args.database_url:
        overrides["admin_database_url"] = args.database_url
    if args.log_level:
        overrides["log_level"] = args.log_level

    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        log_file=settings.log_file,
        stream=sys.stderr,
    )

    ui = ConsoleUI()
    ui.display_app_name()
    admin_url = None if args.database_url else ui.get_connection_url_input()

    runtime: Runtime | None = None
    try:
        runtime = build_runtime(settings, admin_url=admin_url)
        app = App(ui=ui, service=runtime.service)
        app.choose_connection_method(args.connection_method)
        app.run()
    except KeyboardInterrupt:
        log.info("app_interrupted")
    except Exception:
        log.exception("app_crashed")
        return 1
    finally:
        if runtime is not None:
            runtime.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# Exit codes: 0 normal exit, 1 unexpected crash, 2 configuration error.
