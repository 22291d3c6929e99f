"""
db_creator.api.__main__

Entrypoint for running the HTTP front end via `python -m db_creator.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import sys

import uvicorn

from db_creator.api.app import create_app
from db_creator.errors import ConfigurationError
from db_creator.settings import get_settings


def main() -> int:
    try:
        settings = get_settings()
        app = create_app(settings=settings)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# Run with a single worker: the active connection method lives in process memory.
