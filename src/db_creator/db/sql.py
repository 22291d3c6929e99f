"""
db_creator.db.sql

SQL text helpers for provisioning commands.

Responsibilities:
- Render CREATE DATABASE statements with dialect-correct identifier quoting.
- Render a multi-statement batch submission.
- Split script text into independently executable batches on `GO` lines.
- Derive a per-database URL from the administrative URL.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from sqlalchemy.engine import Dialect, make_url

CREATE_DATABASE = "CREATE DATABASE {name}"

# A line holding only GO (any case, surrounding blanks allowed) separates batches.
_SCRIPT_SEPARATOR = re.compile(r"^[ \t]*GO[ \t]*\r?$", re.IGNORECASE | re.MULTILINE)


def _dialect_for(url: str) -> Dialect:
    # Loading the dialect class does not import the DBAPI driver.
    return make_url(url).get_dialect()()


def quote_name(url: str, name: str) -> str:
    return _dialect_for(url).identifier_preparer.quote_identifier(name)


def render_create(url: str, name: str) -> str:
    return CREATE_DATABASE.format(name=quote_name(url, name))


def render_create_batch(url: str, names: Sequence[str]) -> str:
    preparer = _dialect_for(url).identifier_preparer
    return ";\n".join(
        CREATE_DATABASE.format(name=preparer.quote_identifier(name)) for name in names
    )


def split_script(script: str) -> list[str]:
    """
    Returns the non-blank batches of `script` in order, stripped.

    >>> split_script("CREATE TABLE a (id INT)\\nGO\\n\\ngo\\nSELECT 1")
    ['CREATE TABLE a (id INT)', 'SELECT 1']
    """

    return [part.strip() for part in _SCRIPT_SEPARATOR.split(script) if part.strip()]


def target_url(admin_url: str, database: str) -> str:
    # Only the database segment changes; host, credentials and query options are inherited.
    url = make_url(admin_url).set(database=database)
    return url.render_as_string(hide_password=False)


# --- Module Notes -----------------------------------------------------------
# Database names cannot be bound as parameters in CREATE DATABASE, so quoting through
# the dialect's identifier preparer is the only injection guard.
