"""
db_creator.db

Persistence package (SQLAlchemy).

Responsibilities:
- Provide connection methods, SQL rendering helpers, the history model, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here talks to the server at import time; engines are created per call.
