"""
db_creator.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories: server provisioning commands and history rows.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Workflow and failure policy belong in services, not here.
