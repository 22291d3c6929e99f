"""
db_creator.services

Service-layer package.

Responsibilities:
- Own the provisioning workflows and their failure policy.
- Turn repository errors into result objects for the front ends.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake repositories.
