"""
db_creator.cli

Interactive console front end.

Responsibilities:
- Prompt for the request, call the provisioning service, render the result.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The console is a thin shell; provisioning policy lives in services.
