"""
db_creator.auth

Authentication/authorization package for the HTTP front end.

Responsibilities:
- JWT issuing and validation.
- FastAPI auth dependencies (Principal + role checks).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The console front end does not use this package: whoever runs it already holds
# the administrative connection string.
