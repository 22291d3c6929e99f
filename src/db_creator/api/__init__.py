"""
db_creator.api

HTTP front end (FastAPI).

Responsibilities:
- Expose provisioning and connection-method selection over HTTP.
- Provide liveness/readiness checks.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Endpoints are sync: the provisioning service is blocking and runs on the thread pool.
