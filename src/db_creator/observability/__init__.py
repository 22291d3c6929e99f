"""
db_creator.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Per-operation context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics/tracing exporters can be added here without touching provisioning logic.
