"""
Consolidated models package.

Explicit imports only so every table is registered on Base.metadata.
"""

# Base utilities
from invoice_roi.models.base import generate_id, utcnow

# Scenario model
from invoice_roi.scenarios.models import Scenario

# Report model
from invoice_roi.reports.models import Report


__all__ = [
    # Utilities
    "generate_id",
    "utcnow",
    # Scenario
    "Scenario",
    # Report
    "Report",
]
