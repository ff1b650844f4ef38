"""Report model - an email-gated snapshot of a scenario."""
from sqlalchemy import Column, String, DateTime, ForeignKey

from invoice_roi.database import Base
from invoice_roi.models.base import JSONType, generate_id


class Report(Base):
    """
    A report issued for a scenario.

    ``scenario_id`` is a non-owning reference: the snapshot is copied at
    generation time and never follows later edits or deletion of the scenario.
    Reports have no update path.
    """
    __tablename__ = "reports"

    id = Column(String, primary_key=True, default=lambda: generate_id("rpt"))
    scenario_id = Column(String, ForeignKey("scenarios.id"), nullable=False, index=True)
    email = Column(String(320), nullable=False)

    # {"scenario_name": ..., "input": {...}, "result": {...}}
    snapshot = Column(JSONType, nullable=False)

    generated_at = Column(DateTime(timezone=True), nullable=False)
