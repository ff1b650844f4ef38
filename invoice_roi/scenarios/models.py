"""Scenario model - named ROI inputs with their computed result."""
from sqlalchemy import Column, String, DateTime, Index, text

from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult
from invoice_roi.database import Base
from invoice_roi.models.base import JSONType, generate_id


class Scenario(Base):
    """A saved ROI scenario."""
    __tablename__ = "scenarios"

    id = Column(String, primary_key=True, default=lambda: generate_id("scn"))
    name = Column(String(255), nullable=False)

    # Stored as JSON; result is always the engine output for input_data
    input_data = Column(JSONType, nullable=False)
    result_data = Column(JSONType, nullable=False)

    # Metadata (maintained by the repository)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        # Names are unique among live scenarios; deleted names can be reused
        Index(
            "uq_scenarios_name_live",
            "name",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    @property
    def input(self) -> ScenarioInput:
        return ScenarioInput.model_validate(self.input_data)

    @property
    def result(self) -> ScenarioResult:
        return ScenarioResult.model_validate(self.result_data)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
