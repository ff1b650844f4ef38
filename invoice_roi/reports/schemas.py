"""Pydantic schemas for reports."""
from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime

from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult
from invoice_roi.models.base import as_utc


class ReportCreate(BaseModel):
    """Schema for requesting a report."""
    scenario_id: str
    email: EmailStr


class ReportSnapshot(BaseModel):
    """Scenario contents frozen at report generation time."""
    scenario_name: str
    input: ScenarioInput
    result: ScenarioResult

    model_config = {"frozen": True}


class ReportResponse(BaseModel):
    """Schema for report response."""
    id: str
    scenario_id: str
    email: str
    snapshot: ReportSnapshot
    generated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("generated_at")
    @classmethod
    def generated_at_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
