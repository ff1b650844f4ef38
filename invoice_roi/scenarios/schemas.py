"""Pydantic schemas for scenarios."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult
from invoice_roi.models.base import as_utc


class ScenarioCreate(BaseModel):
    """Schema for creating a scenario."""
    scenario_name: str = Field(..., min_length=1, max_length=255)
    input: ScenarioInput


class ScenarioUpdate(BaseModel):
    """Schema for updating a scenario. Omitted fields are left as they are."""
    scenario_name: Optional[str] = Field(None, min_length=1, max_length=255)
    input: Optional[ScenarioInput] = None


class ScenarioResponse(BaseModel):
    """Schema for scenario response."""
    id: str
    scenario_name: str = Field(validation_alias="name")
    input: ScenarioInput
    result: ScenarioResult
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
