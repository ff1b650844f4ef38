"""Pydantic schemas for ROI inputs and results."""
from pydantic import BaseModel, Field, field_serializer
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Dict, List, Optional

from invoice_roi.errors import ValidationError

UNDEFINED = "undefined"


class ScenarioInput(BaseModel):
    """Business metrics describing the current manual invoice process."""
    monthly_invoice_volume: float = Field(..., gt=0)
    num_ap_staff: float = Field(..., ge=0)
    avg_hours_per_invoice: float = Field(..., ge=0)
    hourly_wage: float = Field(..., ge=0)
    error_rate_manual: float = Field(..., ge=0, le=1)  # fraction, not percent
    error_cost: float = Field(..., ge=0)
    time_horizon_months: int = Field(..., gt=0, strict=True)
    one_time_implementation_cost: float = Field(..., ge=0)

    model_config = {"frozen": True, "extra": "forbid", "allow_inf_nan": False}


class ScenarioResult(BaseModel):
    """
    Derived ROI figures.

    Ratio metrics whose denominator is zero are stored as None, listed in
    ``undefined_metrics`` and rendered as "undefined" in JSON.
    """
    labor_cost_manual: float
    auto_cost: float
    error_savings: float
    monthly_savings: float
    cumulative_savings: float
    payback_months: Optional[float]
    roi_percentage: Optional[float]
    undefined_metrics: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_serializer("payback_months", "roi_percentage", when_used="json")
    def serialize_ratio(self, value: Optional[float]):
        return UNDEFINED if value is None else value


def parse_input(data: Any) -> ScenarioInput:
    """
    Coerce ``data`` into a ScenarioInput.

    Raises:
        ValidationError: with one entry per offending field
    """
    if isinstance(data, ScenarioInput):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return ScenarioInput.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e


def _field_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    fields = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "input"
        value = err.get("input")
        if not isinstance(value, (int, float, str, bool, type(None))):
            value = str(value)
        fields.append({"field": loc, "message": err.get("msg", "invalid value"), "value": value})
    return fields
