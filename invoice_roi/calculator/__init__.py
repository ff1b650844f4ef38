"""ROI calculation engine."""
from invoice_roi.calculator.engine import (
    DEFAULT_CONSTANTS,
    EngineConstants,
    ROICalculator,
    compute,
)
from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult

__all__ = [
    "DEFAULT_CONSTANTS",
    "EngineConstants",
    "ROICalculator",
    "compute",
    "ScenarioInput",
    "ScenarioResult",
]
