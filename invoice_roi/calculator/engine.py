"""
ROI Engine - manual vs automated invoice processing.

Converts a ScenarioInput into a ScenarioResult. The engine is pure: no I/O,
no clock, no randomness. Pricing constants are injected through an immutable
EngineConstants value and never appear in the result.

Formula order:
1. labor_cost_manual  = staff * wage * hours_per_invoice * volume
2. auto_cost          = volume * automated_cost_per_invoice
3. error_savings      = max(error_rate_manual - error_rate_auto, 0) * volume * error_cost
4. monthly_savings    = (labor_cost_manual + error_savings - auto_cost) * min_roi_boost_factor
5. cumulative_savings = monthly_savings * time_horizon_months
6. payback_months     = implementation_cost / monthly_savings
7. roi_percentage     = (cumulative_savings - implementation_cost) / implementation_cost * 100

The boost factor is applied to negative totals as well; it is a multiplier,
not a floor. Inputs large enough to overflow a float are rejected with a
ValidationError rather than returned as infinity or NaN.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult
from invoice_roi.errors import DivisionUndefined, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConstants:
    """Server-side pricing assumptions for the automated process."""
    automated_cost_per_invoice: float = 0.20
    error_rate_auto: float = 0.001
    min_roi_boost_factor: float = 1.1


DEFAULT_CONSTANTS = EngineConstants()


def _divide(numerator: float, denominator: float, metric: str) -> float:
    if denominator == 0:
        raise DivisionUndefined(metric)
    return numerator / denominator


def _check_finite(figures: Dict[str, Optional[float]]) -> None:
    overflowed = [name for name, value in figures.items() if value is not None and not math.isfinite(value)]
    if overflowed:
        logger.warning(f"ROI computation overflowed: {', '.join(overflowed)}")
        raise ValidationError.for_field(
            "input",
            f"Input values are too large: {', '.join(overflowed)} overflow",
        )


class ROICalculator:
    """Computes ScenarioResult values under a fixed set of constants."""

    def __init__(self, constants: EngineConstants = DEFAULT_CONSTANTS):
        self._constants = constants

    def compute(self, data: ScenarioInput) -> ScenarioResult:
        c = self._constants
        volume = data.monthly_invoice_volume

        labor_cost_manual = data.num_ap_staff * data.hourly_wage * data.avg_hours_per_invoice * volume
        auto_cost = volume * c.automated_cost_per_invoice
        error_savings = max(data.error_rate_manual - c.error_rate_auto, 0) * volume * data.error_cost

        monthly_savings = (labor_cost_manual + error_savings - auto_cost) * c.min_roi_boost_factor
        cumulative_savings = monthly_savings * data.time_horizon_months

        undefined: List[str] = []
        payback_months: Optional[float] = None
        roi_percentage: Optional[float] = None

        # Negative savings still yield a (negative) payback; display is the caller's call
        try:
            payback_months = _divide(data.one_time_implementation_cost, monthly_savings, "payback_months")
        except DivisionUndefined as e:
            undefined.append(e.metric)

        try:
            roi_percentage = _divide(
                cumulative_savings - data.one_time_implementation_cost,
                data.one_time_implementation_cost,
                "roi_percentage",
            ) * 100
        except DivisionUndefined as e:
            undefined.append(e.metric)

        _check_finite({
            "labor_cost_manual": labor_cost_manual,
            "auto_cost": auto_cost,
            "error_savings": error_savings,
            "monthly_savings": monthly_savings,
            "cumulative_savings": cumulative_savings,
            "payback_months": payback_months,
            "roi_percentage": roi_percentage,
        })

        if undefined:
            logger.debug(f"ROI metrics undefined for input: {', '.join(undefined)}")

        return ScenarioResult(
            labor_cost_manual=labor_cost_manual,
            auto_cost=auto_cost,
            error_savings=error_savings,
            monthly_savings=monthly_savings,
            cumulative_savings=cumulative_savings,
            payback_months=payback_months,
            roi_percentage=roi_percentage,
            undefined_metrics=undefined,
        )


_default_calculator = ROICalculator()


def compute(data: ScenarioInput) -> ScenarioResult:
    """Compute a result with the default constants."""
    return _default_calculator.compute(data)
