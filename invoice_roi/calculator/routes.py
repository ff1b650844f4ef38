"""Preview route: run the engine without persisting anything."""
from fastapi import APIRouter

from invoice_roi.calculator.engine import compute
from invoice_roi.calculator.schemas import ScenarioInput, ScenarioResult

router = APIRouter()


@router.post("/simulate", response_model=ScenarioResult)
async def simulate(data: ScenarioInput):
    """Compute ROI figures for the given metrics."""
    return compute(data)
