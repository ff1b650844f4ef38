"""Scenario API routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from invoice_roi.database import get_db
from invoice_roi.reports.schemas import ReportResponse
from invoice_roi.reports.service import ReportService
from invoice_roi.scenarios import schemas
from invoice_roi.scenarios.repository import ScenarioRepository

router = APIRouter()


@router.post("", response_model=schemas.ScenarioResponse, status_code=status.HTTP_201_CREATED)
async def create_scenario(
    data: schemas.ScenarioCreate,
    db: AsyncSession = Depends(get_db)
):
    """Save a named scenario and its computed result."""
    return await ScenarioRepository(db).create(data.scenario_name, data.input)


@router.get("", response_model=List[schemas.ScenarioResponse])
async def list_scenarios(db: AsyncSession = Depends(get_db)):
    """List all saved scenarios."""
    return await ScenarioRepository(db).list()


@router.get("/{scenario_id}", response_model=schemas.ScenarioResponse)
async def get_scenario(
    scenario_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific scenario."""
    return await ScenarioRepository(db).get(scenario_id)


@router.put("/{scenario_id}", response_model=schemas.ScenarioResponse)
async def update_scenario(
    scenario_id: str,
    data: schemas.ScenarioUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Rename a scenario and/or replace its input."""
    return await ScenarioRepository(db).update(scenario_id, name=data.scenario_name, data=data.input)


@router.delete("/{scenario_id}")
async def delete_scenario(
    scenario_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Delete a scenario. Reports already issued are kept."""
    await ScenarioRepository(db).delete(scenario_id)
    return {"message": "Scenario deleted"}


@router.get("/{scenario_id}/reports", response_model=List[ReportResponse])
async def list_scenario_reports(
    scenario_id: str,
    db: AsyncSession = Depends(get_db)
):
    """List reports issued for a scenario."""
    return await ReportService(db).list_for_scenario(scenario_id)
