"""Report API routes."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_roi.database import get_db
from invoice_roi.middleware import report_rate_limit
from invoice_roi.reports import schemas
from invoice_roi.reports.service import ReportService

router = APIRouter()


@router.post("", response_model=schemas.ReportResponse, status_code=status.HTTP_201_CREATED)
@report_rate_limit
async def generate_report(
    request: Request,
    data: schemas.ReportCreate,
    db: AsyncSession = Depends(get_db)
):
    """Issue a report for a scenario to the given email address."""
    return await ReportService(db).generate(data.scenario_id, data.email)


@router.get("/{report_id}", response_model=schemas.ReportResponse)
async def get_report(
    report_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Get an issued report."""
    return await ReportService(db).get(report_id)
