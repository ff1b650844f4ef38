"""
Report Service - binds an email address to a scenario snapshot.

The service reads scenarios but never writes them. A report's snapshot is a
deep copy of the scenario's name, input and result at generation time.
"""
import copy
import logging
from typing import List, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_roi.errors import NotFoundError, ValidationError
from invoice_roi.models.base import utcnow
from invoice_roi.reports.models import Report
from invoice_roi.scenarios.models import Scenario
from invoice_roi.scenarios.repository import ScenarioRepository

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def validate_email(email: object) -> str:
    """
    Return the normalised form of ``email``.

    The domain is lowercased; the local part is kept as given.
    """
    try:
        return _email_adapter.validate_python(email)
    except PydanticValidationError as e:
        raise ValidationError.for_field(
            "email", "A valid email address is required", email if isinstance(email, str) else None
        ) from e


class ReportService:
    """Generates and looks up reports."""

    def __init__(self, db: AsyncSession, repository: Optional[ScenarioRepository] = None):
        self.db = db
        self.repository = repository or ScenarioRepository(db)

    async def generate(self, scenario_id: str, email: str) -> Report:
        """
        Issue a report for a scenario.

        Raises:
            NotFoundError: the scenario does not exist or was deleted
            ValidationError: ``email`` is not a syntactically valid address
        """
        scenario = await self.repository.get(scenario_id)
        email = validate_email(email)

        report = Report(
            scenario_id=scenario.id,
            email=email,
            snapshot={
                "scenario_name": scenario.name,
                "input": copy.deepcopy(scenario.input_data),
                "result": copy.deepcopy(scenario.result_data),
            },
            generated_at=utcnow(),
        )
        self.db.add(report)
        await self.db.commit()
        await self.db.refresh(report)

        logger.info(f"Generated report {report.id} for scenario {scenario.id}")
        return report

    async def get(self, report_id: str) -> Report:
        result = await self.db.execute(select(Report).where(Report.id == report_id))
        report = result.scalar_one_or_none()
        if report is None:
            raise NotFoundError("report", report_id)
        return report

    async def list_for_scenario(self, scenario_id: str) -> List[Report]:
        """
        Reports issued for ``scenario_id``, including after it was deleted.

        Raises:
            NotFoundError: the scenario id was never issued
        """
        known = await self.db.execute(select(Scenario.id).where(Scenario.id == scenario_id))
        if known.first() is None:
            raise NotFoundError("scenario", scenario_id)

        result = await self.db.execute(
            select(Report)
            .where(Report.scenario_id == scenario_id)
            .order_by(Report.generated_at, Report.id)
        )
        return list(result.scalars().all())
