"""
Scenario Repository - persistence for named ROI scenarios.

Guarantees:
- Scenario names are unique among live scenarios. Name checks and writes
  run under an in-process lock, and the partial unique index on
  scenarios.name is the final arbiter across processes, so two concurrent
  creates with the same name cannot both commit.
- The stored result is always recomputed from the stored input; it is never
  merged with a previous result.
- Failed operations leave the database untouched.

Usage:
    repo = ScenarioRepository(db)
    scenario = await repo.create("Acme", {"monthly_invoice_volume": 2000, ...})
    scenario = await repo.update(scenario.id, name="Acme (revised)")
"""
import asyncio
import logging
import weakref
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_roi.calculator.engine import ROICalculator
from invoice_roi.calculator.schemas import parse_input
from invoice_roi.errors import DuplicateNameError, NotFoundError, ValidationError
from invoice_roi.models.base import utcnow
from invoice_roi.scenarios.models import Scenario

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255

_name_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = weakref.WeakKeyDictionary()


def _name_index_lock() -> asyncio.Lock:
    """Lock serialising name checks and writes within this process (one per event loop)."""
    loop = asyncio.get_running_loop()
    lock = _name_locks.get(loop)
    if lock is None:
        lock = _name_locks[loop] = asyncio.Lock()
    return lock


def validate_name(name: Any) -> str:
    """Return ``name`` unchanged if it is a usable scenario name."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError.for_field("scenario_name", "Scenario name is required", name)
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError.for_field(
            "scenario_name", f"Scenario name must be at most {MAX_NAME_LENGTH} characters", name
        )
    return name


class ScenarioRepository:
    """CRUD operations for scenarios, recomputing results via the engine."""

    def __init__(self, db: AsyncSession, calculator: Optional[ROICalculator] = None):
        self.db = db
        self.calculator = calculator or ROICalculator()

    # ==========================================================================
    # Reads
    # ==========================================================================

    async def get(self, scenario_id: str) -> Scenario:
        result = await self.db.execute(
            select(Scenario).where(
                Scenario.id == scenario_id,
                Scenario.deleted_at.is_(None),
            )
        )
        scenario = result.scalar_one_or_none()
        if scenario is None:
            raise NotFoundError("scenario", scenario_id)
        return scenario

    async def list(self) -> List[Scenario]:
        """Live scenarios, oldest first."""
        result = await self.db.execute(
            select(Scenario)
            .where(Scenario.deleted_at.is_(None))
            .order_by(Scenario.created_at, Scenario.id)
        )
        return list(result.scalars().all())

    async def _name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        query = select(Scenario.id).where(
            Scenario.name == name,
            Scenario.deleted_at.is_(None),
        )
        if exclude_id is not None:
            query = query.where(Scenario.id != exclude_id)
        result = await self.db.execute(query)
        return result.first() is not None

    # ==========================================================================
    # Writes
    # ==========================================================================

    async def create(self, name: str, data: Any) -> Scenario:
        """
        Create a scenario.

        Args:
            name: Unique scenario name (case-sensitive)
            data: ScenarioInput or a mapping of its fields

        Raises:
            ValidationError: name or input out of domain
            DuplicateNameError: a live scenario already uses ``name``
        """
        name = validate_name(name)
        scenario_input = parse_input(data)
        scenario_result = self.calculator.compute(scenario_input)

        async with _name_index_lock():
            if await self._name_taken(name):
                logger.warning(f"Rejected scenario create: name '{name}' already in use")
                raise DuplicateNameError(name)

            now = utcnow()
            scenario = Scenario(
                name=name,
                input_data=scenario_input.model_dump(),
                result_data=scenario_result.model_dump(),
                created_at=now,
                updated_at=now,
            )
            self.db.add(scenario)
            await self._commit_or_duplicate(name)
        await self.db.refresh(scenario)

        logger.info(f"Created scenario {scenario.id} ('{name}')")
        return scenario

    async def update(
        self,
        scenario_id: str,
        name: Optional[str] = None,
        data: Any = None,
    ) -> Scenario:
        """
        Rename and/or replace the input of a scenario.

        The result is recomputed in full from the new (or stored) input and
        ``updated_at`` is refreshed on every successful call.

        Raises:
            NotFoundError, DuplicateNameError, ValidationError
        """
        scenario = await self.get(scenario_id)

        # Validate everything before touching the instance
        new_name = validate_name(name) if name is not None else scenario.name
        scenario_input = parse_input(data) if data is not None else scenario.input
        scenario_result = self.calculator.compute(scenario_input)

        async with _name_index_lock():
            if new_name != scenario.name and await self._name_taken(new_name, exclude_id=scenario.id):
                logger.warning(f"Rejected rename of {scenario.id}: name '{new_name}' already in use")
                raise DuplicateNameError(new_name)

            scenario.name = new_name
            scenario.input_data = scenario_input.model_dump()
            scenario.result_data = scenario_result.model_dump()
            scenario.updated_at = utcnow()

            await self._commit_or_duplicate(new_name)
        await self.db.refresh(scenario)

        logger.info(f"Updated scenario {scenario.id}")
        return scenario

    async def delete(self, scenario_id: str) -> None:
        """
        Delete a scenario.

        Deleting an already deleted scenario is a no-op. Reports generated
        from the scenario are left untouched.

        Raises:
            NotFoundError: the id was never issued
        """
        result = await self.db.execute(select(Scenario).where(Scenario.id == scenario_id))
        scenario = result.scalar_one_or_none()
        if scenario is None:
            raise NotFoundError("scenario", scenario_id)
        if scenario.is_deleted:
            return

        scenario.deleted_at = utcnow()
        await self.db.commit()
        logger.info(f"Deleted scenario {scenario.id} ('{scenario.name}')")

    async def _commit_or_duplicate(self, name: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Unique index rejected scenario name '{name}'")
            raise DuplicateNameError(name) from e
