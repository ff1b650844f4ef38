"""Development utilities for seeding and inspecting scenarios."""
import asyncio

from sqlalchemy import delete

from invoice_roi.database import AsyncSessionLocal, init_db
from invoice_roi.errors import DuplicateNameError
from invoice_roi.models import Report, Scenario
from invoice_roi.reports.service import ReportService
from invoice_roi.scenarios.repository import ScenarioRepository


DEMO_SCENARIOS = [
    {
        "name": "Mid-size AP team",
        "input": {
            "monthly_invoice_volume": 2000,
            "num_ap_staff": 3,
            "avg_hours_per_invoice": 0.1667,
            "hourly_wage": 30,
            "error_rate_manual": 0.005,
            "error_cost": 100,
            "time_horizon_months": 36,
            "one_time_implementation_cost": 50000,
        },
    },
    {
        "name": "Small office",
        "input": {
            "monthly_invoice_volume": 300,
            "num_ap_staff": 1,
            "avg_hours_per_invoice": 0.25,
            "hourly_wage": 25,
            "error_rate_manual": 0.02,
            "error_cost": 40,
            "time_horizon_months": 24,
            "one_time_implementation_cost": 15000,
        },
    },
]


async def create_demo_data(email: str = "demo@example.com", session_factory=AsyncSessionLocal):
    """
    Create demo scenarios and one report for development.

    Existing scenarios with the same names are left as they are.
    """
    created = []
    async with session_factory() as db:
        repo = ScenarioRepository(db)
        for demo in DEMO_SCENARIOS:
            try:
                scenario = await repo.create(demo["name"], demo["input"])
            except DuplicateNameError:
                print(f"⏭️  Scenario '{demo['name']}' already exists")
                continue
            created.append(scenario)
            print(f"✅ Created scenario: {scenario.id} ({scenario.name})")

        if created:
            report = await ReportService(db, repo).generate(created[0].id, email)
            print(f"✅ Created report {report.id} for {email}")

    return [s.id for s in created]


async def show_scenario(scenario_id: str, session_factory=AsyncSessionLocal):
    """Print a scenario's ROI figures."""
    async with session_factory() as db:
        scenario = await ScenarioRepository(db).get(scenario_id)
        result = scenario.result

        print("\n" + "=" * 60)
        print(f"SCENARIO: {scenario.name}")
        print("=" * 60)
        print(f"Manual labor cost:   ${result.labor_cost_manual:,.2f}/month")
        print(f"Automation cost:     ${result.auto_cost:,.2f}/month")
        print(f"Error savings:       ${result.error_savings:,.2f}/month")
        print(f"Monthly savings:     ${result.monthly_savings:,.2f}")
        print(f"Cumulative savings:  ${result.cumulative_savings:,.2f}")
        payback = "undefined" if result.payback_months is None else f"{result.payback_months:.2f} months"
        roi = "undefined" if result.roi_percentage is None else f"{result.roi_percentage:.2f}%"
        print(f"Payback:             {payback}")
        print(f"ROI:                 {roi}")
        print("=" * 60)


async def clear_all_data(session_factory=AsyncSessionLocal):
    """Clear all data from database (DEVELOPMENT ONLY)."""
    async with session_factory() as db:
        # Reports reference scenarios
        await db.execute(delete(Report))
        await db.execute(delete(Scenario))
        await db.commit()
        print("✅ Cleared all data from database")


async def _with_tables(coro):
    await init_db()
    return await coro


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage:")
        print("  python dev_utils.py create_demo_data [email]")
        print("  python dev_utils.py show_scenario <scenario_id>")
        print("  python dev_utils.py clear_all")
        sys.exit(1)

    command = sys.argv[1]

    if command == "create_demo_data":
        email = sys.argv[2] if len(sys.argv) > 2 else "demo@example.com"
        ids = asyncio.run(_with_tables(create_demo_data(email)))
        print(f"\n🎉 Demo data created! Scenario IDs: {', '.join(ids) or 'none'}")

    elif command == "show_scenario":
        if len(sys.argv) < 3:
            print("❌ Please provide scenario_id")
            sys.exit(1)
        asyncio.run(_with_tables(show_scenario(sys.argv[2])))

    elif command == "clear_all":
        confirm = input("⚠️  Are you sure? This will delete ALL data. Type 'yes' to confirm: ")
        if confirm.lower() == "yes":
            asyncio.run(_with_tables(clear_all_data()))
        else:
            print("❌ Cancelled")

    else:
        print(f"❌ Unknown command: {command}")
