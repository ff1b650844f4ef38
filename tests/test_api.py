"""
API tests for the calculator, scenario and report routes.

Requests go through the full FastAPI app (exception handlers, rate limiter,
response models) against a per-test SQLite database.
"""

import pytest


# =============================================================================
# Helpers
# =============================================================================

async def create(client, name, data):
    return await client.post("/api/scenarios", json={"scenario_name": name, "input": data})


# =============================================================================
# Simulate
# =============================================================================

class TestSimulate:
    """Tests for the preview endpoint."""

    @pytest.mark.asyncio
    async def test_simulate(self, client, example_input):
        """Test a preview returns computed figures."""
        rv = await client.post("/api/simulate", json=example_input)

        assert rv.status_code == 200
        body = rv.json()
        assert body["auto_cost"] == pytest.approx(400.0)
        assert body["monthly_savings"] == pytest.approx((30006.0 + 800.0 - 400.0) * 1.1)
        assert body["undefined_metrics"] == []

    @pytest.mark.asyncio
    async def test_simulate_does_not_persist(self, client, example_input):
        """Test a preview stores nothing."""
        await client.post("/api/simulate", json=example_input)

        rv = await client.get("/api/scenarios")

        assert rv.json() == []

    @pytest.mark.asyncio
    async def test_simulate_undefined_roi(self, client, example_input):
        """Test a zero implementation cost renders ROI as "undefined"."""
        example_input["one_time_implementation_cost"] = 0

        rv = await client.post("/api/simulate", json=example_input)

        assert rv.status_code == 200
        assert rv.json()["roi_percentage"] == "undefined"
        assert rv.json()["undefined_metrics"] == ["roi_percentage"]

    @pytest.mark.asyncio
    async def test_simulate_validation(self, client, example_input):
        """Test invalid input returns 422 naming the field."""
        example_input["time_horizon_months"] = 0

        rv = await client.post("/api/simulate", json=example_input)

        assert rv.status_code == 422
        body = rv.json()
        assert body["error"] == "validation_error"
        assert [f["field"] for f in body["fields"]] == ["time_horizon_months"]

    @pytest.mark.asyncio
    async def test_simulate_overflow(self, client, example_input):
        """Test inputs that overflow the figures return 422 instead of NaN."""
        example_input.update(num_ap_staff=1e308, hourly_wage=1e308, avg_hours_per_invoice=0)

        rv = await client.post("/api/simulate", json=example_input)

        assert rv.status_code == 422
        body = rv.json()
        assert body["error"] == "validation_error"
        assert body["fields"][0]["field"] == "input"

    @pytest.mark.asyncio
    async def test_constants_not_exposed(self, client, example_input):
        """Test pricing constants never appear in a response."""
        rv = await client.post("/api/simulate", json=example_input)

        assert "min_roi_boost_factor" not in rv.text
        assert "automated_cost_per_invoice" not in rv.text


# =============================================================================
# Scenarios
# =============================================================================

class TestScenarioRoutes:
    """Tests for scenario CRUD routes."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, client, example_input):
        """Test creating then fetching a scenario."""
        rv = await create(client, "Acme", example_input)

        assert rv.status_code == 201
        created = rv.json()
        assert created["scenario_name"] == "Acme"
        assert created["input"]["monthly_invoice_volume"] == 2000
        assert created["result"]["auto_cost"] == pytest.approx(400.0)
        assert "created_at" in created and "updated_at" in created

        rv = await client.get(f"/api/scenarios/{created['id']}")
        assert rv.status_code == 200
        assert rv.json() == created

    @pytest.mark.asyncio
    async def test_duplicate_name(self, client, example_input):
        """Test the second "Acme" gets 409 with the conflicting value."""
        first = await create(client, "Acme", example_input)
        second = await create(client, "Acme", example_input)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {
            "error": "duplicate_name",
            "detail": "Scenario name 'Acme' is already in use",
            "field": "name",
            "value": "Acme",
        }

    @pytest.mark.asyncio
    async def test_blank_name(self, client, example_input):
        """Test a whitespace-only name is rejected."""
        rv = await create(client, "   ", example_input)

        assert rv.status_code == 422
        assert rv.json()["fields"][0]["field"] == "scenario_name"

    @pytest.mark.asyncio
    async def test_result_fields_rejected_in_input(self, client, example_input):
        """Test callers cannot supply result figures."""
        rv = await create(client, "Acme", {**example_input, "roi_percentage": 999})

        assert rv.status_code == 422

    @pytest.mark.asyncio
    async def test_create_overflow_not_stored(self, client, example_input):
        """Test an overflowing scenario is rejected and nothing is stored."""
        rv = await create(client, "Huge", {**example_input, "num_ap_staff": 1e308, "hourly_wage": 1e308})

        assert rv.status_code == 422
        assert rv.json()["fields"][0]["field"] == "input"
        assert (await client.get("/api/scenarios")).json() == []

    @pytest.mark.asyncio
    async def test_timestamps_are_utc(self, client, example_input):
        """Test timestamps carry an explicit UTC offset."""
        created = (await create(client, "Acme", example_input)).json()

        rv = await client.get(f"/api/scenarios/{created['id']}")

        for key in ("created_at", "updated_at"):
            assert created[key].endswith("Z") or created[key].endswith("+00:00")
            assert rv.json()[key].endswith("Z") or rv.json()[key].endswith("+00:00")

    @pytest.mark.asyncio
    async def test_list(self, client, example_input):
        """Test listing returns created scenarios."""
        await create(client, "Acme", example_input)
        await create(client, "Globex", example_input)

        rv = await client.get("/api/scenarios")

        assert rv.status_code == 200
        assert sorted(s["scenario_name"] for s in rv.json()) == ["Acme", "Globex"]

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        """Test an unknown scenario id returns 404."""
        rv = await client.get("/api/scenarios/scn_missing")

        assert rv.status_code == 404
        assert rv.json()["error"] == "not_found"
        assert rv.json()["id"] == "scn_missing"

    @pytest.mark.asyncio
    async def test_update_name_only(self, client, example_input):
        """Test a rename keeps the result."""
        created = (await create(client, "Acme", example_input)).json()

        rv = await client.put(f"/api/scenarios/{created['id']}", json={"scenario_name": "Acme Corp"})

        assert rv.status_code == 200
        assert rv.json()["scenario_name"] == "Acme Corp"
        assert rv.json()["result"] == created["result"]

    @pytest.mark.asyncio
    async def test_update_input(self, client, example_input):
        """Test an input change recomputes the result."""
        created = (await create(client, "Acme", example_input)).json()

        rv = await client.put(
            f"/api/scenarios/{created['id']}",
            json={"input": {**example_input, "monthly_invoice_volume": 4000}},
        )

        assert rv.status_code == 200
        assert rv.json()["result"]["auto_cost"] == pytest.approx(800.0)
        assert rv.json()["scenario_name"] == "Acme"

    @pytest.mark.asyncio
    async def test_update_rename_collision(self, client, example_input):
        """Test renaming onto an existing name returns 409."""
        await create(client, "Acme", example_input)
        globex = (await create(client, "Globex", example_input)).json()

        rv = await client.put(f"/api/scenarios/{globex['id']}", json={"scenario_name": "Acme"})

        assert rv.status_code == 409

    @pytest.mark.asyncio
    async def test_update_missing(self, client):
        """Test updating an unknown scenario returns 404."""
        rv = await client.put("/api/scenarios/scn_missing", json={"scenario_name": "X"})

        assert rv.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, client, example_input):
        """Test delete, repeat delete, and delete of an unknown id."""
        created = (await create(client, "Acme", example_input)).json()

        assert (await client.delete(f"/api/scenarios/{created['id']}")).status_code == 200
        assert (await client.get(f"/api/scenarios/{created['id']}")).status_code == 404
        assert (await client.delete(f"/api/scenarios/{created['id']}")).status_code == 200
        assert (await client.delete("/api/scenarios/scn_never")).status_code == 404


# =============================================================================
# Reports
# =============================================================================

class TestReportRoutes:
    """Tests for report routes."""

    @pytest.mark.asyncio
    async def test_generate_and_get(self, client, example_input):
        """Test issuing and fetching a report."""
        scenario = (await create(client, "Acme", example_input)).json()

        rv = await client.post("/api/reports", json={"scenario_id": scenario["id"], "email": "cfo@acme.com"})

        assert rv.status_code == 201
        report = rv.json()
        assert report["scenario_id"] == scenario["id"]
        assert report["email"] == "cfo@acme.com"
        assert report["snapshot"]["scenario_name"] == "Acme"
        assert report["snapshot"]["result"] == scenario["result"]

        rv = await client.get(f"/api/reports/{report['id']}")
        assert rv.status_code == 200
        assert rv.json() == report

    @pytest.mark.asyncio
    async def test_generate_missing_scenario(self, client):
        """Test a report for a nonexistent scenario returns 404."""
        rv = await client.post("/api/reports", json={"scenario_id": "scn_missing", "email": "cfo@acme.com"})

        assert rv.status_code == 404
        assert rv.json()["resource"] == "scenario"

    @pytest.mark.asyncio
    async def test_generate_malformed_email(self, client, example_input):
        """Test a malformed email returns 422 naming the email field."""
        scenario = (await create(client, "Acme", example_input)).json()

        rv = await client.post("/api/reports", json={"scenario_id": scenario["id"], "email": "nope"})

        assert rv.status_code == 422
        assert rv.json()["fields"][0]["field"] == "email"

    @pytest.mark.asyncio
    async def test_report_survives_scenario_changes(self, client, example_input):
        """Test a report is unchanged after its scenario is edited and deleted."""
        scenario = (await create(client, "Acme", example_input)).json()
        report = (await client.post(
            "/api/reports", json={"scenario_id": scenario["id"], "email": "cfo@acme.com"}
        )).json()

        await client.put(f"/api/scenarios/{scenario['id']}", json={"input": {**example_input, "hourly_wage": 60}})
        await client.delete(f"/api/scenarios/{scenario['id']}")

        rv = await client.get(f"/api/reports/{report['id']}")
        assert rv.json() == report

        rv = await client.get(f"/api/scenarios/{scenario['id']}/reports")
        assert rv.status_code == 200
        assert [r["id"] for r in rv.json()] == [report["id"]]

    @pytest.mark.asyncio
    async def test_get_missing_report(self, client):
        """Test an unknown report id returns 404."""
        rv = await client.get("/api/reports/rpt_missing")

        assert rv.status_code == 404
        assert rv.json()["resource"] == "report"


@pytest.mark.asyncio
async def test_health(client):
    """Test the health endpoint."""
    rv = await client.get("/health")

    assert rv.status_code == 200
    assert rv.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_report_generation_rate_limited(client, example_input, monkeypatch):
    """Test report generation is throttled by its own limit."""
    from invoice_roi.config import settings

    monkeypatch.setattr(settings, "RATE_LIMIT_REPORTS", "2/minute")
    scenario = (await create(client, "Acme", example_input)).json()
    payload = {"scenario_id": scenario["id"], "email": "cfo@acme.com"}

    statuses = [(await client.post("/api/reports", json=payload)).status_code for _ in range(3)]

    assert statuses == [201, 201, 429]
