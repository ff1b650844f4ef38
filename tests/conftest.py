"""Shared test fixtures and configuration for invoice ROI tests."""
import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from invoice_roi.database import Base, get_db
from invoice_roi import models  # noqa: F401  (registers tables)


@pytest.fixture
def example_input() -> dict:
    """Worked example: mid-size AP team over three years."""
    return {
        "monthly_invoice_volume": 2000,
        "num_ap_staff": 3,
        "avg_hours_per_invoice": 0.1667,
        "hourly_wage": 30,
        "error_rate_manual": 0.005,
        "error_cost": 100,
        "time_horizon_months": 36,
        "one_time_implementation_cost": 50000,
    }


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory bound to a fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, with get_db pointed at the test database."""
    from invoice_roi.main import app
    from invoice_roi.middleware import limiter

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
