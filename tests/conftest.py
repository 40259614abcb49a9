"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at throwaway backends first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DOCUMENT_INTELLIGENCE_ENDPOINT"] = ""
os.environ["DOCUMENT_INTELLIGENCE_KEY"] = ""
os.environ["OPENAI_ENDPOINT"] = ""
os.environ["OPENAI_KEY"] = ""
os.environ.setdefault("UPLOAD_DIR", "/tmp/costing-gpt-test-uploads")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.database import models  # noqa: F401
from app.main import app
from app.models.tariff import HotelTariff


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """Session on a fresh in-memory database with every table created.

    Yields:
        AsyncSession: Database session
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def sample_tariff() -> HotelTariff:
    """Tariff matching the mock analysis result.

    Returns:
        HotelTariff: Sample tariff
    """
    return HotelTariff(
        hotel_name="Grand Luxury Hotel",
        vendor="Luxury Travels Ltd",
        city="Mumbai",
        category="5-star",
        base_rate=12500.0,
        gst_percent=18.0,
        service_fee=1000.0,
        meal_plan="Breakfast & Dinner",
        season="Peak",
        start_date="2023-10-01",
        end_date="2024-03-31",
        description="Luxury accommodations with sea view",
    )


@pytest.fixture
def sample_pdf_content() -> bytes:
    """Sample PDF content for testing.

    Returns:
        bytes: Sample PDF content
    """
    # Minimal valid PDF header
    return b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<\n/Type /Catalog\n/Pages 2 0 R\n>>\nendobj\n"
