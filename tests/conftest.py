"""Pytest configuration and shared fixtures for tests."""

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests.

    Returns:
        Backend name string.
    """
    return "asyncio"


@pytest.fixture
def config() -> TaxYearConfig:
    """Tax year constants used across engine tests."""
    return TAX_YEAR_2026


@pytest.fixture
def ca_single_100k_payload() -> dict[str, object]:
    """Request body for the reference California single filer scenario."""
    return {
        "gross_income": "100000",
        "business_expenses": "0",
        "state_code": "CA",
        "filing_status": "single",
    }


@pytest.fixture
def client() -> TestClient:
    """Create a test client for API testing.

    Returns:
        FastAPI TestClient instance.
    """
    return TestClient(app)
