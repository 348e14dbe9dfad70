"""Health check endpoint for infrastructure verification."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.deps import get_tax_config
from src.tax.year_config import TaxYearConfig

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    tax_year: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> HealthResponse:
    """Report liveness and the tax year being served.

    The estimator has no backing services, so a loaded constants table is
    all it needs to answer requests.

    Returns:
        HealthResponse with status and tax year.
    """
    return HealthResponse(status="ok", tax_year=config.tax_year)
