"""FastAPI dependency injection for tax year configuration."""

from src.core.config import settings
from src.tax.year_config import TaxYearConfig, get_tax_year_config


def get_tax_config() -> TaxYearConfig:
    """Get the constants table for the configured tax year.

    Returns:
        TaxYearConfig for settings.tax_year (validated at startup).
    """
    return get_tax_year_config(settings.tax_year)
