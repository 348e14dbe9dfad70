"""Tax year constants and rate schedules."""

from src.tax.rate_tables import (
    FEDERAL_BRACKETS_2026,
    NO_INCOME_TAX_STATES,
    STATE_TAX_RATES,
    FilingStatus,
    RateSchedule,
    StateTaxInfo,
    TaxBracket,
    UnknownStateError,
    get_federal_schedule,
    get_state_tax_info,
    is_known_state,
    parse_filing_status,
)
from src.tax.year_config import (
    CURRENT_TAX_YEAR,
    TAX_YEAR_2026,
    TAX_YEAR_CONFIGS,
    QuarterlyDeadline,
    TaxYearConfig,
    get_tax_year_config,
)

__all__ = [
    "CURRENT_TAX_YEAR",
    "FEDERAL_BRACKETS_2026",
    "NO_INCOME_TAX_STATES",
    "STATE_TAX_RATES",
    "TAX_YEAR_2026",
    "TAX_YEAR_CONFIGS",
    "FilingStatus",
    "QuarterlyDeadline",
    "RateSchedule",
    "StateTaxInfo",
    "TaxBracket",
    "TaxYearConfig",
    "UnknownStateError",
    "get_federal_schedule",
    "get_state_tax_info",
    "get_tax_year_config",
    "is_known_state",
    "parse_filing_status",
]
