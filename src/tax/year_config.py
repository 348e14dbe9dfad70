"""Tax year-specific constants and thresholds.

This module centralizes tax year-specific values like wage bases, deduction amounts,
credit amounts, and rate thresholds to avoid hardcoding values throughout the codebase.

Example:
    >>> from src.tax.year_config import get_tax_year_config
    >>> config = get_tax_year_config(2026)
    >>> print(f"SS wage base: {config.ss_wage_base}")
    SS wage base: 176100
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class QuarterlyDeadline:
    """Estimated tax payment deadline (Form 1040-ES).

    Attributes:
        quarter: Quarter label ("Q1".."Q4").
        period: Income period covered by the payment.
        due_date: Payment due date.
        label: Human-readable due date.
    """

    quarter: str
    period: str
    due_date: date
    label: str


@dataclass(frozen=True)
class TaxYearConfig:
    """Tax year-specific constants and thresholds.

    All monetary values are Decimal for precision in tax calculations.
    Rates are fractions (0.124, not 12.4).
    This dataclass is frozen to prevent accidental modification.

    Attributes:
        tax_year: The tax year these values apply to.
        ss_wage_base: Social Security wage base limit.
        se_ss_rate: Combined Social Security rate for SE tax (12.4%).
        se_medicare_rate: Combined Medicare rate for SE tax (2.9%).
        se_net_earnings_factor: Share of net SE earnings subject to SE tax.
        additional_medicare_rate: Additional Medicare surtax rate (0.9%).
        mileage_rate: Standard business mileage rate per mile.
        salt_cap: Cap on state and local taxes when itemizing.
        underpayment_penalty_rate: Annual IRS underpayment penalty rate.
    """

    tax_year: int

    # Self-employment tax (combined employer + employee rates)
    ss_wage_base: Decimal
    se_ss_rate: Decimal = Decimal("0.124")  # 12.4% (6.2% x 2)
    se_medicare_rate: Decimal = Decimal("0.029")  # 2.9% (1.45% x 2)
    se_net_earnings_factor: Decimal = Decimal("0.9235")  # 92.35% of net SE income
    se_tax_deduction_rate: Decimal = Decimal("0.5")

    # Additional Medicare
    additional_medicare_rate: Decimal = Decimal("0.009")
    additional_medicare_threshold_single: Decimal = Decimal("200000")
    additional_medicare_threshold_mfj: Decimal = Decimal("250000")

    # Standard deductions
    standard_deduction_single: Decimal = Decimal("0")
    standard_deduction_mfj: Decimal = Decimal("0")
    standard_deduction_hoh: Decimal = Decimal("0")

    # QBI (Qualified Business Income) - defined, not applied by the estimator
    qbi_deduction_rate: Decimal = Decimal("0.20")
    qbi_threshold_single: Decimal = Decimal("0")
    qbi_threshold_mfj: Decimal = Decimal("0")

    # Business deductions
    mileage_rate: Decimal = Decimal("0")
    home_office_rate_per_sqft: Decimal = Decimal("5")
    home_office_max_deduction: Decimal = Decimal("1500")  # 300 sq ft simplified method

    # Retirement
    ira_limit: Decimal = Decimal("0")
    ira_limit_age_50: Decimal = Decimal("0")

    # Credits
    child_tax_credit: Decimal = Decimal("2000")
    child_tax_credit_refundable: Decimal = Decimal("1700")
    other_dependent_credit: Decimal = Decimal("500")
    aotc_max: Decimal = Decimal("2500")
    aotc_full_expenses: Decimal = Decimal("2000")  # 100% tier
    aotc_partial_expenses: Decimal = Decimal("2000")  # 25% tier
    aotc_partial_rate: Decimal = Decimal("0.25")
    llc_max: Decimal = Decimal("2000")

    # Itemized deductions
    salt_cap: Decimal = Decimal("10000")

    # Canceled debt (Form 1099-C) exclusions
    principal_residence_exclusion_single: Decimal = Decimal("375000")
    principal_residence_exclusion_mfj: Decimal = Decimal("750000")

    # Estimated payments
    underpayment_penalty_rate: Decimal = Decimal("0.08")
    quarterly_deadlines: tuple[QuarterlyDeadline, ...] = field(default_factory=tuple)


# 2026 Configuration
TAX_YEAR_2026 = TaxYearConfig(
    tax_year=2026,
    ss_wage_base=Decimal("176100"),
    # Standard deductions
    standard_deduction_single=Decimal("15000"),
    standard_deduction_mfj=Decimal("30000"),
    standard_deduction_hoh=Decimal("22500"),
    # QBI thresholds
    qbi_threshold_single=Decimal("191950"),
    qbi_threshold_mfj=Decimal("383900"),
    mileage_rate=Decimal("0.70"),
    ira_limit=Decimal("7000"),
    ira_limit_age_50=Decimal("8000"),
    quarterly_deadlines=(
        QuarterlyDeadline("Q1", "Jan 1 - Mar 31", date(2026, 4, 15), "April 15, 2026"),
        QuarterlyDeadline("Q2", "Apr 1 - May 31", date(2026, 6, 15), "June 15, 2026"),
        QuarterlyDeadline("Q3", "Jun 1 - Aug 31", date(2026, 9, 15), "September 15, 2026"),
        QuarterlyDeadline("Q4", "Sep 1 - Dec 31", date(2027, 1, 15), "January 15, 2027"),
    ),
)

CURRENT_TAX_YEAR = 2026

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: dict[int, TaxYearConfig] = {
    2026: TAX_YEAR_2026,
}


def get_tax_year_config(year: int = CURRENT_TAX_YEAR) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2026).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ValueError: If no configuration exists for the requested year.

    Example:
        >>> config = get_tax_year_config(2026)
        >>> print(config.mileage_rate)
        0.70
    """
    if year not in TAX_YEAR_CONFIGS:
        available = sorted(TAX_YEAR_CONFIGS.keys())
        raise ValueError(
            f"No tax configuration for year {year}. Available years: {available}"
        )
    return TAX_YEAR_CONFIGS[year]
