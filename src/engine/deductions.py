"""Deduction calculators for self-employed filers.

Business deductions (mileage, home office), above-the-line adjustments
(health insurance, IRA) and the standard vs itemized selection. All
functions are pure and defined for every non-negative input.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.rate_tables import FilingStatus, parse_filing_status
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig


@dataclass(frozen=True)
class DeductionResult:
    """Result of deduction calculation.

    Attributes:
        method: Either "standard" or "itemized".
        amount: The deduction amount to use.
        standard_amount: The standard deduction for this filing status.
        itemized_amount: The itemized total that was compared.
    """

    method: str
    amount: Decimal
    standard_amount: Decimal
    itemized_amount: Decimal


# =============================================================================
# Business Deductions
# =============================================================================


def calculate_mileage_deduction(
    miles_driven: Decimal, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Standard mileage deduction (miles times the IRS rate)."""
    return miles_driven * config.mileage_rate


def calculate_home_office_deduction(
    square_feet: Decimal, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Simplified-method home office deduction ($5/sq ft, max $1,500)."""
    return min(square_feet * config.home_office_rate_per_sqft, config.home_office_max_deduction)


# =============================================================================
# Above-the-line Adjustments
# =============================================================================


def calculate_health_insurance_deduction(premiums: Decimal) -> Decimal:
    """Self-employed health insurance deduction.

    Premiums are 100% deductible for self-employed filers; no cap is modeled.
    """
    return premiums


def calculate_ira_deduction(
    contributions: Decimal,
    age_50_or_older: bool = False,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> Decimal:
    """Traditional IRA deduction capped at the annual contribution limit.

    Args:
        contributions: Traditional IRA contributions for the year.
        age_50_or_older: Use the catch-up limit.
        config: Tax year constants.

    Returns:
        Deductible contribution amount.
    """
    limit = config.ira_limit_age_50 if age_50_or_older else config.ira_limit
    return min(contributions, limit)


# =============================================================================
# Standard vs Itemized
# =============================================================================


def get_standard_deduction(
    filing_status: FilingStatus | str, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Get the standard deduction for a filing status.

    Args:
        filing_status: One of "single", "mfj", "hoh".
        config: Tax year constants.

    Returns:
        Standard deduction amount.

    Raises:
        ValueError: If filing status is not supported.

    Example:
        >>> get_standard_deduction("single")
        Decimal('15000')
    """
    status = parse_filing_status(filing_status)
    if status is FilingStatus.MFJ:
        return config.standard_deduction_mfj
    if status is FilingStatus.HOH:
        return config.standard_deduction_hoh
    return config.standard_deduction_single


def calculate_itemized_deductions(
    mortgage_interest: Decimal,
    state_tax_estimate: Decimal,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> Decimal:
    """Itemized total: mortgage interest plus state taxes up to the SALT cap."""
    return mortgage_interest + min(state_tax_estimate, config.salt_cap)


def select_deduction(standard_amount: Decimal, itemized_amount: Decimal) -> DeductionResult:
    """Select the larger of the standard and itemized deductions.

    Itemizing wins only when strictly larger than the standard deduction.

    Example:
        >>> select_deduction(Decimal("15000"), Decimal("10000")).method
        'standard'
    """
    if itemized_amount > standard_amount:
        return DeductionResult(
            method="itemized",
            amount=itemized_amount,
            standard_amount=standard_amount,
            itemized_amount=itemized_amount,
        )
    return DeductionResult(
        method="standard",
        amount=standard_amount,
        standard_amount=standard_amount,
        itemized_amount=itemized_amount,
    )
