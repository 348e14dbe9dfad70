"""Self-employment tax (Schedule SE) calculation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.rate_tables import FilingStatus, parse_filing_status
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig


@dataclass(frozen=True)
class SelfEmploymentTaxResult:
    """Schedule SE components.

    Attributes:
        taxable_earnings: Net earnings times the 92.35% factor.
        social_security_tax: 12.4% of taxable earnings up to the wage base.
        medicare_tax: 2.9% of taxable earnings (uncapped).
        additional_medicare_tax: 0.9% of raw net earnings above the threshold.
        total_se_tax: Sum of the three taxes.
        se_tax_deduction: Deductible half of total SE tax (above the line).
    """

    taxable_earnings: Decimal
    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_tax: Decimal
    total_se_tax: Decimal
    se_tax_deduction: Decimal


def get_additional_medicare_threshold(
    filing_status: FilingStatus | str, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Additional Medicare threshold for a filing status.

    Married filing jointly uses the MFJ threshold; single and head of
    household share the single threshold.
    """
    if parse_filing_status(filing_status) is FilingStatus.MFJ:
        return config.additional_medicare_threshold_mfj
    return config.additional_medicare_threshold_single


def calculate_self_employment_tax(
    net_earnings: Decimal,
    additional_medicare_threshold: Decimal | None = None,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> SelfEmploymentTaxResult:
    """Calculate self-employment tax from net SE earnings.

    The additional Medicare surtax applies to the excess of raw net earnings
    over the threshold, not to the 92.35% figure.

    Args:
        net_earnings: Net self-employment earnings. Callers clamp to zero
            first; negative values are treated as zero.
        additional_medicare_threshold: Surtax threshold for the filing status.
            Defaults to the single threshold.
        config: Tax year constants.

    Returns:
        SelfEmploymentTaxResult with each component and the SE deduction.

    Example:
        >>> result = calculate_self_employment_tax(Decimal("100000"))
        >>> result.total_se_tax
        Decimal('14129.5500000')
    """
    if additional_medicare_threshold is None:
        additional_medicare_threshold = config.additional_medicare_threshold_single

    net_earnings = max(Decimal("0"), net_earnings)

    taxable_earnings = net_earnings * config.se_net_earnings_factor
    social_security_taxable = min(taxable_earnings, config.ss_wage_base)
    social_security_tax = social_security_taxable * config.se_ss_rate
    medicare_tax = taxable_earnings * config.se_medicare_rate

    additional_medicare_tax = Decimal("0")
    if net_earnings > additional_medicare_threshold:
        excess_earnings = net_earnings - additional_medicare_threshold
        additional_medicare_tax = excess_earnings * config.additional_medicare_rate

    total_se_tax = social_security_tax + medicare_tax + additional_medicare_tax
    se_tax_deduction = total_se_tax * config.se_tax_deduction_rate

    return SelfEmploymentTaxResult(
        taxable_earnings=taxable_earnings,
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
        total_se_tax=total_se_tax,
        se_tax_deduction=se_tax_deduction,
    )
