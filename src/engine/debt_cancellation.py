"""Canceled debt (Form 1099-C) tax estimate.

Canceled debt is ordinary income unless an exclusion applies:
- Title 11 bankruptcy, qualified student loan discharge, qualified farm
  indebtedness and qualified real property business debt exclude the full
  amount
- Qualified principal residence debt is excluded up to a filing-status cap
- Otherwise insolvency (liabilities over assets) excludes up to the
  insolvent amount

Tax is estimated at a single marginal rate chosen by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.engine.models import to_decimal
from src.tax.rate_tables import FilingStatus, parse_filing_status
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig

DEFAULT_MARGINAL_RATE = Decimal("0.22")


class DebtExclusion(str, Enum):
    """Exclusion claimed for canceled debt."""

    BANKRUPTCY = "bankruptcy"
    PRINCIPAL_RESIDENCE = "principal_residence"
    FARM = "farm"
    REAL_PROPERTY_BUSINESS = "real_property_business"
    STUDENT_LOAN = "student_loan"


_FULL_EXCLUSION_REASONS = {
    DebtExclusion.BANKRUPTCY: "100% excluded under Title 11 bankruptcy",
    DebtExclusion.STUDENT_LOAN: "100% excluded under student loan discharge provisions",
    DebtExclusion.FARM: "Excluded under qualified farm indebtedness rules",
    DebtExclusion.REAL_PROPERTY_BUSINESS: (
        "Excluded under qualified real property business debt rules"
    ),
}


@dataclass(frozen=True)
class CanceledDebtResult:
    """Canceled debt estimate.

    Attributes:
        canceled_debt: Amount reported on Form 1099-C.
        total_assets: Fair market value of all assets.
        total_liabilities: All debts immediately before cancellation.
        insolvency_amount: Liabilities in excess of assets (never negative).
        is_insolvent: Whether liabilities exceed assets.
        exclusion_amount: Portion of the canceled debt excluded from income.
        exclusion_reason: Why the exclusion applies, empty when none does.
        taxable_amount: Canceled debt included in income.
        estimated_tax: Tax on the taxable amount at the marginal rate.
        tax_savings: Tax avoided on the excluded amount.
    """

    canceled_debt: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    insolvency_amount: Decimal
    is_insolvent: bool
    exclusion_amount: Decimal
    exclusion_reason: str
    taxable_amount: Decimal
    estimated_tax: Decimal
    tax_savings: Decimal


def get_principal_residence_cap(
    filing_status: FilingStatus | str, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Principal residence exclusion cap; joint filers get the higher cap."""
    if parse_filing_status(filing_status) is FilingStatus.MFJ:
        return config.principal_residence_exclusion_mfj
    return config.principal_residence_exclusion_single


def calculate_canceled_debt_tax(
    canceled_debt: Decimal | float | int,
    assets: Iterable[Decimal] = (),
    liabilities: Iterable[Decimal] = (),
    exclusion: DebtExclusion | str | None = None,
    marginal_rate: Decimal | float | int = DEFAULT_MARGINAL_RATE,
    filing_status: FilingStatus | str = FilingStatus.SINGLE,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> CanceledDebtResult:
    """Estimate tax on canceled debt after exclusions.

    A claimed exclusion takes precedence over insolvency, even when the
    principal residence cap leaves part of the debt taxable.

    Args:
        canceled_debt: Amount of debt forgiven.
        assets: Asset values (cash, investments, home, vehicles, ...).
        liabilities: Debt balances (mortgage, loans, credit cards, ...).
        exclusion: Exclusion claimed, or None to rely on insolvency.
        marginal_rate: Marginal federal rate as a fraction.
        filing_status: Filing status; only affects the residence cap.
        config: Tax year constants.

    Returns:
        CanceledDebtResult with exclusion, taxable amount and tax.

    Raises:
        ValueError: If the exclusion is unknown or the rate is outside 0-1.

    Example:
        >>> result = calculate_canceled_debt_tax(
        ...     Decimal("20000"),
        ...     assets=[Decimal("5000")],
        ...     liabilities=[Decimal("17000")],
        ... )
        >>> result.taxable_amount
        Decimal('8000')
    """
    debt = to_decimal(canceled_debt)
    rate = to_decimal(marginal_rate)
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ValueError(f"Marginal rate must be between 0 and 1, got {rate}")
    claimed = DebtExclusion(exclusion) if exclusion is not None else None

    total_assets = sum((to_decimal(value) for value in assets), Decimal("0"))
    total_liabilities = sum((to_decimal(value) for value in liabilities), Decimal("0"))
    insolvency_amount = max(Decimal("0"), total_liabilities - total_assets)
    is_insolvent = total_liabilities > total_assets

    exclusion_amount = Decimal("0")
    exclusion_reason = ""
    if claimed in _FULL_EXCLUSION_REASONS:
        exclusion_amount = debt
        exclusion_reason = _FULL_EXCLUSION_REASONS[claimed]
    elif claimed is DebtExclusion.PRINCIPAL_RESIDENCE:
        cap = get_principal_residence_cap(filing_status, config)
        exclusion_amount = min(debt, cap)
        exclusion_reason = f"Up to ${cap:,.0f} excluded for principal residence"
    elif is_insolvent:
        exclusion_amount = min(debt, insolvency_amount)
        exclusion_reason = f"Excluded up to insolvency amount (${insolvency_amount:,.0f})"

    taxable_amount = max(Decimal("0"), debt - exclusion_amount)

    return CanceledDebtResult(
        canceled_debt=debt,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        insolvency_amount=insolvency_amount,
        is_insolvent=is_insolvent,
        exclusion_amount=exclusion_amount,
        exclusion_reason=exclusion_reason,
        taxable_amount=taxable_amount,
        estimated_tax=taxable_amount * rate,
        tax_savings=exclusion_amount * rate,
    )
