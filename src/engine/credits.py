"""Tax credit calculators.

Child tax credit, credit for other dependents and a simplified American
Opportunity Credit. Credits are flat amounts with no income phase-out.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig


@dataclass(frozen=True)
class CreditsResult:
    """Result of credits evaluation.

    Attributes:
        child_tax_credit: Credit for dependents under 17.
        other_dependent_credit: Credit for dependents 17 and older.
        education_credit: American Opportunity Credit.
        total_credits: Sum of all credits.
    """

    child_tax_credit: Decimal
    other_dependent_credit: Decimal
    education_credit: Decimal
    total_credits: Decimal


def calculate_education_credit(
    tuition: Decimal, config: TaxYearConfig = TAX_YEAR_2026
) -> Decimal:
    """Calculate the American Opportunity Credit (simplified).

    100% of the first $2,000 of tuition plus 25% of the next $2,000,
    capped at the statutory maximum.

    Args:
        tuition: Qualified tuition and fees.
        config: Tax year constants.

    Returns:
        Credit amount, zero when no tuition was paid.
    """
    if tuition <= Decimal("0"):
        return Decimal("0")

    first_tier = min(tuition, config.aotc_full_expenses)
    second_tier = (
        min(max(tuition - config.aotc_full_expenses, Decimal("0")), config.aotc_partial_expenses)
        * config.aotc_partial_rate
    )
    return min(first_tier + second_tier, config.aotc_max)


def calculate_tax_credits(
    dependents_under_17: int = 0,
    dependents_over_17: int = 0,
    student_tuition: Decimal = Decimal("0"),
    config: TaxYearConfig = TAX_YEAR_2026,
) -> CreditsResult:
    """Evaluate all modeled credits.

    Args:
        dependents_under_17: Children qualifying for the child tax credit.
        dependents_over_17: Dependents qualifying for the other dependent credit.
        student_tuition: Qualified education expenses.
        config: Tax year constants.

    Returns:
        CreditsResult with each credit and the total.

    Example:
        >>> calculate_tax_credits(dependents_under_17=2).total_credits
        Decimal('4000')
    """
    child_tax_credit = config.child_tax_credit * dependents_under_17
    other_dependent_credit = config.other_dependent_credit * dependents_over_17
    education_credit = calculate_education_credit(student_tuition, config)

    return CreditsResult(
        child_tax_credit=child_tax_credit,
        other_dependent_credit=other_dependent_credit,
        education_credit=education_credit,
        total_credits=child_tax_credit + other_dependent_credit + education_credit,
    )
