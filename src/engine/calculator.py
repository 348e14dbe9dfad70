"""Tax estimate orchestration for self-employed filers.

This module composes the leaf calculators into a single estimate:
- Income totals (1099 and W-2, self and spouse)
- Business deductions and net self-employment earnings
- Self-employment tax and above-the-line adjustments (AGI)
- Standard vs itemized deduction selection
- Federal and state income tax
- Credits, payments, amount owed and quarterly payment

The pipeline is a pure mapping from inputs to TaxCalculationResult with no
I/O and no shared mutable state. Every input change means a full
recomputation; nothing is cached.

All monetary values use Decimal and carry full precision. Rounding happens
only when results are displayed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from src.engine.brackets import BracketBreakdown, calculate_state_tax, compute_bracket_tax
from src.engine.credits import CreditsResult, calculate_tax_credits
from src.engine.deductions import (
    calculate_health_insurance_deduction,
    calculate_home_office_deduction,
    calculate_ira_deduction,
    calculate_itemized_deductions,
    calculate_mileage_deduction,
    get_standard_deduction,
    select_deduction,
)
from src.engine.models import AdvancedInputs, TaxInputs, to_decimal
from src.engine.self_employment import (
    calculate_self_employment_tax,
    get_additional_medicare_threshold,
)
from src.tax.rate_tables import (
    FilingStatus,
    get_federal_schedule,
    get_state_tax_info,
    parse_filing_status,
)
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig

POTENTIAL_DEDUCTIONS_MIN_RATE = Decimal("0.10")
POTENTIAL_DEDUCTIONS_MAX_RATE = Decimal("0.25")


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class SelfEmploymentBreakdown:
    """Three-way split of self-employment tax."""

    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_tax: Decimal


@dataclass(frozen=True)
class PotentialDeductions:
    """Typical range of unclaimed business deductions (whole dollars)."""

    min: Decimal
    max: Decimal


@dataclass(frozen=True)
class TaxCalculationResult:
    """Complete tax estimate.

    Attributes:
        gross_income: Filer's gross 1099 income.
        w2_income: Combined W-2 wages (self + spouse).
        total_income: All 1099 plus all W-2 income.
        business_expenses: Manually entered business expenses.
        mileage_deduction: Standard mileage deduction.
        home_office_deduction: Simplified home office deduction.
        health_insurance_deduction: Self-employed health insurance deduction.
        total_deductions: Business deductions (expenses + mileage + home office).
        net_earnings: 1099 income minus business deductions (may be negative).
        self_employment_tax: Total SE tax.
        se_tax_deduction: Deductible half of SE tax.
        ira_deduction: Capped IRA deduction.
        adjusted_gross_income: AGI, floored at zero.
        standard_deduction: Standard deduction for the filing status.
        itemized_deductions: Mortgage interest plus capped state taxes.
        deduction_used: "standard" or "itemized".
        taxable_income: AGI minus the deduction used, floored at zero.
        federal_income_tax: Federal tax before credits.
        federal_bracket_breakdown: Per-bracket attribution of federal tax.
        state_tax: State income tax.
        credits: Credits applied against federal tax.
        federal_tax_after_credits: Federal tax after credits, floored at zero.
        tax_after_credits: Federal tax after credits plus SE tax.
        payments_and_withholding: Estimated payments plus W-2 withholding.
        total_tax: Tax after credits plus state tax.
        tax_owed_or_refund: Total tax minus payments (negative is a refund).
        effective_rate: Total tax over total income, as a fraction.
        quarterly_payment: Remaining balance due split across four quarters.
        se_breakdown: Social Security / Medicare / additional Medicare split.
        potential_deductions: Typical deduction range for the 1099 income.
    """

    gross_income: Decimal
    w2_income: Decimal
    total_income: Decimal
    business_expenses: Decimal
    mileage_deduction: Decimal
    home_office_deduction: Decimal
    health_insurance_deduction: Decimal
    total_deductions: Decimal
    net_earnings: Decimal
    self_employment_tax: Decimal
    se_tax_deduction: Decimal
    ira_deduction: Decimal
    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    itemized_deductions: Decimal
    deduction_used: str
    taxable_income: Decimal
    federal_income_tax: Decimal
    federal_bracket_breakdown: tuple[BracketBreakdown, ...]
    state_tax: Decimal
    credits: CreditsResult
    federal_tax_after_credits: Decimal
    tax_after_credits: Decimal
    payments_and_withholding: Decimal
    total_tax: Decimal
    tax_owed_or_refund: Decimal
    effective_rate: Decimal
    quarterly_payment: Decimal
    se_breakdown: SelfEmploymentBreakdown
    potential_deductions: PotentialDeductions


# =============================================================================
# Orchestration
# =============================================================================


def _whole_dollars(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def compute_tax_result(
    gross_income: Decimal | float | int,
    business_expenses: Decimal | float | int = Decimal("0"),
    state_code: str = "TX",
    filing_status: FilingStatus | str = FilingStatus.SINGLE,
    advanced: AdvancedInputs | None = None,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> TaxCalculationResult:
    """Compute a complete tax estimate for a self-employed filer.

    Args:
        gross_income: Gross 1099 income. Ints and floats are converted to
            Decimal.
        business_expenses: Business expenses entered by the filer.
        state_code: Two-letter state of residence.
        filing_status: One of "single", "mfj", "hoh".
        advanced: Optional refinements; every field defaults to zero.
        config: Tax year constants.

    Returns:
        TaxCalculationResult with every intermediate quantity.

    Raises:
        UnknownStateError: If the state code has no rate table entry.
        ValueError: If the filing status is not supported.

    Example:
        >>> result = compute_tax_result(Decimal("50000"), state_code="TX")
        >>> result.state_tax
        Decimal('0')
    """
    # Resolve lookups up front so bad inputs fail before any computation
    get_state_tax_info(state_code)
    status = parse_filing_status(filing_status)
    adv = advanced if advanced is not None else AdvancedInputs()
    gross_income = to_decimal(gross_income)
    business_expenses = to_decimal(business_expenses)

    # Business deductions
    mileage_deduction = calculate_mileage_deduction(adv.work_mileage, config)
    home_office_deduction = calculate_home_office_deduction(adv.home_office_square_feet, config)
    health_insurance_deduction = calculate_health_insurance_deduction(
        adv.health_insurance_premiums
    )
    total_deductions = business_expenses + mileage_deduction + home_office_deduction

    # Income totals
    total_1099_income = gross_income + adv.spouse_1099_income
    net_earnings = total_1099_income - total_deductions
    total_w2_income = adv.w2_income + adv.spouse_w2_income
    total_income = total_1099_income + total_w2_income

    # SE tax on non-negative earnings; net_earnings itself stays unclamped for AGI
    se_result = calculate_self_employment_tax(
        max(Decimal("0"), net_earnings),
        get_additional_medicare_threshold(status, config),
        config,
    )

    ira_deduction = calculate_ira_deduction(adv.ira_contributions, config=config)

    adjusted_gross_income = max(
        Decimal("0"),
        net_earnings
        + total_w2_income
        - se_result.se_tax_deduction
        - ira_deduction
        - health_insurance_deduction,
    )

    # SALT estimate uses standard-deduction taxable income as a proxy; the true
    # itemized figure depends on the deduction being chosen. Flat-rate
    # estimates go negative below the standard deduction.
    standard_deduction = get_standard_deduction(status, config)
    state_tax_estimate = calculate_state_tax(
        adjusted_gross_income - standard_deduction, state_code, floor_at_zero=False
    )
    itemized_deductions = calculate_itemized_deductions(
        adv.mortgage_interest, state_tax_estimate, config
    )
    deduction = select_deduction(standard_deduction, itemized_deductions)

    taxable_income = max(Decimal("0"), adjusted_gross_income - deduction.amount)

    federal_result = compute_bracket_tax(taxable_income, get_federal_schedule(status))
    state_tax = calculate_state_tax(taxable_income, state_code)

    credits = calculate_tax_credits(
        adv.dependents_under_17,
        adv.dependents_over_17,
        adv.student_tuition,
        config,
    )

    # Credits can't push federal tax below zero
    federal_tax_after_credits = max(Decimal("0"), federal_result.total_tax - credits.total_credits)
    tax_after_credits = federal_tax_after_credits + se_result.total_se_tax

    payments_and_withholding = adv.quarterly_payments_made + adv.w2_taxes_withheld
    total_tax = tax_after_credits + state_tax
    tax_owed_or_refund = total_tax - payments_and_withholding

    if total_income > Decimal("0"):
        effective_rate = total_tax / total_income
    else:
        effective_rate = Decimal("0")

    quarterly_payment = max(Decimal("0"), tax_owed_or_refund) / Decimal("4")

    return TaxCalculationResult(
        gross_income=gross_income,
        w2_income=total_w2_income,
        total_income=total_income,
        business_expenses=business_expenses,
        mileage_deduction=mileage_deduction,
        home_office_deduction=home_office_deduction,
        health_insurance_deduction=health_insurance_deduction,
        total_deductions=total_deductions,
        net_earnings=net_earnings,
        self_employment_tax=se_result.total_se_tax,
        se_tax_deduction=se_result.se_tax_deduction,
        ira_deduction=ira_deduction,
        adjusted_gross_income=adjusted_gross_income,
        standard_deduction=standard_deduction,
        itemized_deductions=itemized_deductions,
        deduction_used=deduction.method,
        taxable_income=taxable_income,
        federal_income_tax=federal_result.total_tax,
        federal_bracket_breakdown=federal_result.breakdown,
        state_tax=state_tax,
        credits=credits,
        federal_tax_after_credits=federal_tax_after_credits,
        tax_after_credits=tax_after_credits,
        payments_and_withholding=payments_and_withholding,
        total_tax=total_tax,
        tax_owed_or_refund=tax_owed_or_refund,
        effective_rate=effective_rate,
        quarterly_payment=quarterly_payment,
        se_breakdown=SelfEmploymentBreakdown(
            social_security_tax=se_result.social_security_tax,
            medicare_tax=se_result.medicare_tax,
            additional_medicare_tax=se_result.additional_medicare_tax,
        ),
        potential_deductions=PotentialDeductions(
            min=_whole_dollars(total_1099_income * POTENTIAL_DEDUCTIONS_MIN_RATE),
            max=_whole_dollars(total_1099_income * POTENTIAL_DEDUCTIONS_MAX_RATE),
        ),
    )


def compute_tax_result_for(
    inputs: TaxInputs, config: TaxYearConfig = TAX_YEAR_2026
) -> TaxCalculationResult:
    """Compute an estimate from a validated TaxInputs model."""
    return compute_tax_result(
        gross_income=inputs.gross_income,
        business_expenses=inputs.business_expenses,
        state_code=inputs.state_code,
        filing_status=inputs.filing_status,
        advanced=inputs.advanced,
        config=config,
    )


def summarize_tax_result(result: TaxCalculationResult) -> dict[str, Any]:
    """Reduce a full estimate to the headline figures.

    Args:
        result: Full estimate from compute_tax_result.

    Returns:
        Dict with income, SE tax, AGI, taxable income, federal/state/total
        tax, effective rate, quarterly payment and the SE breakdown.
    """
    return {
        "gross_income": result.gross_income,
        "business_expenses": result.business_expenses,
        "net_earnings": result.net_earnings,
        "self_employment_tax": result.self_employment_tax,
        "se_tax_deduction": result.se_tax_deduction,
        "adjusted_gross_income": result.adjusted_gross_income,
        "standard_deduction": result.standard_deduction,
        "taxable_income": result.taxable_income,
        "federal_income_tax": result.federal_income_tax,
        "state_tax": result.state_tax,
        "total_tax": result.total_tax,
        "effective_rate": result.effective_rate,
        "quarterly_payment": result.quarterly_payment,
        "breakdown": {
            "social_security_tax": result.se_breakdown.social_security_tax,
            "medicare_tax": result.se_breakdown.medicare_tax,
            "additional_medicare_tax": result.se_breakdown.additional_medicare_tax,
        },
    }
