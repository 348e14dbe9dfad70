"""Side-by-side comparison of 1099 contracting and W-2 employment.

Estimates take-home pay for the same gross income earned as a W-2 employee
(employee half of FICA, employer benefits) and as a 1099 contractor (full SE
tax, business deductions). State tax uses the state's flat top rate on both
sides.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.engine.brackets import compute_bracket_tax
from src.engine.deductions import get_standard_deduction
from src.engine.models import to_decimal
from src.engine.self_employment import calculate_self_employment_tax
from src.tax.rate_tables import (
    FilingStatus,
    get_federal_schedule,
    get_state_tax_info,
    parse_filing_status,
)
from src.tax.year_config import TAX_YEAR_2026, TaxYearConfig


@dataclass(frozen=True)
class EmployerBenefits:
    """Annual value of W-2 employer-provided benefits."""

    health_insurance: Decimal = Decimal("6000")
    retirement_401k: Decimal = Decimal("3000")
    paid_time_off: Decimal = Decimal("2000")
    other_benefits: Decimal = Decimal("1000")

    @property
    def total(self) -> Decimal:
        return self.health_insurance + self.retirement_401k + self.paid_time_off + self.other_benefits


@dataclass(frozen=True)
class FreelancerExpenses:
    """Annual costs a 1099 contractor deducts.

    Health insurance and retirement contributions are deductible but also
    buy something the W-2 employee gets from the employer, so they are added
    back to take-home pay.
    """

    business_expenses: Decimal = Decimal("8000")
    health_insurance: Decimal = Decimal("7200")
    retirement_contributions: Decimal = Decimal("6000")
    home_office: Decimal = Decimal("2400")

    @property
    def total(self) -> Decimal:
        return (
            self.business_expenses
            + self.health_insurance
            + self.retirement_contributions
            + self.home_office
        )


@dataclass(frozen=True)
class W2Scenario:
    """Taxes and take-home pay as a W-2 employee."""

    gross_income: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    social_security_tax: Decimal
    medicare_tax: Decimal
    total_tax: Decimal
    benefits_value: Decimal
    net_income: Decimal
    total_compensation: Decimal
    effective_rate: Decimal


@dataclass(frozen=True)
class ContractorScenario:
    """Taxes and take-home pay as a 1099 contractor."""

    gross_income: Decimal
    deductions: Decimal
    net_business_income: Decimal
    se_tax: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    net_income: Decimal
    effective_rate: Decimal


@dataclass(frozen=True)
class EmploymentComparison:
    """Comparison result.

    Attributes:
        w2: W-2 employee scenario.
        contractor: 1099 contractor scenario.
        difference: Contractor net income minus W-2 net income.
        better_option: "1099" when the contractor nets more, otherwise "W-2".
    """

    w2: W2Scenario
    contractor: ContractorScenario
    difference: Decimal
    better_option: str


def _rate_of(tax: Decimal, income: Decimal) -> Decimal:
    if income > Decimal("0"):
        return tax / income
    return Decimal("0")


def compare_1099_vs_w2(
    gross_income: Decimal | float | int,
    state_code: str = "CA",
    filing_status: FilingStatus | str = FilingStatus.SINGLE,
    employer_benefits: EmployerBenefits | None = None,
    freelancer_expenses: FreelancerExpenses | None = None,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> EmploymentComparison:
    """Compare take-home pay for W-2 employment and 1099 contracting.

    Args:
        gross_income: Same gross pay in both scenarios.
        state_code: Two-letter state of residence.
        filing_status: One of "single", "mfj", "hoh".
        employer_benefits: W-2 benefit values (defaults to typical amounts).
        freelancer_expenses: Contractor costs (defaults to typical amounts).
        config: Tax year constants.

    Returns:
        EmploymentComparison with both scenarios and the difference.

    Raises:
        UnknownStateError: If the state code has no rate table entry.
    """
    gross_income = to_decimal(gross_income)
    status = parse_filing_status(filing_status)
    state_rate = get_state_tax_info(state_code).rate
    benefits = employer_benefits or EmployerBenefits()
    expenses = freelancer_expenses or FreelancerExpenses()
    schedule = get_federal_schedule(status)
    standard_deduction = get_standard_deduction(status, config)

    # W-2: employee pays half of Social Security and Medicare
    w2_taxable = max(Decimal("0"), gross_income - standard_deduction)
    w2_federal = compute_bracket_tax(w2_taxable, schedule).total_tax
    w2_state = w2_taxable * state_rate
    w2_social_security = gross_income * config.se_ss_rate / Decimal("2")
    w2_medicare = gross_income * config.se_medicare_rate / Decimal("2")
    w2_total_tax = w2_federal + w2_state + w2_social_security + w2_medicare
    w2_net = gross_income - w2_total_tax

    w2 = W2Scenario(
        gross_income=gross_income,
        federal_tax=w2_federal,
        state_tax=w2_state,
        social_security_tax=w2_social_security,
        medicare_tax=w2_medicare,
        total_tax=w2_total_tax,
        benefits_value=benefits.total,
        net_income=w2_net,
        total_compensation=w2_net + benefits.total,
        effective_rate=_rate_of(w2_total_tax, gross_income),
    )

    # 1099: full SE tax, half of it deductible
    net_business_income = gross_income - expenses.total
    se_result = calculate_self_employment_tax(
        max(Decimal("0"), net_business_income), config=config
    )
    contractor_taxable = max(
        Decimal("0"),
        net_business_income - se_result.se_tax_deduction - standard_deduction,
    )
    contractor_federal = compute_bracket_tax(contractor_taxable, schedule).total_tax
    contractor_state = contractor_taxable * state_rate
    contractor_total_tax = contractor_federal + contractor_state + se_result.total_se_tax
    contractor_net = (
        gross_income
        - contractor_total_tax
        - expenses.total
        + expenses.health_insurance
        + expenses.retirement_contributions
    )

    contractor = ContractorScenario(
        gross_income=gross_income,
        deductions=expenses.total,
        net_business_income=net_business_income,
        se_tax=se_result.total_se_tax,
        federal_tax=contractor_federal,
        state_tax=contractor_state,
        total_tax=contractor_total_tax,
        net_income=contractor_net,
        effective_rate=_rate_of(contractor_total_tax, gross_income),
    )

    difference = contractor_net - w2_net
    return EmploymentComparison(
        w2=w2,
        contractor=contractor,
        difference=difference,
        better_option="1099" if difference > Decimal("0") else "W-2",
    )
