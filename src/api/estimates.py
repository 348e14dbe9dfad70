"""Tax estimate API endpoints.

Thin HTTP layer over the estimation engine. Request bodies are validated by
pydantic (negative amounts are rejected with 422), unknown state codes are
mapped to 422 as well, and every response serializes Decimal amounts as
strings so no precision is lost on the wire.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from src.api.deps import get_tax_config
from src.core.logging import bind_scenario, get_logger
from src.engine.calculator import (
    TaxCalculationResult,
    compute_tax_result,
    summarize_tax_result,
)
from src.engine.comparison import EmployerBenefits, FreelancerExpenses, compare_1099_vs_w2
from src.engine.debt_cancellation import (
    DEFAULT_MARGINAL_RATE,
    DebtExclusion,
    calculate_canceled_debt_tax,
)
from src.engine.models import AdvancedInputs, Money
from src.engine.output import (
    format_currency,
    format_percent,
    generate_estimate_notes,
    generate_estimate_worksheet,
)
from src.engine.quarterly import (
    estimate_missed_payment_penalty,
    get_next_quarterly_deadline,
    get_quarterly_deadlines,
)
from src.tax.rate_tables import STATE_TAX_RATES, FilingStatus, UnknownStateError
from src.tax.year_config import TaxYearConfig

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["estimates"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# =============================================================================
# Request Models
# =============================================================================


class EstimateRequest(BaseModel):
    """Estimate request.

    state_code is checked against the rate table in the handler so that
    unknown codes are logged before being rejected.
    """

    gross_income: Money
    business_expenses: Money = Decimal("0")
    state_code: str = "TX"
    filing_status: FilingStatus = FilingStatus.SINGLE
    advanced: AdvancedInputs = Field(default_factory=AdvancedInputs)


class EmployerBenefitsInput(BaseModel):
    """W-2 employer benefit values."""

    health_insurance: Money = Decimal("6000")
    retirement_401k: Money = Decimal("3000")
    paid_time_off: Money = Decimal("2000")
    other_benefits: Money = Decimal("1000")


class FreelancerExpensesInput(BaseModel):
    """1099 contractor annual costs."""

    business_expenses: Money = Decimal("8000")
    health_insurance: Money = Decimal("7200")
    retirement_contributions: Money = Decimal("6000")
    home_office: Money = Decimal("2400")


class ComparisonRequest(BaseModel):
    """1099 vs W-2 comparison request."""

    gross_income: Money
    state_code: str = "CA"
    filing_status: FilingStatus = FilingStatus.SINGLE
    employer_benefits: EmployerBenefitsInput = Field(default_factory=EmployerBenefitsInput)
    freelancer_expenses: FreelancerExpensesInput = Field(
        default_factory=FreelancerExpensesInput
    )


class PenaltyRequest(BaseModel):
    """Missed quarterly payment penalty request."""

    quarterly_payment: Money
    missed_payments: int = Field(ge=0, le=4)


class CanceledDebtRequest(BaseModel):
    """Form 1099-C canceled debt request.

    assets and liabilities map a label ("home", "credit_cards", ...) to its
    value; only the totals enter the insolvency test.
    """

    canceled_debt: Money
    assets: dict[str, Money] = Field(default_factory=dict)
    liabilities: dict[str, Money] = Field(default_factory=dict)
    exclusion: DebtExclusion | None = None
    marginal_rate: Decimal = Field(default=DEFAULT_MARGINAL_RATE, ge=0, le=1)
    filing_status: FilingStatus = FilingStatus.SINGLE


# =============================================================================
# Response Models
# =============================================================================


class BracketItem(BaseModel):
    """One consumed federal bracket."""

    model_config = ConfigDict(from_attributes=True)

    rate: Decimal
    lower_bound: Decimal
    upper_bound: Decimal | None
    taxable_in_bracket: Decimal
    tax_from_bracket: Decimal


class CreditsItem(BaseModel):
    """Applied credits."""

    model_config = ConfigDict(from_attributes=True)

    child_tax_credit: Decimal
    other_dependent_credit: Decimal
    education_credit: Decimal
    total_credits: Decimal


class SelfEmploymentItem(BaseModel):
    """Self-employment tax split."""

    model_config = ConfigDict(from_attributes=True)

    social_security_tax: Decimal
    medicare_tax: Decimal
    additional_medicare_tax: Decimal


class PotentialDeductionsItem(BaseModel):
    """Typical deduction range."""

    model_config = ConfigDict(from_attributes=True)

    min: Decimal
    max: Decimal


class DisplayItem(BaseModel):
    """Headline figures formatted for display."""

    total_tax: str
    effective_rate: str
    quarterly_payment: str
    tax_owed_or_refund: str


class EstimateResponse(BaseModel):
    """Full tax estimate."""

    model_config = ConfigDict(from_attributes=True)

    tax_year: int
    state_code: str
    filing_status: FilingStatus
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
    federal_bracket_breakdown: list[BracketItem]
    state_tax: Decimal
    credits: CreditsItem
    federal_tax_after_credits: Decimal
    tax_after_credits: Decimal
    payments_and_withholding: Decimal
    total_tax: Decimal
    tax_owed_or_refund: Decimal
    effective_rate: Decimal
    quarterly_payment: Decimal
    se_breakdown: SelfEmploymentItem
    potential_deductions: PotentialDeductionsItem
    display: DisplayItem


class SummaryResponse(BaseModel):
    """Headline estimate figures."""

    gross_income: Decimal
    business_expenses: Decimal
    net_earnings: Decimal
    self_employment_tax: Decimal
    se_tax_deduction: Decimal
    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    federal_income_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    effective_rate: Decimal
    quarterly_payment: Decimal
    breakdown: SelfEmploymentItem


class W2ScenarioItem(BaseModel):
    """W-2 side of a comparison."""

    model_config = ConfigDict(from_attributes=True)

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


class ContractorScenarioItem(BaseModel):
    """1099 side of a comparison."""

    model_config = ConfigDict(from_attributes=True)

    gross_income: Decimal
    deductions: Decimal
    net_business_income: Decimal
    se_tax: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    net_income: Decimal
    effective_rate: Decimal


class ComparisonResponse(BaseModel):
    """1099 vs W-2 comparison."""

    model_config = ConfigDict(from_attributes=True)

    w2: W2ScenarioItem
    contractor: ContractorScenarioItem
    difference: Decimal
    better_option: str


class PenaltyResponse(BaseModel):
    """Estimated penalty for missed payments."""

    quarterly_payment: Decimal
    missed_payments: int
    unpaid_amount: Decimal
    penalty: Decimal


class CanceledDebtResponse(BaseModel):
    """Canceled debt exclusion and tax estimate."""

    model_config = ConfigDict(from_attributes=True)

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


class StateItem(BaseModel):
    """State rate table entry."""

    code: str
    name: str
    rate: Decimal
    has_income_tax: bool
    has_brackets: bool


class DeadlineItem(BaseModel):
    """Quarterly estimated payment deadline."""

    model_config = ConfigDict(from_attributes=True)

    quarter: str
    period: str
    due_date: date
    label: str


class DeadlinesResponse(BaseModel):
    """Quarterly payment calendar."""

    tax_year: int
    deadlines: list[DeadlineItem]
    next_deadline: DeadlineItem


# =============================================================================
# Helpers
# =============================================================================


def _run_estimate(request: EstimateRequest, config: TaxYearConfig) -> TaxCalculationResult:
    """Run the engine, mapping unknown states to HTTP 422."""
    bind_scenario(request.state_code, request.filing_status)
    try:
        result = compute_tax_result(
            gross_income=request.gross_income,
            business_expenses=request.business_expenses,
            state_code=request.state_code,
            filing_status=request.filing_status,
            advanced=request.advanced,
            config=config,
        )
    except UnknownStateError as exc:
        logger.warning("unknown_state_rejected", state_code=exc.state_code)
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    logger.info(
        "tax_estimate_computed",
        tax_year=config.tax_year,
        total_tax=result.total_tax,
        deduction_used=result.deduction_used,
    )
    return result


def _build_estimate_response(
    request: EstimateRequest, result: TaxCalculationResult, config: TaxYearConfig
) -> EstimateResponse:
    """Convert an engine result into the response model."""
    return EstimateResponse.model_validate(
        {
            **asdict(result),
            "tax_year": config.tax_year,
            "state_code": request.state_code.strip().upper(),
            "filing_status": request.filing_status,
            "display": {
                "total_tax": format_currency(result.total_tax),
                "effective_rate": format_percent(result.effective_rate),
                "quarterly_payment": format_currency(result.quarterly_payment),
                "tax_owed_or_refund": format_currency(result.tax_owed_or_refund),
            },
        }
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/states", response_model=list[StateItem])
def list_states() -> list[StateItem]:
    """List every supported state with its top marginal rate."""
    return [
        StateItem(
            code=info.code,
            name=info.name,
            rate=info.rate,
            has_income_tax=info.has_income_tax,
            has_brackets=info.brackets is not None,
        )
        for info in sorted(STATE_TAX_RATES.values(), key=lambda item: item.code)
    ]


@router.post("/estimates", response_model=EstimateResponse)
def create_estimate(
    request: EstimateRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> EstimateResponse:
    """Compute a full tax estimate.

    Raises:
        HTTPException: 422 if the state code is unknown.
    """
    result = _run_estimate(request, config)
    return _build_estimate_response(request, result, config)


@router.post("/estimates/summary", response_model=SummaryResponse)
def create_estimate_summary(
    request: EstimateRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> SummaryResponse:
    """Compute an estimate and return only the headline figures."""
    result = _run_estimate(request, config)
    return SummaryResponse.model_validate(summarize_tax_result(result))


@router.post("/estimates/compare", response_model=ComparisonResponse)
def compare_employment(
    request: ComparisonRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> ComparisonResponse:
    """Compare take-home pay as a 1099 contractor and as a W-2 employee.

    Raises:
        HTTPException: 422 if the state code is unknown.
    """
    try:
        comparison = compare_1099_vs_w2(
            gross_income=request.gross_income,
            state_code=request.state_code,
            filing_status=request.filing_status,
            employer_benefits=EmployerBenefits(**request.employer_benefits.model_dump()),
            freelancer_expenses=FreelancerExpenses(**request.freelancer_expenses.model_dump()),
            config=config,
        )
    except UnknownStateError as exc:
        logger.warning("unknown_state_rejected", state_code=exc.state_code)
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    logger.info(
        "employment_comparison_computed",
        better_option=comparison.better_option,
        difference=comparison.difference,
    )
    return ComparisonResponse.model_validate(comparison, from_attributes=True)


@router.post("/estimates/penalty", response_model=PenaltyResponse)
def estimate_penalty(
    request: PenaltyRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> PenaltyResponse:
    """Estimate the underpayment penalty for skipped quarterly payments."""
    penalty = estimate_missed_payment_penalty(
        request.quarterly_payment, request.missed_payments, config
    )
    return PenaltyResponse(
        quarterly_payment=request.quarterly_payment,
        missed_payments=request.missed_payments,
        unpaid_amount=request.quarterly_payment * request.missed_payments,
        penalty=penalty,
    )


@router.post("/estimates/canceled-debt", response_model=CanceledDebtResponse)
def estimate_canceled_debt(
    request: CanceledDebtRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> CanceledDebtResponse:
    """Estimate tax on canceled debt after bankruptcy, residence or insolvency exclusions."""
    result = calculate_canceled_debt_tax(
        canceled_debt=request.canceled_debt,
        assets=request.assets.values(),
        liabilities=request.liabilities.values(),
        exclusion=request.exclusion,
        marginal_rate=request.marginal_rate,
        filing_status=request.filing_status,
        config=config,
    )
    logger.info(
        "canceled_debt_estimated",
        exclusion=request.exclusion.value if request.exclusion else None,
        is_insolvent=result.is_insolvent,
        taxable_amount=result.taxable_amount,
    )
    return CanceledDebtResponse.model_validate(result, from_attributes=True)


@router.get("/quarterly-deadlines", response_model=DeadlinesResponse)
def list_quarterly_deadlines(
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
    today: Annotated[date | None, Query(description="Reference date (YYYY-MM-DD)")] = None,
) -> DeadlinesResponse:
    """Return the estimated payment calendar and the next deadline."""
    deadlines = get_quarterly_deadlines(config)
    next_deadline = get_next_quarterly_deadline(today, config)
    return DeadlinesResponse(
        tax_year=config.tax_year,
        deadlines=[DeadlineItem.model_validate(item) for item in deadlines],
        next_deadline=DeadlineItem.model_validate(next_deadline),
    )


@router.post("/estimates/worksheet")
def download_estimate_worksheet(
    request: EstimateRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> Response:
    """Compute an estimate and return it as an Excel workbook."""
    result = _run_estimate(request, config)
    buffer = BytesIO()
    generate_estimate_worksheet(
        result,
        buffer,
        state_code=request.state_code.strip().upper(),
        filing_status=request.filing_status,
    )
    filename = f"tax_estimate_{config.tax_year}.xlsx"
    return Response(
        content=buffer.getvalue(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/estimates/notes")
def download_estimate_notes(
    request: EstimateRequest,
    config: Annotated[TaxYearConfig, Depends(get_tax_config)],
) -> Response:
    """Compute an estimate and return a Markdown summary."""
    result = _run_estimate(request, config)
    notes = generate_estimate_notes(
        result,
        state_code=request.state_code.strip().upper(),
        filing_status=request.filing_status,
    )
    filename = f"tax_estimate_{config.tax_year}.md"
    return Response(
        content=notes,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
