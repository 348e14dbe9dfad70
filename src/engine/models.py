"""Pydantic models for estimator inputs.

This module defines validated input models:
- AdvancedInputs: Optional household, deduction and payment details
- TaxInputs: Complete request for a tax estimate

All monetary fields use Decimal and must be non-negative. Every advanced
field defaults to zero, so an empty AdvancedInputs() is a valid request.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.tax.rate_tables import FilingStatus, is_known_state, normalize_state_code

# Type aliases for annotated fields
Money = Annotated[Decimal, Field(ge=0, description="Non-negative dollar amount")]
Count = Annotated[int, Field(ge=0, description="Non-negative count")]


def to_decimal(value: str | int | float | Decimal) -> Decimal:
    """Convert a numeric argument to Decimal.

    Floats go through str() so 100000.1 becomes Decimal("100000.1") rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class AdvancedInputs(BaseModel):
    """Optional inputs that refine the estimate.

    Spouse fields only matter for joint filers but are accepted for any
    filing status, matching how the amounts are summed.
    """

    model_config = ConfigDict(frozen=True)

    # Additional income
    w2_income: Money = Field(default=Decimal("0"), description="W-2 wages (Box 1)")
    spouse_w2_income: Money = Field(default=Decimal("0"), description="Spouse W-2 wages")
    spouse_1099_income: Money = Field(default=Decimal("0"), description="Spouse 1099 income")

    # Business deductions
    work_mileage: Money = Field(default=Decimal("0"), description="Business miles driven")
    home_office_square_feet: Money = Field(
        default=Decimal("0"), description="Dedicated home office square footage"
    )

    # Adjustments and itemized deductions
    health_insurance_premiums: Money = Field(
        default=Decimal("0"), description="Self-employed health insurance premiums"
    )
    ira_contributions: Money = Field(
        default=Decimal("0"), description="Traditional IRA contributions"
    )
    mortgage_interest: Money = Field(default=Decimal("0"), description="Mortgage interest (Form 1098)")

    # Credits
    student_tuition: Money = Field(default=Decimal("0"), description="Qualified tuition and fees")
    dependents_under_17: Count = Field(default=0, description="Children under 17")
    dependents_over_17: Count = Field(default=0, description="Other dependents 17 and older")

    # Payments
    quarterly_payments_made: Money = Field(
        default=Decimal("0"), description="Estimated payments already made (1040-ES)"
    )
    w2_taxes_withheld: Money = Field(
        default=Decimal("0"), description="Federal tax withheld (W-2 Box 2)"
    )


class TaxInputs(BaseModel):
    """Complete estimator request."""

    model_config = ConfigDict(frozen=True)

    gross_income: Money = Field(description="Gross 1099 income")
    business_expenses: Money = Field(default=Decimal("0"), description="Business expenses")
    state_code: str = Field(default="TX", description="Two-letter state of residence")
    filing_status: FilingStatus = Field(default=FilingStatus.SINGLE, description="Filing status")
    advanced: AdvancedInputs = Field(default_factory=AdvancedInputs)

    @field_validator("state_code")
    @classmethod
    def validate_state_code(cls, v: str) -> str:
        """Normalize the state code and reject codes without a rate table."""
        if not is_known_state(v):
            raise ValueError(f"Unknown state code: {v!r}")
        return normalize_state_code(v)
