"""Self-employment tax estimation engine.

Pure, deterministic calculators composed by the orchestrator:
- Bracket evaluation for federal and state schedules
- Self-employment tax
- Deductions and credits
- compute_tax_result: full estimate from raw inputs

Plus planning helpers built on top (quarterly deadlines and penalties,
1099 vs W-2 comparison, canceled debt) and output generators.
"""

from src.engine.brackets import (
    BracketBreakdown,
    BracketTaxResult,
    calculate_state_tax,
    compute_bracket_tax,
)
from src.engine.calculator import (
    PotentialDeductions,
    SelfEmploymentBreakdown,
    TaxCalculationResult,
    compute_tax_result,
    compute_tax_result_for,
    summarize_tax_result,
)
from src.engine.comparison import (
    EmployerBenefits,
    EmploymentComparison,
    FreelancerExpenses,
    compare_1099_vs_w2,
)
from src.engine.credits import CreditsResult, calculate_education_credit, calculate_tax_credits
from src.engine.debt_cancellation import (
    CanceledDebtResult,
    DebtExclusion,
    calculate_canceled_debt_tax,
    get_principal_residence_cap,
)
from src.engine.deductions import (
    DeductionResult,
    calculate_health_insurance_deduction,
    calculate_home_office_deduction,
    calculate_ira_deduction,
    calculate_itemized_deductions,
    calculate_mileage_deduction,
    get_standard_deduction,
    select_deduction,
)
from src.engine.models import AdvancedInputs, TaxInputs, to_decimal
from src.engine.output import (
    format_currency,
    format_percent,
    generate_estimate_notes,
    generate_estimate_worksheet,
)
from src.engine.quarterly import (
    calculate_quarterly_penalty,
    estimate_missed_payment_penalty,
    get_next_quarterly_deadline,
    get_quarterly_deadlines,
)
from src.engine.self_employment import (
    SelfEmploymentTaxResult,
    calculate_self_employment_tax,
    get_additional_medicare_threshold,
)

__all__ = [
    # Inputs
    "AdvancedInputs",
    "TaxInputs",
    "to_decimal",
    # Data structures
    "BracketBreakdown",
    "BracketTaxResult",
    "CanceledDebtResult",
    "CreditsResult",
    "DeductionResult",
    "DebtExclusion",
    "EmployerBenefits",
    "EmploymentComparison",
    "FreelancerExpenses",
    "PotentialDeductions",
    "SelfEmploymentBreakdown",
    "SelfEmploymentTaxResult",
    "TaxCalculationResult",
    # Calculator functions
    "compute_bracket_tax",
    "calculate_state_tax",
    "calculate_self_employment_tax",
    "get_additional_medicare_threshold",
    "calculate_mileage_deduction",
    "calculate_home_office_deduction",
    "calculate_health_insurance_deduction",
    "calculate_ira_deduction",
    "calculate_itemized_deductions",
    "get_standard_deduction",
    "select_deduction",
    "calculate_education_credit",
    "calculate_tax_credits",
    "compute_tax_result",
    "compute_tax_result_for",
    "summarize_tax_result",
    # Planning
    "calculate_quarterly_penalty",
    "estimate_missed_payment_penalty",
    "get_next_quarterly_deadline",
    "get_quarterly_deadlines",
    "compare_1099_vs_w2",
    "calculate_canceled_debt_tax",
    "get_principal_residence_cap",
    # Output generators
    "format_currency",
    "format_percent",
    "generate_estimate_notes",
    "generate_estimate_worksheet",
]
