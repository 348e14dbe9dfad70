"""Progressive bracket evaluation shared by federal and state tax.

Pure functions with no side effects: the same amount and schedule always
produce the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.tax.rate_tables import RateSchedule, get_state_tax_info


@dataclass(frozen=True)
class BracketBreakdown:
    """Tax attributed to a single consumed bracket.

    Attributes:
        rate: Marginal rate as a fraction.
        lower_bound: Bracket start.
        upper_bound: Bracket end, None for the unbounded top bracket.
        taxable_in_bracket: Income taxed in this bracket.
        tax_from_bracket: Tax owed on that income.
    """

    rate: Decimal
    lower_bound: Decimal
    upper_bound: Decimal | None
    taxable_in_bracket: Decimal
    tax_from_bracket: Decimal


@dataclass(frozen=True)
class BracketTaxResult:
    """Result of a bracket evaluation.

    Attributes:
        total_tax: Sum of tax across brackets (never negative).
        breakdown: Consumed brackets in ascending order.
    """

    total_tax: Decimal
    breakdown: tuple[BracketBreakdown, ...]

    @property
    def taxable_consumed(self) -> Decimal:
        """Income attributed across all consumed brackets."""
        return sum((entry.taxable_in_bracket for entry in self.breakdown), Decimal("0"))


def compute_bracket_tax(amount: Decimal, schedule: RateSchedule) -> BracketTaxResult:
    """Apply a progressive schedule to an amount.

    Args:
        amount: Taxable amount. Callers pass non-negative values; anything
            at or below zero consumes no brackets.
        schedule: Contiguous ascending schedule.

    Returns:
        BracketTaxResult with total tax and per-bracket breakdown.

    Example:
        >>> result = compute_bracket_tax(Decimal("11925"), get_federal_schedule("single"))
        >>> result.total_tax
        Decimal('1192.5')
    """
    remaining = amount
    total_tax = Decimal("0")
    breakdown: list[BracketBreakdown] = []

    for bracket in schedule:
        if remaining <= Decimal("0"):
            break

        width = bracket.width
        # Top bracket - no limit
        taxable_in_bracket = remaining if width is None else min(remaining, width)
        tax_from_bracket = taxable_in_bracket * bracket.rate
        total_tax += tax_from_bracket
        remaining -= taxable_in_bracket

        if taxable_in_bracket > Decimal("0"):
            breakdown.append(
                BracketBreakdown(
                    rate=bracket.rate,
                    lower_bound=bracket.lower_bound,
                    upper_bound=bracket.upper_bound,
                    taxable_in_bracket=taxable_in_bracket,
                    tax_from_bracket=tax_from_bracket,
                )
            )

    return BracketTaxResult(total_tax=max(Decimal("0"), total_tax), breakdown=tuple(breakdown))


def calculate_state_tax(
    taxable_income: Decimal, state_code: str, *, floor_at_zero: bool = True
) -> Decimal:
    """Calculate state income tax.

    States without income tax return zero. States with a modeled schedule use
    the bracket evaluator; all others apply their flat rate.

    Args:
        taxable_income: Income subject to state tax.
        state_code: Two-letter postal code.
        floor_at_zero: Clamp a flat-rate result at zero. The SALT estimate
            passes False so income below the standard deduction lowers the
            itemized total.

    Returns:
        State tax; never negative unless floor_at_zero is False for a
        flat-rate state.

    Raises:
        UnknownStateError: If the state code is not in the rate table.
    """
    state = get_state_tax_info(state_code)
    if not state.has_income_tax:
        return Decimal("0")

    if state.brackets is not None:
        return compute_bracket_tax(taxable_income, state.brackets).total_tax

    flat_tax = taxable_income * state.rate
    if floor_at_zero:
        return max(Decimal("0"), flat_tax)
    return flat_tax
