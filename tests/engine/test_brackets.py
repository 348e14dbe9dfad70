"""Tests for progressive bracket evaluation and state tax."""

from decimal import Decimal

import pytest

from src.engine.brackets import calculate_state_tax, compute_bracket_tax
from src.tax.rate_tables import (
    NO_INCOME_TAX_STATES,
    RateSchedule,
    UnknownStateError,
    get_federal_schedule,
)


@pytest.fixture
def single_schedule() -> RateSchedule:
    return get_federal_schedule("single")


class TestComputeBracketTax:
    """Bracket walk over a progressive schedule."""

    def test_zero_amount_yields_no_tax(self, single_schedule: RateSchedule) -> None:
        result = compute_bracket_tax(Decimal("0"), single_schedule)
        assert result.total_tax == Decimal("0")
        assert result.breakdown == ()

    def test_negative_amount_yields_no_tax(self, single_schedule: RateSchedule) -> None:
        result = compute_bracket_tax(Decimal("-5000"), single_schedule)
        assert result.total_tax == Decimal("0")
        assert result.breakdown == ()

    def test_exact_first_bracket_boundary(self, single_schedule: RateSchedule) -> None:
        """Income equal to the first upper bound stays in the 10% bracket."""
        result = compute_bracket_tax(Decimal("11925"), single_schedule)

        assert result.total_tax == Decimal("1192.50")
        assert len(result.breakdown) == 1
        entry = result.breakdown[0]
        assert entry.rate == Decimal("0.10")
        assert entry.taxable_in_bracket == Decimal("11925")
        assert entry.tax_from_bracket == Decimal("1192.50")

    def test_one_dollar_over_boundary_enters_next_bracket(
        self, single_schedule: RateSchedule
    ) -> None:
        result = compute_bracket_tax(Decimal("11926"), single_schedule)
        assert len(result.breakdown) == 2
        assert result.breakdown[1].taxable_in_bracket == Decimal("1")
        assert result.total_tax == Decimal("1192.62")

    def test_three_bracket_amount(self, single_schedule: RateSchedule) -> None:
        result = compute_bracket_tax(Decimal("77935.225"), single_schedule)
        assert result.total_tax == Decimal("12059.7495")
        assert [entry.rate for entry in result.breakdown] == [
            Decimal("0.10"),
            Decimal("0.12"),
            Decimal("0.22"),
        ]

    def test_top_bracket_is_unbounded(self, single_schedule: RateSchedule) -> None:
        result = compute_bracket_tax(Decimal("1000000"), single_schedule)
        top = result.breakdown[-1]
        assert top.rate == Decimal("0.37")
        assert top.upper_bound is None
        assert top.taxable_in_bracket == Decimal("373650")

    @pytest.mark.parametrize(
        "amount",
        ["1", "11925", "48475.01", "150000", "626350", "2500000.55"],
    )
    def test_breakdown_conserves_income_and_tax(
        self, single_schedule: RateSchedule, amount: str
    ) -> None:
        result = compute_bracket_tax(Decimal(amount), single_schedule)
        assert result.taxable_consumed == Decimal(amount)
        assert sum(e.tax_from_bracket for e in result.breakdown) == result.total_tax

    def test_breakdown_is_ascending(self, single_schedule: RateSchedule) -> None:
        result = compute_bracket_tax(Decimal("300000"), single_schedule)
        lower_bounds = [entry.lower_bound for entry in result.breakdown]
        assert lower_bounds == sorted(lower_bounds)
        assert all(entry.taxable_in_bracket > 0 for entry in result.breakdown)


class TestCalculateStateTax:
    """State income tax by rate table entry."""

    @pytest.mark.parametrize("state_code", sorted(NO_INCOME_TAX_STATES))
    def test_no_income_tax_states_return_zero(self, state_code: str) -> None:
        assert calculate_state_tax(Decimal("250000"), state_code) == Decimal("0")

    def test_california_uses_brackets(self) -> None:
        assert calculate_state_tax(Decimal("77935.225"), "CA") == Decimal("3900.825925")

    def test_flat_rate_state(self) -> None:
        assert calculate_state_tax(Decimal("50000"), "IL") == Decimal("2475")

    def test_negative_taxable_income_is_clamped(self) -> None:
        assert calculate_state_tax(Decimal("-1000"), "IL") == Decimal("0")
        assert calculate_state_tax(Decimal("-1000"), "CA") == Decimal("0")

    def test_unfloored_flat_rate_goes_negative(self) -> None:
        assert calculate_state_tax(Decimal("-1000"), "IL", floor_at_zero=False) == Decimal(
            "-49.5"
        )

    def test_unfloored_has_no_effect_on_bracket_and_zero_states(self) -> None:
        assert calculate_state_tax(Decimal("-1000"), "CA", floor_at_zero=False) == Decimal("0")
        assert calculate_state_tax(Decimal("-1000"), "TX", floor_at_zero=False) == Decimal("0")

    def test_unknown_state_raises(self) -> None:
        with pytest.raises(UnknownStateError):
            calculate_state_tax(Decimal("50000"), "XX")
