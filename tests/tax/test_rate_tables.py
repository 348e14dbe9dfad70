"""Tests for federal and state rate tables."""

from decimal import Decimal

import pytest

from src.tax.rate_tables import (
    FEDERAL_BRACKETS_2026,
    NO_INCOME_TAX_STATES,
    STATE_TAX_RATES,
    FilingStatus,
    RateSchedule,
    TaxBracket,
    UnknownStateError,
    get_federal_schedule,
    get_state_tax_info,
    is_known_state,
    normalize_state_code,
    parse_filing_status,
)


# =============================================================================
# Federal schedules
# =============================================================================


class TestFederalSchedules:
    """Federal bracket tables for 2026."""

    @pytest.mark.parametrize("status", list(FilingStatus))
    def test_every_status_has_seven_brackets(self, status: FilingStatus) -> None:
        schedule = FEDERAL_BRACKETS_2026[status]
        assert len(schedule) == 7
        assert [b.rate for b in schedule] == [
            Decimal("0.10"),
            Decimal("0.12"),
            Decimal("0.22"),
            Decimal("0.24"),
            Decimal("0.32"),
            Decimal("0.35"),
            Decimal("0.37"),
        ]

    @pytest.mark.parametrize("status", list(FilingStatus))
    def test_schedule_starts_at_zero_and_top_is_unbounded(self, status: FilingStatus) -> None:
        brackets = FEDERAL_BRACKETS_2026[status].brackets
        assert brackets[0].lower_bound == Decimal("0")
        assert brackets[-1].upper_bound is None
        assert brackets[-1].width is None

    def test_single_first_bracket_ends_at_11925(self) -> None:
        first = get_federal_schedule("single").brackets[0]
        assert first.upper_bound == Decimal("11925")
        assert first.width == Decimal("11925")

    def test_mfj_brackets_are_wider_than_single(self) -> None:
        single = get_federal_schedule(FilingStatus.SINGLE).brackets[0]
        mfj = get_federal_schedule(FilingStatus.MFJ).brackets[0]
        assert mfj.upper_bound == Decimal("23850")
        assert mfj.upper_bound > single.upper_bound

    def test_unknown_filing_status_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown filing status"):
            get_federal_schedule("married_separately")


class TestParseFilingStatus:
    def test_accepts_enum(self) -> None:
        assert parse_filing_status(FilingStatus.HOH) is FilingStatus.HOH

    def test_accepts_string_case_insensitive(self) -> None:
        assert parse_filing_status(" MFJ ") is FilingStatus.MFJ

    def test_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            parse_filing_status("qss")


# =============================================================================
# Schedule validation
# =============================================================================


class TestRateScheduleValidation:
    """Schedules reject malformed bracket lists at construction."""

    def test_rejects_empty_schedule(self) -> None:
        with pytest.raises(ValueError, match="at least one bracket"):
            RateSchedule(brackets=())

    def test_rejects_nonzero_start(self) -> None:
        with pytest.raises(ValueError, match="start at 0"):
            RateSchedule(
                brackets=(TaxBracket(Decimal("100"), None, Decimal("0.1")),)
            )

    def test_rejects_unbounded_middle_bracket(self) -> None:
        with pytest.raises(ValueError, match="unbounded"):
            RateSchedule(
                brackets=(
                    TaxBracket(Decimal("0"), None, Decimal("0.1")),
                    TaxBracket(Decimal("1000"), None, Decimal("0.2")),
                )
            )

    def test_rejects_gap_between_brackets(self) -> None:
        with pytest.raises(ValueError, match="not contiguous"):
            RateSchedule(
                brackets=(
                    TaxBracket(Decimal("0"), Decimal("1000"), Decimal("0.1")),
                    TaxBracket(Decimal("1500"), None, Decimal("0.2")),
                )
            )

    def test_rejects_decreasing_rates(self) -> None:
        with pytest.raises(ValueError, match="non-decreasing"):
            RateSchedule.from_upper_bounds([("1000", "20"), (None, "10")])

    def test_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError, match="must exceed"):
            RateSchedule(
                brackets=(TaxBracket(Decimal("0"), Decimal("0"), Decimal("0.1")),)
            )

    def test_from_upper_bounds_chains_lower_bounds(self) -> None:
        schedule = RateSchedule.from_upper_bounds([("1000", "10"), ("5000", "20"), (None, "30")])
        assert [b.lower_bound for b in schedule] == [
            Decimal("0"),
            Decimal("1000"),
            Decimal("5000"),
        ]
        assert [b.rate for b in schedule] == [Decimal("0.1"), Decimal("0.2"), Decimal("0.3")]


# =============================================================================
# State rates
# =============================================================================


class TestStateRates:
    """State rate table lookups."""

    def test_table_covers_fifty_states_and_dc(self) -> None:
        assert len(STATE_TAX_RATES) == 51
        assert "DC" in STATE_TAX_RATES

    def test_no_income_tax_states(self) -> None:
        assert NO_INCOME_TAX_STATES == frozenset(
            {"AK", "FL", "NV", "NH", "SD", "TN", "TX", "WA", "WY"}
        )
        for code in NO_INCOME_TAX_STATES:
            assert get_state_tax_info(code).has_income_tax is False

    def test_california_uses_brackets_with_top_rate(self) -> None:
        ca = get_state_tax_info("CA")
        assert ca.name == "California"
        assert ca.rate == Decimal("0.133")
        assert ca.brackets is not None
        assert ca.brackets.brackets[-1].rate == ca.rate

    def test_new_york_uses_brackets(self) -> None:
        assert get_state_tax_info("NY").brackets is not None

    def test_flat_rate_state_has_no_schedule(self) -> None:
        il = get_state_tax_info("IL")
        assert il.brackets is None
        assert il.rate == Decimal("0.0495")

    def test_lookup_is_case_and_whitespace_insensitive(self) -> None:
        assert normalize_state_code(" ca ") == "CA"
        assert get_state_tax_info(" ca ").code == "CA"
        assert is_known_state("ny")

    def test_unknown_state_raises(self) -> None:
        with pytest.raises(UnknownStateError) as exc_info:
            get_state_tax_info("ZZ")
        assert exc_info.value.state_code == "ZZ"
        assert "ZZ" in str(exc_info.value)

    def test_unknown_state_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            get_state_tax_info("")

    def test_is_known_state_false_for_unknown(self) -> None:
        assert is_known_state("PR") is False
