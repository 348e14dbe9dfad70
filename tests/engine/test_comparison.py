"""Tests for the 1099 vs W-2 comparison."""

from decimal import Decimal

import pytest

from src.engine.comparison import EmployerBenefits, FreelancerExpenses, compare_1099_vs_w2
from src.tax.rate_tables import UnknownStateError


class TestCompare1099VsW2:
    def test_w2_side_pays_half_fica(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("100000"), state_code="CA")
        assert comparison.w2.social_security_tax == Decimal("6200")
        assert comparison.w2.medicare_tax == Decimal("1450")

    def test_w2_state_tax_uses_flat_top_rate(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("100000"), state_code="CA")
        assert comparison.w2.state_tax == Decimal("11305")

    def test_w2_total_compensation_adds_benefits(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("100000"), state_code="TX")
        assert comparison.w2.benefits_value == Decimal("12000")
        assert comparison.w2.total_compensation == comparison.w2.net_income + Decimal("12000")

    def test_contractor_side_deducts_expenses(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("100000"), state_code="TX")
        assert comparison.contractor.deductions == Decimal("23600")
        assert comparison.contractor.net_business_income == Decimal("76400")
        assert comparison.contractor.state_tax == Decimal("0")

    def test_difference_and_better_option_agree(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("100000"))
        assert comparison.difference == (
            comparison.contractor.net_income - comparison.w2.net_income
        )
        expected = "1099" if comparison.difference > 0 else "W-2"
        assert comparison.better_option == expected

    def test_custom_inputs(self) -> None:
        comparison = compare_1099_vs_w2(
            Decimal("80000"),
            state_code="TX",
            employer_benefits=EmployerBenefits(
                health_insurance=Decimal("0"),
                retirement_401k=Decimal("0"),
                paid_time_off=Decimal("0"),
                other_benefits=Decimal("0"),
            ),
            freelancer_expenses=FreelancerExpenses(
                business_expenses=Decimal("0"),
                health_insurance=Decimal("0"),
                retirement_contributions=Decimal("0"),
                home_office=Decimal("0"),
            ),
        )
        # Without benefits or deductions, contractors pay the extra half of FICA
        assert comparison.contractor.total_tax > comparison.w2.total_tax
        assert comparison.better_option == "W-2"

    def test_zero_income_rates_are_zero(self) -> None:
        comparison = compare_1099_vs_w2(Decimal("0"))
        assert comparison.w2.effective_rate == Decimal("0")
        assert comparison.contractor.effective_rate == Decimal("0")

    def test_float_income_matches_decimal(self) -> None:
        assert compare_1099_vs_w2(100000.0) == compare_1099_vs_w2(Decimal("100000"))

    def test_hoh_uses_head_of_household_standard_deduction(self) -> None:
        single = compare_1099_vs_w2(Decimal("100000"), state_code="TX")
        hoh = compare_1099_vs_w2(Decimal("100000"), state_code="TX", filing_status="hoh")
        assert hoh.w2.federal_tax < single.w2.federal_tax

    def test_unknown_state_raises(self) -> None:
        with pytest.raises(UnknownStateError):
            compare_1099_vs_w2(Decimal("100000"), state_code="QQ")
