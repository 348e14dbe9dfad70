"""Tests for self-employment tax."""

from decimal import Decimal

import pytest

from src.engine.self_employment import (
    calculate_self_employment_tax,
    get_additional_medicare_threshold,
)
from src.tax.rate_tables import FilingStatus
from src.tax.year_config import TaxYearConfig


class TestSelfEmploymentTax:
    def test_reference_100k(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(Decimal("100000"), config=config)

        assert result.taxable_earnings == Decimal("92350")
        assert result.social_security_tax == Decimal("11451.40")
        assert result.medicare_tax == Decimal("2678.15")
        assert result.additional_medicare_tax == Decimal("0")
        assert result.total_se_tax == Decimal("14129.55")
        assert result.se_tax_deduction == Decimal("7064.775")

    def test_zero_earnings(self) -> None:
        result = calculate_self_employment_tax(Decimal("0"))
        assert result.total_se_tax == Decimal("0")
        assert result.se_tax_deduction == Decimal("0")

    def test_negative_earnings_treated_as_zero(self) -> None:
        result = calculate_self_employment_tax(Decimal("-20000"))
        assert result.total_se_tax == Decimal("0")

    def test_social_security_capped_at_wage_base(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(Decimal("300000"), config=config)
        assert result.social_security_tax == config.ss_wage_base * config.se_ss_rate

    def test_medicare_uncapped(self, config: TaxYearConfig) -> None:
        result = calculate_self_employment_tax(Decimal("300000"), config=config)
        assert result.medicare_tax == Decimal("300000") * Decimal("0.9235") * Decimal("0.029")

    def test_additional_medicare_uses_raw_net_earnings(self) -> None:
        """Surtax applies to raw earnings above the threshold, not the 92.35% figure."""
        result = calculate_self_employment_tax(Decimal("210000"), Decimal("200000"))
        assert result.additional_medicare_tax == Decimal("90")

    def test_additional_medicare_not_triggered_at_threshold(self) -> None:
        result = calculate_self_employment_tax(Decimal("200000"), Decimal("200000"))
        assert result.additional_medicare_tax == Decimal("0")

    def test_mfj_threshold_is_higher(self) -> None:
        single = calculate_self_employment_tax(
            Decimal("240000"), get_additional_medicare_threshold("single")
        )
        joint = calculate_self_employment_tax(
            Decimal("240000"), get_additional_medicare_threshold("mfj")
        )
        assert single.additional_medicare_tax == Decimal("360")
        assert joint.additional_medicare_tax == Decimal("0")

    def test_deduction_is_half_of_total(self) -> None:
        result = calculate_self_employment_tax(Decimal("87654.32"))
        assert result.se_tax_deduction * 2 == result.total_se_tax


class TestAdditionalMedicareThreshold:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (FilingStatus.SINGLE, Decimal("200000")),
            (FilingStatus.HOH, Decimal("200000")),
            (FilingStatus.MFJ, Decimal("250000")),
        ],
    )
    def test_threshold_by_status(self, status: FilingStatus, expected: Decimal) -> None:
        assert get_additional_medicare_threshold(status) == expected
