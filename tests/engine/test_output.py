"""Tests for estimate worksheet and notes generation."""

from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import load_workbook

from src.engine.calculator import TaxCalculationResult, compute_tax_result
from src.engine.models import AdvancedInputs
from src.engine.output import (
    format_currency,
    format_percent,
    generate_estimate_notes,
    generate_estimate_worksheet,
)


@pytest.fixture
def ca_result() -> TaxCalculationResult:
    return compute_tax_result(Decimal("100000"), state_code="CA")


# =============================================================================
# Display formatting
# =============================================================================


class TestFormatting:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("14129.55", "$14,130"),
            ("0.5", "$1"),
            ("0", "$0"),
            ("-0.4", "$0"),
            ("-1234.4", "-$1,234"),
            ("1234567.49", "$1,234,567"),
        ],
    )
    def test_format_currency(self, amount: str, expected: str) -> None:
        assert format_currency(Decimal(amount)) == expected

    @pytest.mark.parametrize(
        ("rate", "expected"),
        [("0.30090125425", "30.1%"), ("0.1", "10.0%"), ("0", "0.0%"), ("0.0925", "9.3%")],
    )
    def test_format_percent(self, rate: str, expected: str) -> None:
        assert format_percent(Decimal(rate)) == expected


# =============================================================================
# Worksheet
# =============================================================================


class TestEstimateWorksheet:
    def test_writes_expected_sheets_to_path(
        self, ca_result: TaxCalculationResult, tmp_path: Path
    ) -> None:
        output = tmp_path / "nested" / "estimate.xlsx"
        returned = generate_estimate_worksheet(ca_result, output, "CA", "single")

        assert returned == output
        assert output.exists()
        workbook = load_workbook(output)
        assert workbook.sheetnames == ["Summary", "Federal Brackets", "Self-Employment"]

    def test_summary_header_names_state_and_status(
        self, ca_result: TaxCalculationResult
    ) -> None:
        buffer = BytesIO()
        generate_estimate_worksheet(ca_result, buffer, "CA", "single", taxpayer_label="Jordan")
        buffer.seek(0)

        ws = load_workbook(buffer)["Summary"]
        assert ws["A1"].value == "Tax Estimate: Jordan"
        assert ws["A2"].value == "State: California | Filing Status: Single"

    def test_bracket_sheet_has_row_per_bracket(self, ca_result: TaxCalculationResult) -> None:
        buffer = BytesIO()
        generate_estimate_worksheet(ca_result, buffer, "CA", "single")
        buffer.seek(0)

        ws = load_workbook(buffer)["Federal Brackets"]
        assert ws.max_row == 1 + len(ca_result.federal_bracket_breakdown)
        assert ws.cell(row=2, column=1).value == "10.0%"

    def test_self_employment_sheet_totals(self, ca_result: TaxCalculationResult) -> None:
        buffer = BytesIO()
        generate_estimate_worksheet(ca_result, buffer, "CA", "single")
        buffer.seek(0)

        ws = load_workbook(buffer)["Self-Employment"]
        labels = [ws.cell(row=row, column=1).value for row in range(2, ws.max_row + 1)]
        assert "Total SE Tax" in labels
        total_row = labels.index("Total SE Tax") + 2
        assert ws.cell(row=total_row, column=2).value == pytest.approx(14129.55)


# =============================================================================
# Notes
# =============================================================================


class TestEstimateNotes:
    def test_amount_owed_notes(self, ca_result: TaxCalculationResult) -> None:
        notes = generate_estimate_notes(ca_result, "CA", "single")

        assert notes.startswith("# Tax Estimate")
        assert "**State:** California | **Filing Status:** Single" in notes
        assert "| **Total Tax** | **$30,090** |" in notes
        assert "| Effective Rate | 30.1% |" in notes
        assert "**Amount owed:** $30,090" in notes
        assert "**Quarterly payment:** $7,523 per quarter" in notes
        assert "## Deductions (Standard)" in notes
        assert "## Federal Brackets" in notes
        assert "## Credits" not in notes
        assert "$10,000 - $25,000" in notes

    def test_refund_notes(self) -> None:
        result = compute_tax_result(
            Decimal("20000"),
            advanced=AdvancedInputs(w2_taxes_withheld=Decimal("15000"), dependents_under_17=1),
        )
        notes = generate_estimate_notes(result, "TX", "hoh")

        assert "**Estimated refund:**" in notes
        assert "Quarterly payment" not in notes
        assert "**Filing Status:** Head of Household" in notes
        assert "- Child tax credit: $2,000" in notes
