"""Output generators for tax estimates.

This module provides taxpayer-facing renderings of a TaxCalculationResult:
- generate_estimate_worksheet: Excel workbook with summary, federal bracket
  and self-employment sheets
- generate_estimate_notes: Markdown summary of the estimate
- format_currency / format_percent: whole-dollar and one-decimal display

Results carry full precision; rounding happens here and nowhere else.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from src.engine.calculator import TaxCalculationResult
from src.tax.rate_tables import FilingStatus, get_state_tax_info, parse_filing_status

CURRENCY_FORMAT = '"$"#,##0.00'
HEADER_FILL = PatternFill(start_color="DAEEF3", end_color="DAEEF3", fill_type="solid")

FILING_STATUS_LABELS = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MFJ: "Married Filing Jointly",
    FilingStatus.HOH: "Head of Household",
}


# =============================================================================
# Display Formatting
# =============================================================================


def format_currency(amount: Decimal) -> str:
    """Format an amount as whole US dollars.

    Example:
        >>> format_currency(Decimal("14129.55"))
        '$14,130'
        >>> format_currency(Decimal("-1234.4"))
        '-$1,234'
    """
    rounded = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if rounded < 0:
        return f"-${-rounded:,.0f}"
    return f"${abs(rounded):,.0f}"


def format_percent(rate: Decimal) -> str:
    """Format a fractional rate as a percentage with one decimal place.

    Example:
        >>> format_percent(Decimal("0.30090"))
        '30.1%'
    """
    percent = (rate * Decimal("100")).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def _format_decimal(value: Decimal | None) -> float | None:
    """Convert Decimal to float for Excel."""
    if value is None:
        return None
    return float(value)


# =============================================================================
# Estimate Worksheet
# =============================================================================


def _auto_fit_columns(worksheet) -> None:
    """Auto-fit column widths based on content.

    Args:
        worksheet: openpyxl worksheet to adjust.
    """
    for column_cells in worksheet.columns:
        max_length = max((len(str(cell.value)) for cell in column_cells if cell.value), default=0)
        worksheet.column_dimensions[column_cells[0].column_letter].width = min(max_length + 2, 50)


def _write_header_row(ws, headers: list[str]) -> None:
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", wrap_text=True)
        cell.fill = HEADER_FILL
    ws.freeze_panes = "A2"


def _write_section(ws, row: int, title: str, items: list[tuple[str, Decimal]], bold: set[str]) -> int:
    """Write a titled label/amount section and return the next free row."""
    ws[f"A{row}"] = title
    ws[f"A{row}"].font = Font(bold=True)
    row += 1
    for label, amount in items:
        ws[f"A{row}"] = label
        ws[f"B{row}"] = _format_decimal(amount)
        ws[f"B{row}"].number_format = CURRENCY_FORMAT
        if label in bold:
            ws[f"A{row}"].font = Font(bold=True)
            ws[f"B{row}"].font = Font(bold=True)
        row += 1
    return row + 1


def _add_summary_sheet(
    workbook: Workbook,
    result: TaxCalculationResult,
    taxpayer_label: str,
    state_name: str,
    filing_label: str,
) -> None:
    ws = workbook.active
    ws.title = "Summary"

    ws["A1"] = f"Tax Estimate: {taxpayer_label}"
    ws["A1"].font = Font(bold=True, size=14)
    ws["A2"] = f"State: {state_name} | Filing Status: {filing_label}"
    ws["A3"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}"

    row = _write_section(
        ws,
        5,
        "INCOME",
        [
            ("1099 Income", result.gross_income),
            ("W-2 Income", result.w2_income),
            ("TOTAL INCOME", result.total_income),
        ],
        {"TOTAL INCOME"},
    )
    row = _write_section(
        ws,
        row,
        "BUSINESS DEDUCTIONS",
        [
            ("Business Expenses", result.business_expenses),
            ("Mileage", result.mileage_deduction),
            ("Home Office", result.home_office_deduction),
            ("TOTAL BUSINESS DEDUCTIONS", result.total_deductions),
            ("Net Self-Employment Earnings", result.net_earnings),
        ],
        {"TOTAL BUSINESS DEDUCTIONS"},
    )
    row = _write_section(
        ws,
        row,
        "ADJUSTMENTS AND DEDUCTIONS",
        [
            ("SE Tax Deduction", result.se_tax_deduction),
            ("IRA Deduction", result.ira_deduction),
            ("Health Insurance Deduction", result.health_insurance_deduction),
            ("Adjusted Gross Income", result.adjusted_gross_income),
            ("Standard Deduction", result.standard_deduction),
            ("Itemized Deductions", result.itemized_deductions),
            ("Taxable Income", result.taxable_income),
        ],
        {"Adjusted Gross Income", "Taxable Income"},
    )
    ws[f"A{row - 1}"] = f"Deduction Method: {result.deduction_used.title()}"
    row += 1
    row = _write_section(
        ws,
        row,
        "TAX CALCULATION",
        [
            ("Federal Income Tax", result.federal_income_tax),
            ("Credits", result.credits.total_credits),
            ("Federal Tax After Credits", result.federal_tax_after_credits),
            ("Self-Employment Tax", result.self_employment_tax),
            ("State Tax", result.state_tax),
            ("TOTAL TAX", result.total_tax),
            ("Payments and Withholding", result.payments_and_withholding),
            ("Amount Owed/(Refund)", result.tax_owed_or_refund),
            ("Quarterly Payment", result.quarterly_payment),
        ],
        {"TOTAL TAX", "Amount Owed/(Refund)"},
    )
    ws[f"A{row}"] = "Effective Rate"
    ws[f"B{row}"] = format_percent(result.effective_rate)

    _auto_fit_columns(ws)


def _add_federal_brackets_sheet(workbook: Workbook, result: TaxCalculationResult) -> None:
    ws = workbook.create_sheet("Federal Brackets")
    _write_header_row(ws, ["Rate", "From", "To", "Taxable in Bracket", "Tax from Bracket"])

    for row, entry in enumerate(result.federal_bracket_breakdown, 2):
        ws.cell(row=row, column=1, value=format_percent(entry.rate))
        ws.cell(row=row, column=2, value=_format_decimal(entry.lower_bound))
        ws.cell(
            row=row,
            column=3,
            value="No limit" if entry.upper_bound is None else _format_decimal(entry.upper_bound),
        )
        ws.cell(row=row, column=4, value=_format_decimal(entry.taxable_in_bracket))
        ws.cell(row=row, column=5, value=_format_decimal(entry.tax_from_bracket))
        for col in (2, 3, 4, 5):
            ws.cell(row=row, column=col).number_format = CURRENCY_FORMAT

    _auto_fit_columns(ws)


def _add_self_employment_sheet(workbook: Workbook, result: TaxCalculationResult) -> None:
    ws = workbook.create_sheet("Self-Employment")
    _write_header_row(ws, ["Component", "Amount"])

    items = [
        ("Social Security", result.se_breakdown.social_security_tax),
        ("Medicare", result.se_breakdown.medicare_tax),
        ("Additional Medicare", result.se_breakdown.additional_medicare_tax),
        ("Total SE Tax", result.self_employment_tax),
        ("Deductible Half", result.se_tax_deduction),
    ]
    for row, (label, amount) in enumerate(items, 2):
        ws.cell(row=row, column=1, value=label)
        ws.cell(row=row, column=2, value=_format_decimal(amount)).number_format = CURRENCY_FORMAT

    _auto_fit_columns(ws)


def generate_estimate_worksheet(
    result: TaxCalculationResult,
    output: Path | BinaryIO,
    state_code: str,
    filing_status: FilingStatus | str,
    taxpayer_label: str = "Self-Employed Filer",
) -> Path | BinaryIO:
    """Generate an Excel worksheet for a tax estimate.

    Creates Summary, Federal Brackets and Self-Employment sheets.

    Args:
        result: Estimate from compute_tax_result.
        output: File path or writable binary stream for the xlsx.
        state_code: State the estimate was computed for.
        filing_status: Filing status the estimate was computed for.
        taxpayer_label: Name shown in the sheet header.

    Returns:
        The output path or stream.

    Raises:
        UnknownStateError: If the state code has no rate table entry.
    """
    state = get_state_tax_info(state_code)
    filing_label = FILING_STATUS_LABELS[parse_filing_status(filing_status)]

    workbook = Workbook()
    _add_summary_sheet(workbook, result, taxpayer_label, state.name, filing_label)
    _add_federal_brackets_sheet(workbook, result)
    _add_self_employment_sheet(workbook, result)

    if isinstance(output, Path):
        output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)

    return output


# =============================================================================
# Estimate Notes
# =============================================================================


def generate_estimate_notes(
    result: TaxCalculationResult,
    state_code: str,
    filing_status: FilingStatus | str,
) -> str:
    """Generate a Markdown summary of a tax estimate.

    Args:
        result: Estimate from compute_tax_result.
        state_code: State the estimate was computed for.
        filing_status: Filing status the estimate was computed for.

    Returns:
        Markdown document.
    """
    state = get_state_tax_info(state_code)
    filing_label = FILING_STATUS_LABELS[parse_filing_status(filing_status)]

    lines = [
        "# Tax Estimate",
        "",
        f"**State:** {state.name} | **Filing Status:** {filing_label}",
        "",
        "## Summary",
        "",
        "| Item | Amount |",
        "|------|--------|",
        f"| Total Income | {format_currency(result.total_income)} |",
        f"| Adjusted Gross Income | {format_currency(result.adjusted_gross_income)} |",
        f"| Taxable Income | {format_currency(result.taxable_income)} |",
        f"| Federal Income Tax | {format_currency(result.federal_tax_after_credits)} |",
        f"| Self-Employment Tax | {format_currency(result.self_employment_tax)} |",
        f"| State Tax | {format_currency(result.state_tax)} |",
        f"| **Total Tax** | **{format_currency(result.total_tax)}** |",
        f"| Effective Rate | {format_percent(result.effective_rate)} |",
        "",
    ]

    if result.tax_owed_or_refund >= Decimal("0"):
        lines.append(f"**Amount owed:** {format_currency(result.tax_owed_or_refund)}")
        lines.append("")
        lines.append(
            f"**Quarterly payment:** {format_currency(result.quarterly_payment)} per quarter"
        )
    else:
        lines.append(f"**Estimated refund:** {format_currency(-result.tax_owed_or_refund)}")
    lines.append("")

    lines.append(f"## Deductions ({result.deduction_used.title()})")
    lines.append("")
    lines.append(f"- Standard deduction: {format_currency(result.standard_deduction)}")
    lines.append(f"- Itemized deductions: {format_currency(result.itemized_deductions)}")
    if result.mileage_deduction > Decimal("0"):
        lines.append(f"- Mileage: {format_currency(result.mileage_deduction)}")
    if result.home_office_deduction > Decimal("0"):
        lines.append(f"- Home office: {format_currency(result.home_office_deduction)}")
    lines.append("")

    if result.federal_bracket_breakdown:
        lines.append("## Federal Brackets")
        lines.append("")
        lines.append("| Rate | Taxable | Tax |")
        lines.append("|------|---------|-----|")
        for entry in result.federal_bracket_breakdown:
            lines.append(
                f"| {format_percent(entry.rate)} | {format_currency(entry.taxable_in_bracket)} "
                f"| {format_currency(entry.tax_from_bracket)} |"
            )
        lines.append("")

    if result.credits.total_credits > Decimal("0"):
        lines.append("## Credits")
        lines.append("")
        lines.append(f"- Child tax credit: {format_currency(result.credits.child_tax_credit)}")
        lines.append(
            f"- Other dependent credit: {format_currency(result.credits.other_dependent_credit)}"
        )
        lines.append(f"- Education credit: {format_currency(result.credits.education_credit)}")
        lines.append("")

    lines.append(
        f"Typical business deductions for this income: "
        f"{format_currency(result.potential_deductions.min)} - "
        f"{format_currency(result.potential_deductions.max)}"
    )
    lines.append("")

    return "\n".join(lines)
