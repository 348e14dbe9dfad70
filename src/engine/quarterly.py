"""Estimated tax payment planning.

- Quarterly 1040-ES deadline lookup
- Underpayment penalty estimates for late or missed payments
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.tax.year_config import TAX_YEAR_2026, QuarterlyDeadline, TaxYearConfig

DAYS_PER_YEAR = Decimal("365")
DAYS_PER_QUARTER = 90  # approximate


def calculate_quarterly_penalty(
    amount_owed: Decimal,
    days_missed: int,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> Decimal:
    """Estimate the underpayment penalty on a late payment.

    Uses simple daily interest at the annual penalty rate.

    Args:
        amount_owed: Unpaid estimated tax.
        days_missed: Days the payment is late.
        config: Tax year constants.

    Returns:
        Penalty amount.
    """
    daily_rate = config.underpayment_penalty_rate / DAYS_PER_YEAR
    return amount_owed * daily_rate * days_missed


def estimate_missed_payment_penalty(
    quarterly_payment: Decimal,
    missed_payments: int,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> Decimal:
    """Estimate the penalty for skipping several quarterly payments.

    The unpaid total (quarterly payment times payments missed) accrues for
    roughly 90 days per missed quarter.

    Args:
        quarterly_payment: Required payment per quarter.
        missed_payments: Number of quarters skipped (0-4).
        config: Tax year constants.

    Returns:
        Estimated penalty, zero when nothing was missed.
    """
    if missed_payments <= 0 or quarterly_payment <= Decimal("0"):
        return Decimal("0")
    return calculate_quarterly_penalty(
        quarterly_payment * missed_payments,
        missed_payments * DAYS_PER_QUARTER,
        config,
    )


def get_quarterly_deadlines(
    config: TaxYearConfig = TAX_YEAR_2026,
) -> tuple[QuarterlyDeadline, ...]:
    """Return the estimated payment calendar for the tax year."""
    return config.quarterly_deadlines


def get_next_quarterly_deadline(
    today: date | None = None,
    config: TaxYearConfig = TAX_YEAR_2026,
) -> QuarterlyDeadline:
    """Find the next upcoming quarterly deadline.

    Args:
        today: Reference date; defaults to the current date.
        config: Tax year constants.

    Returns:
        First deadline after today, or Q1 once every deadline has passed.
    """
    reference = today or date.today()
    for deadline in config.quarterly_deadlines:
        if deadline.due_date > reference:
            return deadline
    return config.quarterly_deadlines[0]
