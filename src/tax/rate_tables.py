"""Federal and state income tax rate schedules.

Bracket schedules are immutable reference data built once at import time:
- Federal brackets per filing status (single, mfj, hoh)
- State rates for all 50 states plus DC (flat top rate, or full brackets
  where the state schedule is modeled)

Schedules are validated on construction, so a malformed table fails at import.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType


class FilingStatus(str, Enum):
    """Federal filing status supported by the estimator."""

    SINGLE = "single"
    MFJ = "mfj"
    HOH = "hoh"


class UnknownStateError(ValueError):
    """Raised when a state code has no rate table entry.

    Attributes:
        state_code: The code that failed to resolve.
    """

    def __init__(self, state_code: str) -> None:
        self.state_code = state_code
        super().__init__(f"Unknown state code: {state_code!r}")


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class TaxBracket:
    """Single bracket of a progressive schedule.

    Attributes:
        lower_bound: Income where the bracket starts (inclusive).
        upper_bound: Income where the bracket ends, None for no limit.
        rate: Marginal rate as a fraction.
    """

    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal

    @property
    def width(self) -> Decimal | None:
        """Bracket width, None when unbounded."""
        if self.upper_bound is None:
            return None
        return self.upper_bound - self.lower_bound


@dataclass(frozen=True)
class RateSchedule:
    """Ordered, contiguous bracket schedule.

    Raises:
        ValueError: If brackets are empty, overlap, leave gaps, are unbounded
            before the last entry, or have decreasing rates.
    """

    brackets: tuple[TaxBracket, ...]

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ValueError("Rate schedule must contain at least one bracket")
        if self.brackets[0].lower_bound != Decimal("0"):
            raise ValueError("First bracket must start at 0")

        previous: TaxBracket | None = None
        for index, bracket in enumerate(self.brackets):
            is_last = index == len(self.brackets) - 1
            if bracket.upper_bound is None and not is_last:
                raise ValueError("Only the last bracket may be unbounded")
            if bracket.upper_bound is not None and bracket.upper_bound <= bracket.lower_bound:
                raise ValueError(
                    f"Bracket upper bound {bracket.upper_bound} must exceed "
                    f"lower bound {bracket.lower_bound}"
                )
            if previous is not None:
                if bracket.lower_bound != previous.upper_bound:
                    raise ValueError(
                        f"Bracket starting at {bracket.lower_bound} is not contiguous "
                        f"with previous upper bound {previous.upper_bound}"
                    )
                if bracket.rate < previous.rate:
                    raise ValueError("Bracket rates must be non-decreasing")
            previous = bracket

    def __iter__(self):
        return iter(self.brackets)

    def __len__(self) -> int:
        return len(self.brackets)

    @classmethod
    def from_upper_bounds(
        cls, rows: list[tuple[str | None, str]]
    ) -> RateSchedule:
        """Build a schedule from (upper_bound, percent_rate) rows.

        Args:
            rows: Upper bounds in ascending order (None for no limit) paired
                with rates in percent, e.g. ("11925", "10").

        Returns:
            Validated RateSchedule.
        """
        brackets: list[TaxBracket] = []
        lower = Decimal("0")
        for upper, percent in rows:
            upper_bound = Decimal(upper) if upper is not None else None
            brackets.append(
                TaxBracket(lower_bound=lower, upper_bound=upper_bound, rate=_pct(percent))
            )
            if upper_bound is not None:
                lower = upper_bound
        return cls(brackets=tuple(brackets))


@dataclass(frozen=True)
class StateTaxInfo:
    """State income tax profile.

    Attributes:
        code: Two-letter postal code.
        name: State name.
        rate: Top marginal (or flat) rate as a fraction. Zero means no
            income tax.
        brackets: Full schedule where modeled, otherwise None (flat rate).
    """

    code: str
    name: str
    rate: Decimal
    brackets: RateSchedule | None = None

    @property
    def has_income_tax(self) -> bool:
        return self.rate > Decimal("0")


def _pct(value: str) -> Decimal:
    """Convert a percent string to a fractional rate."""
    return Decimal(value) / Decimal("100")


# =============================================================================
# Federal Brackets (2026)
# =============================================================================

FEDERAL_BRACKETS_2026: Mapping[FilingStatus, RateSchedule] = MappingProxyType(
    {
        FilingStatus.SINGLE: RateSchedule.from_upper_bounds(
            [
                ("11925", "10"),
                ("48475", "12"),
                ("103350", "22"),
                ("197300", "24"),
                ("250525", "32"),
                ("626350", "35"),
                (None, "37"),
            ]
        ),
        FilingStatus.MFJ: RateSchedule.from_upper_bounds(
            [
                ("23850", "10"),
                ("96950", "12"),
                ("206700", "22"),
                ("394600", "24"),
                ("501050", "32"),
                ("751600", "35"),
                (None, "37"),
            ]
        ),
        FilingStatus.HOH: RateSchedule.from_upper_bounds(
            [
                ("17000", "10"),
                ("64850", "12"),
                ("103350", "22"),
                ("197300", "24"),
                ("250500", "32"),
                ("626350", "35"),
                (None, "37"),
            ]
        ),
    }
)


# =============================================================================
# State Rates (2026, top marginal rates)
# =============================================================================

_CA_BRACKETS = RateSchedule.from_upper_bounds(
    [
        ("10412", "1.0"),
        ("24684", "2.0"),
        ("38959", "4.0"),
        ("54081", "6.0"),
        ("68350", "8.0"),
        ("349137", "9.3"),
        ("418961", "10.3"),
        ("698271", "11.3"),
        ("1000000", "12.3"),
        (None, "13.3"),
    ]
)

_NY_BRACKETS = RateSchedule.from_upper_bounds(
    [
        ("8500", "4.0"),
        ("11700", "4.5"),
        ("13900", "5.25"),
        ("80650", "5.5"),
        ("215400", "6.0"),
        ("1077550", "6.85"),
        ("5000000", "9.65"),
        ("25000000", "10.3"),
        (None, "10.9"),
    ]
)

_STATE_ROWS: list[tuple[str, str, str, RateSchedule | None]] = [
    ("AL", "Alabama", "5.0", None),
    ("AK", "Alaska", "0", None),
    ("AZ", "Arizona", "2.5", None),
    ("AR", "Arkansas", "4.4", None),
    ("CA", "California", "13.3", _CA_BRACKETS),
    ("CO", "Colorado", "4.4", None),
    ("CT", "Connecticut", "6.99", None),
    ("DE", "Delaware", "6.6", None),
    ("FL", "Florida", "0", None),
    ("GA", "Georgia", "5.49", None),
    ("HI", "Hawaii", "11.0", None),
    ("ID", "Idaho", "5.8", None),
    ("IL", "Illinois", "4.95", None),
    ("IN", "Indiana", "3.05", None),
    ("IA", "Iowa", "5.7", None),
    ("KS", "Kansas", "5.7", None),
    ("KY", "Kentucky", "4.0", None),
    ("LA", "Louisiana", "4.25", None),
    ("ME", "Maine", "7.15", None),
    ("MD", "Maryland", "5.75", None),
    ("MA", "Massachusetts", "5.0", None),
    ("MI", "Michigan", "4.25", None),
    ("MN", "Minnesota", "9.85", None),
    ("MS", "Mississippi", "5.0", None),
    ("MO", "Missouri", "4.95", None),
    ("MT", "Montana", "5.9", None),
    ("NE", "Nebraska", "5.84", None),
    ("NV", "Nevada", "0", None),
    ("NH", "New Hampshire", "0", None),
    ("NJ", "New Jersey", "10.75", None),
    ("NM", "New Mexico", "5.9", None),
    ("NY", "New York", "10.9", _NY_BRACKETS),
    ("NC", "North Carolina", "5.25", None),
    ("ND", "North Dakota", "2.5", None),
    ("OH", "Ohio", "3.5", None),
    ("OK", "Oklahoma", "4.75", None),
    ("OR", "Oregon", "9.9", None),
    ("PA", "Pennsylvania", "3.07", None),
    ("RI", "Rhode Island", "5.99", None),
    ("SC", "South Carolina", "6.4", None),
    ("SD", "South Dakota", "0", None),
    ("TN", "Tennessee", "0", None),
    ("TX", "Texas", "0", None),
    ("UT", "Utah", "4.65", None),
    ("VT", "Vermont", "8.75", None),
    ("VA", "Virginia", "5.75", None),
    ("WA", "Washington", "0", None),
    ("WV", "West Virginia", "6.5", None),
    ("WI", "Wisconsin", "7.65", None),
    ("WY", "Wyoming", "0", None),
    ("DC", "Washington D.C.", "10.75", None),
]

STATE_TAX_RATES: Mapping[str, StateTaxInfo] = MappingProxyType(
    {
        code: StateTaxInfo(code=code, name=name, rate=_pct(rate), brackets=brackets)
        for code, name, rate, brackets in _STATE_ROWS
    }
)

NO_INCOME_TAX_STATES: frozenset[str] = frozenset(
    code for code, info in STATE_TAX_RATES.items() if not info.has_income_tax
)


# =============================================================================
# Lookups
# =============================================================================


def normalize_state_code(state_code: str) -> str:
    """Normalize a state code for lookup (trimmed, upper case)."""
    return state_code.strip().upper()


def is_known_state(state_code: str) -> bool:
    """Check whether a state code resolves to a rate table entry."""
    return normalize_state_code(state_code) in STATE_TAX_RATES


def get_state_tax_info(state_code: str) -> StateTaxInfo:
    """Look up the rate profile for a state.

    Args:
        state_code: Two-letter postal code (case-insensitive).

    Returns:
        StateTaxInfo for the state.

    Raises:
        UnknownStateError: If the code is not in the rate table.
    """
    code = normalize_state_code(state_code)
    info = STATE_TAX_RATES.get(code)
    if info is None:
        raise UnknownStateError(state_code)
    return info


def parse_filing_status(filing_status: FilingStatus | str) -> FilingStatus:
    """Coerce a filing status value to FilingStatus.

    Args:
        filing_status: FilingStatus or its string value ("single", "mfj", "hoh").

    Returns:
        Matching FilingStatus.

    Raises:
        ValueError: If the filing status is not supported.
    """
    if isinstance(filing_status, FilingStatus):
        return filing_status
    try:
        return FilingStatus(filing_status.strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unknown filing status: {filing_status}") from exc


def get_federal_schedule(filing_status: FilingStatus | str) -> RateSchedule:
    """Get the federal bracket schedule for a filing status.

    Args:
        filing_status: FilingStatus or its string value.

    Returns:
        RateSchedule for the filing status.

    Raises:
        ValueError: If the filing status is not supported.
    """
    return FEDERAL_BRACKETS_2026[parse_filing_status(filing_status)]
