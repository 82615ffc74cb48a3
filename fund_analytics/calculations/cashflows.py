"""
Cash Flow Series

Shared value type for every solver: a dated, signed amount.
Negative amounts are capital deployed, positive amounts are capital returned.
"""

from typing import Iterable, List, Sequence, Tuple
from datetime import date
from dataclasses import dataclass

DAYS_PER_YEAR = 365.25


@dataclass(frozen=True)
class CashFlow:
    """A single dated cash flow."""

    date: date
    amount: float  # Negative = outflow (investment), positive = inflow (return)


CashFlowSeries = Sequence[CashFlow]


def build_series(flows: Iterable[Tuple[date, float]]) -> Tuple[CashFlow, ...]:
    """Build an immutable series from (date, amount) pairs."""
    return tuple(CashFlow(date=d, amount=float(amount)) for d, amount in flows)


def sort_by_date(cash_flows: CashFlowSeries) -> List[CashFlow]:
    """Return a date-ascending working copy; the caller's series is untouched."""
    return sorted(cash_flows, key=lambda cf: cf.date)


def year_fraction(start: date, end: date) -> float:
    """Years between two dates on an Actual/365.25 basis."""
    return (end - start).days / DAYS_PER_YEAR


def has_mixed_signs(cash_flows: CashFlowSeries) -> bool:
    """True when the series holds at least one outflow and one inflow."""
    has_negative = any(cf.amount < 0 for cf in cash_flows)
    has_positive = any(cf.amount > 0 for cf in cash_flows)
    return has_negative and has_positive
