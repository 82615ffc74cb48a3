"""
IRR and NPV Calculations

Implements XIRR using Newton-Raphson with a bisection fallback.
Returns None instead of raising when a series has no meaningful rate.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from fund_analytics.calculations.cashflows import (
    CashFlowSeries,
    has_mixed_signs,
    sort_by_date,
    year_fraction,
)

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
MAX_BISECTION_ITERATIONS = MAX_ITERATIONS * 2
TOLERANCE = 1e-10
DERIVATIVE_FLOOR = 1e-14
DEFAULT_GUESS = 0.1

# Newton-Raphson gives up if a step leaves this range
NEWTON_MIN_RATE = -0.999
NEWTON_MAX_RATE = 10.0

# Bisection search bracket
BISECTION_LOW = -0.99
BISECTION_HIGH = 10.0


def _prepare(cash_flows: CashFlowSeries) -> Tuple[np.ndarray, np.ndarray]:
    """Sort a working copy and return (year offsets, amounts) arrays."""
    ordered = sort_by_date(cash_flows)
    base_date = ordered[0].date
    years = np.array([year_fraction(base_date, cf.date) for cf in ordered], dtype=float)
    amounts = np.array([cf.amount for cf in ordered], dtype=float)
    return years, amounts


def _xnpv(years: np.ndarray, amounts: np.ndarray, rate: float) -> float:
    return float(np.sum(amounts / np.power(1.0 + rate, years)))


def _xnpv_derivative(years: np.ndarray, amounts: np.ndarray, rate: float) -> float:
    """Derivative of XNPV with respect to rate (for Newton-Raphson)."""
    return float(-np.sum(years * amounts / np.power(1.0 + rate, years + 1.0)))


def calculate_xnpv(cash_flows: CashFlowSeries, discount_rate: float) -> float:
    """
    Calculate XNPV, discounting every flow back to the earliest date.

    Args:
        cash_flows: Dated cash flows in any order
        discount_rate: Annual discount rate (e.g., 0.10 for 10%)

    Returns:
        XNPV value (0.0 for an empty series)
    """
    if not cash_flows:
        return 0.0
    years, amounts = _prepare(cash_flows)
    return _xnpv(years, amounts, discount_rate)


def _newton_raphson(years: np.ndarray, amounts: np.ndarray) -> Optional[float]:
    rate = DEFAULT_GUESS

    for _ in range(MAX_ITERATIONS):
        xnpv = _xnpv(years, amounts, rate)
        if abs(xnpv) < TOLERANCE:
            return rate

        dxnpv = _xnpv_derivative(years, amounts, rate)
        if abs(dxnpv) < DERIVATIVE_FLOOR:
            return None

        new_rate = rate - xnpv / dxnpv

        if not np.isfinite(new_rate):
            return None
        if new_rate < NEWTON_MIN_RATE or new_rate > NEWTON_MAX_RATE:
            return None

        rate = new_rate

    return None


def _bisection(years: np.ndarray, amounts: np.ndarray) -> Optional[float]:
    lo, hi = BISECTION_LOW, BISECTION_HIGH
    f_lo = _xnpv(years, amounts, lo)
    f_hi = _xnpv(years, amounts, hi)

    if f_lo * f_hi > 0:
        # No sign change inside the bracket
        return None

    for _ in range(MAX_BISECTION_ITERATIONS):
        mid = (lo + hi) / 2
        f_mid = _xnpv(years, amounts, mid)

        if abs(f_mid) < TOLERANCE or (hi - lo) / 2 < TOLERANCE:
            return mid

        if f_lo * f_mid < 0:
            hi = mid
        else:
            lo, f_lo = mid, f_mid

    return None


def calculate_xirr(cash_flows: CashFlowSeries) -> Optional[float]:
    """
    Calculate XIRR (IRR with specific dates).

    Year fractions use an Actual/365.25 day count from the earliest date.
    Newton-Raphson runs first from a 10% guess; if it diverges or stalls,
    bisection over [-99%, 1000%] takes over.

    Args:
        cash_flows: Dated cash flows in any order

    Returns:
        Annualized rate as decimal (e.g., 0.15 for 15%), or None when the
        series has fewer than two flows, flows of only one sign, or no root
        that either method can find.
    """
    if len(cash_flows) < 2 or not has_mixed_signs(cash_flows):
        return None

    years, amounts = _prepare(cash_flows)

    rate = _newton_raphson(years, amounts)
    if rate is not None:
        return rate

    logger.debug("Newton-Raphson did not converge, falling back to bisection")
    rate = _bisection(years, amounts)
    if rate is None:
        logger.debug("XIRR has no solution for %d cash flows", len(cash_flows))
    return rate


def calculate_multiple(cash_flows: CashFlowSeries) -> Optional[float]:
    """
    Calculate equity multiple.

    Args:
        cash_flows: Dated cash flows (investments are negative)

    Returns:
        Multiple (e.g., 2.0 = 2.0x return), or None with no outflows
    """
    total_inflows = sum(cf.amount for cf in cash_flows if cf.amount > 0)
    total_outflows = abs(sum(cf.amount for cf in cash_flows if cf.amount < 0))

    if total_outflows == 0:
        return None

    return total_inflows / total_outflows


def calculate_profit(cash_flows: CashFlowSeries) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cf.amount for cf in cash_flows)
