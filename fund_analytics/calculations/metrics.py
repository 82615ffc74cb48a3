"""
Fund Performance Metrics

Paid-in multiples (DPI, RVPI, TVPI), MOIC and the fund performance summary
combining IRR with the waterfall.
"""

import logging
from typing import Optional
from datetime import date
from dataclasses import dataclass

from fund_analytics.calculations.assemblers import build_waterfall_params, calculate_fund_irr
from fund_analytics.calculations.waterfall import WaterfallResult, calculate_waterfall
from fund_analytics.config import Settings
from fund_analytics.schemas import FundCashFlows, FundTerms

logger = logging.getLogger(__name__)


def calculate_dpi(distributions: float, paid_in: float) -> Optional[float]:
    """
    Calculate Distributions to Paid-In (DPI) multiple.

    DPI = Total Distributions / Paid-In Capital
    """
    if paid_in <= 0:
        logger.warning("Paid-in capital must be positive for DPI calculation")
        return None
    return distributions / paid_in


def calculate_rvpi(nav: float, paid_in: float) -> Optional[float]:
    """
    Calculate Residual Value to Paid-In (RVPI) multiple.

    RVPI = Current NAV / Paid-In Capital
    """
    if paid_in <= 0:
        logger.warning("Paid-in capital must be positive for RVPI calculation")
        return None
    return nav / paid_in


def calculate_tvpi(total_value: float, paid_in: float) -> Optional[float]:
    """
    Calculate Total Value to Paid-In (TVPI) multiple.

    TVPI = (Distributions + NAV) / Paid-In Capital
    """
    if paid_in <= 0:
        logger.warning("Paid-in capital must be positive for TVPI calculation")
        return None
    return total_value / paid_in


def calculate_moic(total_value: float, invested_capital: float) -> Optional[float]:
    """Calculate Multiple on Invested Capital (MOIC)."""
    if invested_capital <= 0:
        logger.warning("Invested capital must be positive for MOIC calculation")
        return None
    return total_value / invested_capital


def calculate_called_percent(called: float, committed: float) -> Optional[float]:
    """Fraction of commitments called (e.g., 0.45 for 45%)."""
    if committed <= 0:
        return None
    return called / committed


def approximate_net_irr(gross_irr: Optional[float], management_fee: Optional[float]) -> Optional[float]:
    """
    Rough net IRR: gross x (1 - 2 x management fee).

    A display heuristic for fee drag only, not a fee-adjusted cash-flow IRR.
    """
    if gross_irr is None:
        return None
    return gross_irr * (1 - (management_fee or 0.0) * 2)


@dataclass(frozen=True)
class FundPerformance:
    """Fund-level performance snapshot."""

    paid_in: float
    distributed: float
    nav: float
    dpi: Optional[float]
    rvpi: Optional[float]
    tvpi: Optional[float]
    gross_irr: Optional[float]
    net_irr: Optional[float]
    waterfall: Optional[WaterfallResult] = None


def calculate_fund_performance(
    flows: FundCashFlows,
    terms: FundTerms,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> FundPerformance:
    """
    Calculate fund performance from capital activity and fund terms.

    The waterfall runs over distributions plus NAV (as if liquidated at NAV)
    and is omitted when there is nothing to distribute or nothing paid in.

    Args:
        flows: Fund capital calls, distributions and current NAV
        terms: Fund economic terms
        as_of: Reporting date for NAV and holding period (defaults to today)
        settings: Settings override (defaults to cached settings)

    Returns:
        FundPerformance snapshot
    """
    as_of = as_of or date.today()
    if flows.valuation_date is None:
        flows = flows.model_copy(update={"valuation_date": as_of})

    paid_in = sum(abs(call.amount) for call in flows.capital_calls)
    distributed = sum(abs(dist.amount) for dist in flows.distributions)
    nav = flows.current_nav or 0.0

    gross_irr = calculate_fund_irr(flows)

    waterfall = None
    total_distributable = distributed + nav
    if total_distributable > 0 and paid_in > 0:
        params = build_waterfall_params(terms, total_distributable, paid_in, as_of, settings)
        waterfall = calculate_waterfall(params)

    return FundPerformance(
        paid_in=paid_in,
        distributed=distributed,
        nav=nav,
        dpi=calculate_dpi(distributed, paid_in),
        rvpi=calculate_rvpi(nav, paid_in),
        tvpi=calculate_tvpi(total_distributable, paid_in),
        gross_irr=gross_irr,
        net_irr=approximate_net_irr(gross_irr, terms.management_fee),
        waterfall=waterfall,
    )
