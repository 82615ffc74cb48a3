"""
Scope Assemblers

Turn fund, LP and company records into signed cash-flow series and hand
them to the XIRR solver. Also builds waterfall inputs from fund terms.
"""

from typing import List, Optional
from datetime import date

from fund_analytics.calculations.cashflows import CashFlow
from fund_analytics.calculations.irr import calculate_xirr
from fund_analytics.calculations.waterfall import WaterfallParams
from fund_analytics.config import Settings, get_settings
from fund_analytics.schemas import FundCashFlows, FundTerms, LPCashFlows


def assemble_fund_cash_flows(flows: FundCashFlows) -> List[CashFlow]:
    """
    Build the investor-perspective series for a fund.

    Capital calls become outflows, distributions become inflows, and a
    positive current NAV is added as a terminal as-if-liquidated inflow on
    the valuation date (today when not supplied).
    """
    cash_flows = [CashFlow(date=call.date, amount=-abs(call.amount)) for call in flows.capital_calls]
    cash_flows.extend(
        CashFlow(date=dist.date, amount=abs(dist.amount)) for dist in flows.distributions
    )

    if flows.current_nav and flows.current_nav > 0:
        valuation_date = flows.valuation_date or date.today()
        cash_flows.append(CashFlow(date=valuation_date, amount=flows.current_nav))

    return cash_flows


def calculate_fund_irr(flows: FundCashFlows) -> Optional[float]:
    """
    Calculate fund-level IRR from capital calls, distributions and NAV.

    Returns:
        Annualized IRR as decimal, or None without any capital calls or
        when the solver finds no rate
    """
    if not flows.capital_calls:
        return None
    return calculate_xirr(assemble_fund_cash_flows(flows))


def calculate_lp_irr(flows: LPCashFlows) -> Optional[float]:
    """Calculate IRR for one LP's own calls and distributions."""
    return calculate_fund_irr(flows)


def calculate_company_irr(
    investment_date: date,
    equity_invested: float,
    current_value: float,
    valuation_date: Optional[date] = None,
) -> Optional[float]:
    """
    Calculate IRR for a single portfolio company.

    Args:
        investment_date: When the equity was deployed
        equity_invested: Total equity invested (positive number)
        current_value: Current total value or exit proceeds
        valuation_date: Date of current value (defaults to today)

    Returns:
        Annualized IRR as decimal, or None for a non-positive investment or value
    """
    if equity_invested <= 0 or current_value <= 0:
        return None

    cash_flows = [
        CashFlow(date=investment_date, amount=-equity_invested),
        CashFlow(date=valuation_date or date.today(), amount=current_value),
    ]
    return calculate_xirr(cash_flows)


def calculate_holding_period_years(
    vintage: int,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Whole years since the vintage year, never below the configured minimum."""
    settings = settings or get_settings()
    as_of = as_of or date.today()
    return max(settings.min_holding_period_years, as_of.year - vintage)


def build_waterfall_params(
    terms: FundTerms,
    total_distributable: float,
    total_contributed: float,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> WaterfallParams:
    """
    Build waterfall inputs from fund terms and aggregated capital totals.

    Blank or zero hurdle and catch-up rates mean the tier does not apply;
    a blank carry falls back to the configured default.
    """
    settings = settings or get_settings()

    return WaterfallParams(
        total_distributable=total_distributable,
        total_contributed=total_contributed,
        hurdle_rate=terms.hurdle_rate or None,
        carried_interest=terms.carried_interest or settings.default_carried_interest,
        catch_up_rate=terms.catch_up_rate or None,
        holding_period_years=calculate_holding_period_years(terms.vintage, as_of, settings),
    )
