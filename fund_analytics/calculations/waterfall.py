"""
Waterfall Distribution Calculations

Allocates distributable cash between LPs and the GP through the standard
private-equity tiers:
1. Return of Capital - 100% to LP until contributed capital is returned
2. Preferred Return - 100% to LP, hurdle compounded annually over the hold
3. GP Catch-Up - catch-up rate to GP until GP holds its carry share of profit
4. Carried Interest - remainder split carry to GP, the rest to LP

Tiers that do not apply (no hurdle, no catch-up) are omitted from the result
rather than reported with zero amounts.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field, replace

RETURN_OF_CAPITAL = "Return of Capital"
PREFERRED_RETURN = "Preferred Return"
GP_CATCH_UP = "GP Catch-Up"
CARRIED_INTEREST = "Carried Interest"


@dataclass(frozen=True)
class WaterfallParams:
    """Inputs for a single waterfall run."""

    total_distributable: float  # Cash available for distribution
    total_contributed: float  # Capital contributed by LPs
    carried_interest: float  # GP carry share (e.g., 0.20 for 20%)
    hurdle_rate: Optional[float] = None  # Annual pref (e.g., 0.08); None/0 = no pref tier
    catch_up_rate: Optional[float] = None  # GP share during catch-up; None = no catch-up tier
    holding_period_years: float = 0.0  # Years used to compound the hurdle

    def __post_init__(self):
        if not 0 <= self.carried_interest <= 1:
            raise ValueError("Carried interest must be in [0, 1]")
        if self.catch_up_rate is not None and not 0 <= self.catch_up_rate <= 1:
            raise ValueError("Catch-up rate must be in [0, 1]")
        if self.holding_period_years < 0:
            raise ValueError("Holding period cannot be negative")


@dataclass(frozen=True)
class WaterfallTier:
    """Amounts allocated by one tier."""

    name: str
    lp_amount: float
    gp_amount: float

    @property
    def total_amount(self) -> float:
        return self.lp_amount + self.gp_amount


@dataclass(frozen=True)
class WaterfallResult:
    """Ordered tiers plus LP/GP totals."""

    tiers: Tuple[WaterfallTier, ...] = field(default_factory=tuple)
    lp_total: float = 0.0
    gp_total: float = 0.0
    total_distributed: float = 0.0
    effective_carry_pct: Optional[float] = None  # GP share of total profit; None if no profit
    lp_multiple: float = 0.0

    @property
    def tier_names(self) -> List[str]:
        return [tier.name for tier in self.tiers]

    def get_tier(self, name: str) -> Optional[WaterfallTier]:
        """Look up a tier by name; None when the tier was not emitted."""
        for tier in self.tiers:
            if tier.name == name:
                return tier
        return None


def calculate_preferred_return(
    total_contributed: float,
    hurdle_rate: Optional[float],
    holding_period_years: float,
) -> float:
    """
    Full preferred-return entitlement.

    Capital x ((1 + hurdle)^years - 1), discrete annual compounding.
    Zero when there is no hurdle or no holding period.
    """
    if not hurdle_rate or hurdle_rate <= 0 or holding_period_years <= 0:
        return 0.0
    return total_contributed * ((1 + hurdle_rate) ** holding_period_years - 1)


def calculate_catch_up_target(carried_interest: float, preferred_paid: float) -> float:
    """
    GP catch-up entitlement.

    Sized so that after catch-up the GP holds carried_interest of the profit
    paid through tiers 2 and 3: carry / (1 - carry) x preferred paid.
    With 100% carry the target is unbounded and catch-up takes everything left.
    """
    if preferred_paid <= 0:
        return 0.0
    if carried_interest >= 1:
        return float("inf")
    return (carried_interest / (1 - carried_interest)) * preferred_paid


def _build_result(tiers: List[WaterfallTier], total_contributed: float) -> WaterfallResult:
    lp_total = sum(t.lp_amount for t in tiers)
    gp_total = sum(t.gp_amount for t in tiers)
    distributed = sum(t.total_amount for t in tiers)

    total_profit = distributed - total_contributed
    effective_carry_pct = gp_total / total_profit if total_profit > 0 else None

    return WaterfallResult(
        tiers=tuple(tiers),
        lp_total=lp_total,
        gp_total=gp_total,
        total_distributed=distributed,
        effective_carry_pct=effective_carry_pct,
        lp_multiple=lp_total / total_contributed if total_contributed > 0 else 0.0,
    )


def calculate_waterfall(params: WaterfallParams) -> WaterfallResult:
    """
    Calculate the fund-level waterfall.

    Tiers are processed in order against a running remaining balance and the
    calculation stops as soon as nothing is left.

    Args:
        params: Waterfall inputs

    Returns:
        WaterfallResult; empty with zero totals when there is nothing to
        distribute or no contributed capital
    """
    total_contributed = params.total_contributed

    if params.total_distributable <= 0 or total_contributed <= 0:
        return WaterfallResult()

    tiers: List[WaterfallTier] = []
    remaining = params.total_distributable

    # === TIER 1: Return of Capital ===
    capital_returned = min(remaining, total_contributed)
    tiers.append(WaterfallTier(RETURN_OF_CAPITAL, lp_amount=capital_returned, gp_amount=0.0))
    remaining -= capital_returned

    if remaining <= 0:
        return _build_result(tiers, total_contributed)

    # === TIER 2: Preferred Return ===
    preferred_return = calculate_preferred_return(
        total_contributed, params.hurdle_rate, params.holding_period_years
    )
    preferred_paid = min(remaining, preferred_return)
    if preferred_paid > 0:
        tiers.append(WaterfallTier(PREFERRED_RETURN, lp_amount=preferred_paid, gp_amount=0.0))
        remaining -= preferred_paid

    if remaining <= 0:
        return _build_result(tiers, total_contributed)

    # === TIER 3: GP Catch-Up ===
    catch_up_rate = params.catch_up_rate
    if catch_up_rate is not None and catch_up_rate > 0 and params.carried_interest > 0:
        gp_target = calculate_catch_up_target(params.carried_interest, preferred_paid)
        catch_up_total = min(remaining, gp_target / catch_up_rate)

        if catch_up_total > 0:
            gp_catch_up = catch_up_total * catch_up_rate
            tiers.append(
                WaterfallTier(
                    GP_CATCH_UP,
                    lp_amount=catch_up_total - gp_catch_up,
                    gp_amount=gp_catch_up,
                )
            )
            remaining -= catch_up_total

    if remaining <= 0:
        return _build_result(tiers, total_contributed)

    # === TIER 4: Carried Interest Split ===
    gp_carry = remaining * params.carried_interest
    tiers.append(
        WaterfallTier(CARRIED_INTEREST, lp_amount=remaining - gp_carry, gp_amount=gp_carry)
    )

    return _build_result(tiers, total_contributed)


def calculate_investor_waterfall(params: WaterfallParams, ownership_pct: float) -> WaterfallResult:
    """
    Project the fund waterfall onto a single investor.

    LP amounts are scaled by ownership; GP amounts are left at fund level
    because carry is earned on the whole fund.

    Args:
        params: Fund-level waterfall inputs
        ownership_pct: Investor's share of LP capital as decimal (e.g., 0.25)

    Returns:
        WaterfallResult with the investor's LP amounts and multiple
    """
    if not 0 < ownership_pct <= 1:
        raise ValueError("Ownership must be in (0, 1]")

    full_result = calculate_waterfall(params)

    tiers = tuple(
        replace(tier, lp_amount=tier.lp_amount * ownership_pct)
        for tier in full_result.tiers
    )
    lp_total = full_result.lp_total * ownership_pct
    gp_total = full_result.gp_total
    investor_contributed = params.total_contributed * ownership_pct

    return WaterfallResult(
        tiers=tiers,
        lp_total=lp_total,
        gp_total=gp_total,
        total_distributed=lp_total + gp_total,
        effective_carry_pct=full_result.effective_carry_pct,
        lp_multiple=lp_total / investor_contributed if investor_contributed > 0 else 0.0,
    )
