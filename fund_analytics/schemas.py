"""
Inbound records supplied by the data-access layer.

Capital-call, distribution and fund-term records are validated here before
any calculation sees them.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date


class DatedAmount(BaseModel):
    """A capital call or distribution as stored (amount sign not trusted)."""

    date: date
    amount: float


class FundCashFlows(BaseModel):
    """Fund-level capital activity plus an optional unrealized NAV."""

    capital_calls: List[DatedAmount] = Field(default_factory=list)
    distributions: List[DatedAmount] = Field(default_factory=list)
    current_nav: Optional[float] = None
    valuation_date: Optional[date] = None


class LPCashFlows(FundCashFlows):
    """Same shape as FundCashFlows, scoped to a single investor."""


class FundTerms(BaseModel):
    """Economic terms from the fund configuration."""

    vintage: int
    hurdle_rate: Optional[float] = Field(default=None, ge=0)
    carried_interest: Optional[float] = Field(default=None, ge=0, le=1)
    catch_up_rate: Optional[float] = Field(default=None, ge=0, le=1)
    management_fee: Optional[float] = Field(default=None, ge=0)
