"""
Tests for fund performance metrics.
"""

import logging

import pytest
from datetime import date

from fund_analytics.calculations.metrics import (
    approximate_net_irr,
    calculate_called_percent,
    calculate_dpi,
    calculate_fund_performance,
    calculate_moic,
    calculate_rvpi,
    calculate_tvpi,
)
from fund_analytics.calculations.waterfall import CARRIED_INTEREST, RETURN_OF_CAPITAL
from fund_analytics.schemas import DatedAmount, FundCashFlows, FundTerms


class TestMultiples:
    """Paid-in multiples."""

    def test_dpi(self):
        assert calculate_dpi(60_000, 100_000) == pytest.approx(0.6)

    def test_rvpi(self):
        assert calculate_rvpi(90_000, 100_000) == pytest.approx(0.9)

    def test_tvpi(self):
        assert calculate_tvpi(150_000, 100_000) == pytest.approx(1.5)

    def test_moic(self):
        assert calculate_moic(30_000_000, 10_000_000) == pytest.approx(3.0)

    @pytest.mark.parametrize("func", [calculate_dpi, calculate_rvpi, calculate_tvpi, calculate_moic])
    def test_undefined_without_capital(self, func, caplog):
        caplog.set_level(logging.WARNING, logger="fund_analytics.calculations.metrics")
        assert func(100, 0) is None
        assert "must be positive" in caplog.text

    def test_called_percent(self):
        assert calculate_called_percent(45, 100) == pytest.approx(0.45)
        assert calculate_called_percent(45, 0) is None


class TestNetIRR:
    """Fee-drag heuristic."""

    def test_fee_drag(self):
        assert approximate_net_irr(0.20, 0.02) == pytest.approx(0.192)

    def test_no_fee(self):
        assert approximate_net_irr(0.20, None) == pytest.approx(0.20)

    def test_no_gross_irr(self):
        assert approximate_net_irr(None, 0.02) is None


class TestFundPerformance:
    """End-to-end fund snapshot."""

    def make_flows(self, **overrides):
        values = dict(
            capital_calls=[
                DatedAmount(date=date(2021, 1, 1), amount=6_000_000),
                DatedAmount(date=date(2021, 7, 1), amount=4_000_000),
            ],
            distributions=[DatedAmount(date=date(2023, 1, 1), amount=5_000_000)],
            current_nav=10_000_000,
        )
        values.update(overrides)
        return FundCashFlows(**values)

    def test_snapshot(self, settings):
        terms = FundTerms(vintage=2021, carried_interest=0.20, management_fee=0.02)
        performance = calculate_fund_performance(
            self.make_flows(), terms, as_of=date(2024, 1, 1), settings=settings
        )

        assert performance.paid_in == pytest.approx(10_000_000)
        assert performance.distributed == pytest.approx(5_000_000)
        assert performance.nav == pytest.approx(10_000_000)
        assert performance.dpi == pytest.approx(0.5)
        assert performance.rvpi == pytest.approx(1.0)
        assert performance.tvpi == pytest.approx(1.5)
        assert performance.gross_irr is not None
        assert performance.gross_irr > 0
        assert performance.net_irr == pytest.approx(performance.gross_irr * 0.96)

    def test_waterfall_over_distributions_and_nav(self, settings):
        terms = FundTerms(vintage=2021, carried_interest=0.20)
        performance = calculate_fund_performance(
            self.make_flows(), terms, as_of=date(2024, 1, 1), settings=settings
        )

        waterfall = performance.waterfall
        assert waterfall is not None
        assert waterfall.tier_names == [RETURN_OF_CAPITAL, CARRIED_INTEREST]
        assert waterfall.total_distributed == pytest.approx(15_000_000)
        assert waterfall.gp_total == pytest.approx(1_000_000)

    def test_nav_uses_reporting_date(self, settings):
        """Without a valuation date the NAV is valued at the reporting date."""
        terms = FundTerms(vintage=2021)
        flows = self.make_flows(distributions=[], current_nav=20_000_000)

        performance = calculate_fund_performance(
            flows, terms, as_of=date(2022, 1, 1), settings=settings
        )
        # Roughly 2x in about a year
        assert performance.gross_irr is not None
        assert performance.gross_irr > 0.8

    def test_no_capital_paid_in(self, settings):
        performance = calculate_fund_performance(
            FundCashFlows(current_nav=1_000_000), FundTerms(vintage=2021), settings=settings
        )

        assert performance.paid_in == 0
        assert performance.dpi is None
        assert performance.tvpi is None
        assert performance.gross_irr is None
        assert performance.net_irr is None
        assert performance.waterfall is None

    def test_nothing_to_distribute(self, settings):
        flows = self.make_flows(distributions=[], current_nav=None)
        performance = calculate_fund_performance(flows, FundTerms(vintage=2021), settings=settings)

        assert performance.waterfall is None
        assert performance.gross_irr is None
        assert performance.dpi == 0
