"""
Financial Calculation Engine

Core calculation modules for private-equity fund analytics.
All calculations are pure functions over in-memory inputs.
"""

from fund_analytics.calculations import cashflows, irr, assemblers, waterfall, metrics

__all__ = ["cashflows", "irr", "assemblers", "waterfall", "metrics"]
