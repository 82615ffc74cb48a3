"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fund_analytics.config import Settings, get_settings
from fund_analytics.calculations.waterfall import WaterfallParams


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings, independent of any local env file."""
    return Settings(_env_file=None)


@pytest.fixture
def base_date():
    return date(2023, 1, 1)


@pytest.fixture
def standard_params():
    """$10M fund returning $15M: 8% hurdle, 20% carry, full catch-up, 3 years."""
    return WaterfallParams(
        total_distributable=15_000_000,
        total_contributed=10_000_000,
        hurdle_rate=0.08,
        carried_interest=0.20,
        catch_up_rate=1.0,
        holding_period_years=3,
    )
