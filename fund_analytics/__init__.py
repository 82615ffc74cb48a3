"""
Fund Analytics

XIRR and private-equity distribution waterfall calculations.
"""

__version__ = "0.1.0"
