# fintrack/__init__.py
"""
FinTrack Engine: multi-currency portfolio valuation, running-balance
transaction ledgers and allocation breakdowns.
"""

__version__ = "0.1.0"
