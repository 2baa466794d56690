"""
Core constants and limits.

Defines engine-wide defaults and resource limits for portfolio
valuation and rebalancing.
"""

# Portfolio Limits
MAX_HOLDINGS_PER_PORTFOLIO = 100  # Hard cap regardless of user constraints
FULL_ALLOCATION_PERCENT = 100.0  # Sum of weights for a fully allocated portfolio

# Rebalancing
DEFAULT_DRIFT_THRESHOLD_PERCENT = 2.0  # Drift must exceed this to recommend a trade

# Precision
WEIGHT_EPSILON = 1e-6  # Tolerance for weight and value conservation checks

# Cash Holding
CASH_TICKER = "CASH"
CASH_NAME = "Cash"
CASH_SECTOR = "Cash"
CASH_EXCHANGE = "N/A"
CASH_UNIT_PRICE = 1.0  # Cash holdings are quoted as units of currency

# Reporting
DEFAULT_CURRENCY = "INR"
UNKNOWN_SECTOR = "Unknown"
