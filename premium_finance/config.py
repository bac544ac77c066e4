"""Centralized configuration for the premium-financing engine.

Business constants used by the calculation layer live at module level;
Flask settings live on ``Config`` and can be overridden from the
environment.
"""

import os

# =============================================================================
# PROJECTION
# =============================================================================

# Ledger horizon in policy years (rows 0..HORIZON_YEARS)
HORIZON_YEARS = 30

# Break-even borrowing rate reported when there is no bank loan (percent)
BREAK_EVEN_SENTINEL = 100.0

# =============================================================================
# SENSITIVITY GRID
# =============================================================================

# Borrowing-rate axis swept across columns (percent)
DEFAULT_HIBOR_AXIS = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

# Bond-yield axis swept across rows (percent)
DEFAULT_YIELD_AXIS = [3.0, 4.0, 5.0, 6.0, 7.0]

DEFAULT_SENSITIVITY_YEAR = 15

# =============================================================================
# MORTGAGE REFINANCE DEFAULTS
# =============================================================================

DEFAULT_PROPERTY_VALUE = 15_000_000
DEFAULT_EXISTING_MORTGAGE = 6_000_000
DEFAULT_MORTGAGE_LTV = 60.0
DEFAULT_PRIME_RATE = 5.875
DEFAULT_HIBOR_SPREAD = 1.3      # H + 1.3
DEFAULT_PRIME_DISCOUNT = 1.75   # P - 1.75
DEFAULT_MORTGAGE_TENOR = 30

# =============================================================================
# CSV EXPORT
# =============================================================================

EXPORT_FILENAME = "financial_projection_30y.csv"


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Config:
    """Flask settings. Environment variables take precedence over defaults."""

    CORS_ORIGINS = _split_origins(
        os.environ.get(
            "PF_CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,"
            "http://127.0.0.1:3000,http://127.0.0.1:5173",
        )
    )
    LOG_LEVEL = os.environ.get("PF_LOG_LEVEL", "INFO")
    JSON_SORT_KEYS = False
