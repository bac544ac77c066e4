"""Display helpers attached to ledger rows."""

import math
from decimal import ROUND_HALF_UP, Decimal


def format_currency(value: float) -> str:
    """Format as whole US dollars, e.g. ``-$1,234,568``."""
    if math.isnan(value):
        return "$NaN"
    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}$∞"
    whole = Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{sign}${whole:,}"
