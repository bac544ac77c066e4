"""Policy cash-value factor table.

``TOTAL_FACTORS[y]`` is the multiple of total premium the policy would pay
on surrender at the end of policy year ``y``. The guaranteed curve is
derived from it by a haircut that widens by half a point per year.
"""

from __future__ import annotations

from typing import Dict, Mapping

from premium_finance.config import HORIZON_YEARS

TOTAL_FACTORS: Mapping[int, float] = {
    0: 0.8000, 1: 0.8000, 2: 0.8211, 3: 0.8442, 4: 0.8734, 5: 1.0066,
    6: 1.0838, 7: 1.1862, 8: 1.2407, 9: 1.2992, 10: 1.3879,
    11: 1.4427, 12: 1.5056, 13: 1.5886, 14: 1.6558, 15: 1.7472,
    16: 1.8367, 17: 1.9223, 18: 2.0262, 19: 2.1262, 20: 2.2469,
    21: 2.3459, 22: 2.4530, 23: 2.5764, 24: 2.7080, 25: 2.8379,
    26: 2.9755, 27: 3.1255, 28: 3.2799, 29: 3.4488, 30: 3.6222,
}


def derive_guaranteed(factors: Mapping[int, float]) -> Dict[int, float]:
    """guaranteed[y] = total[y] * (0.85 - 0.005 * y)"""
    return {year: factor * (0.85 - year * 0.005) for year, factor in factors.items()}


GUARANTEED_FACTORS: Mapping[int, float] = derive_guaranteed(TOTAL_FACTORS)


def _clamp_year(year: int) -> int:
    return min(max(int(year), 0), HORIZON_YEARS)


def total_factor(year: int) -> float:
    return TOTAL_FACTORS[_clamp_year(year)]


def guaranteed_factor(year: int) -> float:
    return GUARANTEED_FACTORS[_clamp_year(year)]


def factor_curve(guaranteed: bool = False):
    """Return the lookup used by a projection: guaranteed or total values."""
    return guaranteed_factor if guaranteed else total_factor
