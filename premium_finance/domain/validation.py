"""Business-rule checks run on proposals before they reach the engine.

The calculation layer accepts any numbers and degrades gracefully; these
checks are what the HTTP layer uses to reject input a user should fix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from premium_finance.config import HORIZON_YEARS
from premium_finance.schemas.projection import SimulationInput
from premium_finance.schemas.stress import StressScenario


class InputValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


_MONEY_FIELDS = ("cashReserve", "bondAlloc", "unlockedCash")
_PERCENT_FIELDS = ("leverageLTV", "handlingFee")


def check_simulation_input(inp: SimulationInput) -> ValidationResult:
    result = ValidationResult()

    # roi divides by budget
    if inp.budget <= 0:
        result.errors.append("budget must be positive")

    for name in _MONEY_FIELDS:
        if getattr(inp, name) < 0:
            result.errors.append(f"{name} must not be negative")

    for name in _PERCENT_FIELDS:
        value = getattr(inp, name)
        if not 0 <= value <= 100:
            result.errors.append(f"{name} must be between 0 and 100")

    if inp.capRate < 0:
        result.errors.append("capRate must not be negative")

    if inp.fundSource == "mortgage":
        if inp.mortgageTenor < 1:
            result.errors.append("mortgageTenor must be at least 1 year")
        if inp.monthlyMortgagePmt is not None and inp.monthlyMortgagePmt < 0:
            result.errors.append("monthlyMortgagePmt must not be negative")

    if inp.cashReserve + inp.bondAlloc > inp.budget:
        shortfall = inp.cashReserve + inp.bondAlloc - inp.budget
        result.warnings.append(
            "cash reserve and bond allocation exceed budget; no policy is funded "
            f"and the {shortfall:,.0f} shortfall is booked as bank loan"
        )

    return result


def check_stress_scenario(scenario: StressScenario) -> ValidationResult:
    result = ValidationResult()

    if not 1 <= scenario.sensitivityYear <= HORIZON_YEARS:
        result.errors.append(f"sensitivityYear must be between 1 and {HORIZON_YEARS}")
    if not 0 <= scenario.bondPriceDrop <= 100:
        result.errors.append("bondPriceDrop must be between 0 and 100")
    if not scenario.hiborAxis or not scenario.yieldAxis:
        result.errors.append("sensitivity axes must not be empty")

    return result


def validate_simulation_input(
    inp: SimulationInput,
    scenario: Optional[StressScenario] = None,
) -> List[str]:
    """Raise ``InputValidationError`` on rule violations; return any warnings."""
    checked = check_simulation_input(inp)
    errors = list(checked.errors)
    warnings = list(checked.warnings)

    if scenario is not None:
        stress_checked = check_stress_scenario(scenario)
        errors.extend(stress_checked.errors)
        warnings.extend(stress_checked.warnings)

    if errors:
        raise InputValidationError(errors)
    return warnings
