"""Stressed re-run of a baseline projection.

The bond sleeve takes a price haircut, the bank loan is re-priced at an
alternate reference rate, and optionally the policy is valued on its
guaranteed curve. The refinance mortgage is not re-stressed: its balance
is read from the baseline ledger year by year.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from premium_finance.config import BREAK_EVEN_SENTINEL, HORIZON_YEARS
from premium_finance.core.factors import factor_curve
from premium_finance.core.projection import effective_rate
from premium_finance.schemas.projection import ProjectionRow, SimulationInput, SimulationOutput
from premium_finance.schemas.stress import (
    SensitivityGrid,
    StressScenario,
    StressedRow,
    StressStats,
    StressTestInput,
    StressTestOutput,
)

logger = logging.getLogger(__name__)


def _baseline_row(baseline: List[ProjectionRow], year: int):
    return baseline[year] if 0 <= year < len(baseline) else None


def _mortgage_balance(inp: StressTestInput, year: int) -> float:
    if inp.fundSource != "mortgage":
        return 0.0
    if year == 0:
        return inp.unlockedCash
    row = _baseline_row(inp.projectionData, year)
    return row.mortgageBalance if row is not None else 0.0


def _ltv(loan: float, collateral: float) -> float:
    return loan / collateral * 100 if collateral > 0 else 0.0


def break_even_hibor(
    inp: StressTestInput,
    stressed_bond: float,
    factor: Callable[[int], float],
) -> float:
    """
    Reference rate at which year-1 income (stressed bond coupon plus policy
    growth, less any mortgage payment) exactly pays year-1 loan interest.
    """
    if inp.bankLoan <= 0:
        return BREAK_EVEN_SENTINEL

    policy_growth_y1 = inp.totalPremium * factor(1) - inp.totalPremium * factor(0)
    bond_income_y1 = stressed_bond * (inp.bondYield / 100)
    mortgage_payment_y1 = 0.0
    if inp.fundSource == "mortgage":
        row = _baseline_row(inp.projectionData, 1)
        mortgage_payment_y1 = row.annualMortgagePayment if row is not None else 0.0

    income = bond_income_y1 + policy_growth_y1 - mortgage_payment_y1
    return income / inp.bankLoan * 100 - inp.spread


def sensitivity_grid(
    inp: StressTestInput,
    stressed_bond: float,
    factor: Callable[[int], float],
) -> SensitivityGrid:
    """Year-``sensitivityYear`` profit over every (yield, rate) pair of the axes."""
    year = inp.sensitivityYear
    surrender = inp.totalPremium * factor(year)
    mortgage_balance = _mortgage_balance(inp, year)
    # profit is measured against budget for cash funding only
    offset = 0.0 if inp.fundSource == "mortgage" else inp.budget

    data: List[List[float]] = []
    for yield_val in inp.yieldAxis:
        bond_value = stressed_bond + stressed_bond * (yield_val / 100) * year
        row: List[float] = []
        for hibor_val in inp.hiborAxis:
            rate = effective_rate(hibor_val, inp.spread, inp.capRate)
            interest = inp.bankLoan * (rate / 100) * year
            equity = surrender + bond_value + inp.cashReserve - inp.bankLoan - interest - mortgage_balance
            row.append(equity - offset)
        data.append(row)

    return SensitivityGrid(xLabels=list(inp.hiborAxis), yLabels=list(inp.yieldAxis), data=data)


def calculate_stress_test(inp: StressTestInput) -> StressTestOutput:
    factor = factor_curve(guaranteed=inp.showGuaranteed)

    stressed_bond = inp.netBondPrincipal * (1 - inp.bondPriceDrop / 100)
    stressed_rate = effective_rate(inp.simulatedHibor, inp.spread, inp.capRate)
    logger.debug(
        "stress: bond %.2f -> %.2f, rate %.4f, guaranteed=%s",
        inp.netBondPrincipal, stressed_bond, stressed_rate, inp.showGuaranteed,
    )

    rows: List[StressedRow] = []
    lowest_equity = None

    for year in range(0, HORIZON_YEARS + 1):
        surrender = inp.totalPremium * factor(year)
        bond_value = stressed_bond + stressed_bond * (inp.bondYield / 100) * year
        interest = inp.bankLoan * (stressed_rate / 100) * year
        net_equity = (
            surrender + bond_value + inp.cashReserve
            - inp.bankLoan - interest - _mortgage_balance(inp, year)
        )

        if lowest_equity is None or net_equity < lowest_equity:
            lowest_equity = net_equity

        baseline = _baseline_row(inp.projectionData, year)
        rows.append(
            StressedRow(
                year=year,
                netEquity=net_equity,
                baselineNetEquity=baseline.netEquity if baseline is not None else 0.0,
                ltv=_ltv(inp.bankLoan, surrender + bond_value),
                surrenderValue=surrender if year > 0 else None,
                bondFundNetValue=bond_value if year > 0 else None,
            )
        )

    return StressTestOutput(
        stressedProjection=rows,
        stressStats=StressStats(
            breakEvenHibor=break_even_hibor(inp, stressed_bond, factor),
            lowestEquity=lowest_equity,
        ),
        sensitivityData=sensitivity_grid(inp, stressed_bond, factor),
    )


def stress_input_from_projection(
    simulation: SimulationInput,
    projection: SimulationOutput,
    scenario: StressScenario,
) -> StressTestInput:
    """Assemble a ``StressTestInput`` from a proposal, its baseline output and a scenario."""
    return StressTestInput(
        **scenario.model_dump(),
        projectionData=projection.projectionData,
        totalPremium=projection.totalPremium,
        netBondPrincipal=projection.netBondPrincipal,
        bondYield=simulation.bondYield,
        bankLoan=projection.bankLoan,
        spread=simulation.spread,
        capRate=simulation.capRate,
        budget=simulation.budget,
        cashReserve=simulation.cashReserve,
        fundSource=simulation.fundSource,
        unlockedCash=simulation.unlockedCash,
    )
