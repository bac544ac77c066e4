"""Baseline projection of a premium-financing proposal."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from premium_finance.config import HORIZON_YEARS
from premium_finance.core.factors import total_factor
from premium_finance.core.formatting import format_currency
from premium_finance.core.mortgage import amortize, level_monthly_payment
from premium_finance.schemas.mortgage import MortgageScheduleRow
from premium_finance.schemas.projection import (
    ProjectionRow,
    SimulationInput,
    SimulationOutput,
)

logger = logging.getLogger(__name__)


def size_premium(policy_equity: float, leverage_ltv: float) -> float:
    """
    Premium whose day-1 cash value, borrowed against at ``leverage_ltv``,
    leaves exactly ``policy_equity`` to fund. Zero when the leverage makes
    the sizing degenerate or there is no equity to invest.
    """
    denominator = 1 - (leverage_ltv / 100.0) * total_factor(0)
    if denominator <= 0 or policy_equity <= 0:
        return 0.0
    return policy_equity / denominator


def effective_rate(base_rate: float, spread: float, cap_rate: float) -> float:
    """Lending rate: base plus spread, never above the contractual cap."""
    return min(base_rate + spread, cap_rate)


def _ieee_div(numerator: float, denominator: float) -> float:
    # float division without ZeroDivisionError: x/0 -> +/-inf, 0/0 -> nan
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def calculate_projection(inp: SimulationInput) -> SimulationOutput:
    """
    Build the year 0..30 ledger for one proposal.

    Conventions:
      - The bank loan is interest-only: principal stays at day-1 size.
      - Bond yield and loan interest accrue linearly (no compounding).
      - The bond handling fee is taken once, up front, from the bond sleeve.
      - With mortgage funding, the mortgage balance is a liability and the
        payments made so far are deducted from cumulative net gain.
    """
    mortgage_funded = inp.fundSource == "mortgage"

    equity = inp.budget - inp.cashReserve - inp.bondAlloc
    premium = size_premium(equity, inp.leverageLTV)
    if premium == 0.0:
        logger.debug("degenerate premium sizing: equity=%.2f ltv=%.2f", equity, inp.leverageLTV)
    loan = max(0.0, premium - equity)

    base_rate = inp.hibor if inp.interestBasis == "hibor" else inp.cofRate
    eff_rate = effective_rate(base_rate, inp.spread, inp.capRate)

    one_off_fee = inp.bondAlloc * (inp.handlingFee / 100)
    net_bond = inp.bondAlloc - one_off_fee

    schedule: Optional[List[MortgageScheduleRow]] = None
    monthly_mortgage = 0.0
    if mortgage_funded:
        monthly_mortgage = (
            inp.monthlyMortgagePmt
            if inp.monthlyMortgagePmt is not None
            else level_monthly_payment(inp.unlockedCash, inp.effectiveMortgageRate, inp.mortgageTenor)
        )
        schedule = amortize(
            inp.unlockedCash,
            inp.effectiveMortgageRate,
            inp.mortgageTenor,
            monthly_payment=monthly_mortgage,
        )

    logger.debug(
        "day-1 structure: equity=%.2f premium=%.2f loan=%.2f rate=%.4f net_bond=%.2f",
        equity, premium, loan, eff_rate, net_bond,
    )

    # Year-1 run-rate cashflow, monthly
    monthly_bond_income = net_bond * (inp.bondYield / 100) / 12
    monthly_loan_interest = loan * (eff_rate / 100) / 12
    monthly_net = monthly_bond_income - monthly_loan_interest - monthly_mortgage

    rows: List[ProjectionRow] = []
    cum_mortgage_cost = 0.0
    surrender0 = premium * total_factor(0)
    equity0 = 0.0

    for year in range(0, HORIZON_YEARS + 1):
        surrender = premium * total_factor(year)
        cum_bond_interest = net_bond * (inp.bondYield / 100) * year
        bond_value = net_bond + cum_bond_interest
        cum_loan_interest = loan * (eff_rate / 100) * year
        assets = surrender + bond_value + inp.cashReserve

        mtg_balance = mtg_payment = mtg_interest = 0.0
        if schedule is not None:
            mtg_row = schedule[year]
            mtg_balance = mtg_row.balance
            mtg_payment = mtg_row.annualPayment
            mtg_interest = mtg_row.cumulativeInterest
            cum_mortgage_cost += mtg_payment

        net_equity = assets - loan - cum_loan_interest - mtg_balance

        if year == 0:
            equity0 = net_equity
            annual_bond = annual_loan = annual_growth = annual_gain = roc = 0.0
            cum_gain = 0.0
        else:
            prev = rows[-1]
            annual_bond = cum_bond_interest - prev.cumulativeBondInterest
            annual_loan = cum_loan_interest - prev.cumulativeInterest
            annual_growth = surrender - prev.surrenderValue
            annual_gain = annual_bond + annual_growth - annual_loan - mtg_payment

            denom = inp.budget if mortgage_funded else prev.netEquity
            roc = annual_gain / denom * 100 if denom != 0 else 0.0

            cum_gain = net_equity - equity0 - (cum_mortgage_cost if mortgage_funded else 0.0)

        rows.append(
            ProjectionRow(
                year=year,
                surrenderValue=surrender,
                bondPrincipal=net_bond,
                cumulativeBondInterest=cum_bond_interest,
                bondFundNetValue=bond_value,
                cashValue=inp.cashReserve,
                totalAssets=assets,
                loan=loan,
                cumulativeInterest=cum_loan_interest,
                netEquity=net_equity,
                formattedNetEquity=format_currency(net_equity),
                formattedLoan=format_currency(loan),
                annualBondIncome=annual_bond,
                annualLoanInterest=annual_loan,
                annualPolicyGrowth=annual_growth,
                annualNetGain=annual_gain,
                annualRoC=roc,
                cumulativePolicyGrowth=surrender - surrender0,
                cumulativeNetGain=cum_gain,
                mortgageBalance=mtg_balance,
                cumulativeMortgageCost=cum_mortgage_cost,
                cumulativeMortgageInterest=mtg_interest,
                annualMortgagePayment=mtg_payment,
            )
        )

    final = rows[HORIZON_YEARS]
    # no zero-budget guard here: budget == 0 gives inf or nan
    roi = _ieee_div(final.cumulativeNetGain, inp.budget) * 100

    return SimulationOutput(
        pfEquity=equity,
        totalPremium=premium,
        bankLoan=loan,
        effectiveRate=eff_rate,
        projectionData=rows,
        finalNetEquity=final.netEquity,
        roi=roi,
        monthlyBondIncome=monthly_bond_income,
        monthlyLoanInterest=monthly_loan_interest,
        monthlyNetCashflow=monthly_net,
        oneOffBondFee=one_off_fee,
        netBondPrincipal=net_bond,
        monthlyMortgagePmt=monthly_mortgage,
    )
