"""Refinance mortgage sizing and annual amortization."""

from __future__ import annotations

import logging
from typing import List, Optional

from premium_finance.config import HORIZON_YEARS
from premium_finance.schemas.mortgage import (
    MortgageScheduleRow,
    RefinanceInput,
    RefinanceQuote,
)

logger = logging.getLogger(__name__)


def level_monthly_payment(principal: float, annual_rate_percent: float, tenor_years: int) -> float:
    """Standard annuity payment: P*r*(1+r)^n / ((1+r)^n - 1) with a zero-rate fallback."""
    n = tenor_years * 12
    if n <= 0:
        return 0.0
    r = annual_rate_percent / 100 / 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def amortize(
    principal: float,
    annual_rate_percent: float,
    tenor_years: int,
    monthly_payment: Optional[float] = None,
) -> List[MortgageScheduleRow]:
    """
    Build the year 0..30 mortgage schedule.

    Each year inside the tenor charges one year of simple interest on the
    opening balance and pays twelve level monthly payments against it. The
    balance is floored at zero; any overpayment in the final year is not
    carried forward. After the tenor the balance and payment stay at zero.

    ``monthly_payment`` defaults to the annuity payment for the given terms.
    """
    if monthly_payment is None:
        monthly_payment = level_monthly_payment(principal, annual_rate_percent, tenor_years)
    annual_payment = monthly_payment * 12

    balance = float(principal)
    cumulative_interest = 0.0
    rows: List[MortgageScheduleRow] = [
        MortgageScheduleRow(
            year=0,
            balance=balance,
            annualPayment=0.0,
            cumulativeInterest=0.0,
            annualInterest=0.0,
        )
    ]

    for year in range(1, HORIZON_YEARS + 1):
        if year <= tenor_years:
            interest_part = balance * (annual_rate_percent / 100)
            cumulative_interest += interest_part
            balance -= annual_payment - interest_part
            if balance < 0:
                balance = 0.0
            rows.append(
                MortgageScheduleRow(
                    year=year,
                    balance=balance,
                    annualPayment=annual_payment,
                    cumulativeInterest=cumulative_interest,
                    annualInterest=interest_part,
                )
            )
        else:
            rows.append(
                MortgageScheduleRow(
                    year=year,
                    balance=0.0,
                    annualPayment=0.0,
                    cumulativeInterest=cumulative_interest,
                    annualInterest=0.0,
                )
            )

    return rows


def quote_refinance(terms: RefinanceInput) -> RefinanceQuote:
    """Size the cash released by refinancing and price it at the cheaper of H- or P-based terms."""
    unlocked = max(0.0, terms.propertyValue * (terms.mortgageLtv / 100) - terms.existingMortgage)
    rate = min(terms.hibor + terms.hiborSpread, terms.primeRate - terms.primeDiscount)
    payment = level_monthly_payment(unlocked, rate, terms.mortgageTenor)
    logger.debug("refinance quote: unlocked=%.2f rate=%.4f pmt=%.2f", unlocked, rate, payment)
    return RefinanceQuote(
        unlockedCash=unlocked,
        effectiveMortgageRate=rate,
        monthlyMortgagePmt=payment,
        mortgageTenor=terms.mortgageTenor,
    )
