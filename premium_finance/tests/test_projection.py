from __future__ import annotations

import math
from math import isclose

import pytest

from premium_finance.core.factors import total_factor
from premium_finance.core.projection import calculate_projection, effective_rate, size_premium
from premium_finance.schemas.projection import SimulationInput


def test_reference_proposal_day_one_structure(proposal):
    result = calculate_projection(proposal)

    assert result.pfEquity == pytest.approx(500_000)
    assert isclose(result.totalPremium, 1_785_714.29, abs_tol=1)
    assert isclose(result.bankLoan, 1_285_714.29, abs_tol=1)
    assert result.effectiveRate == pytest.approx(5.45)
    assert result.oneOffBondFee == pytest.approx(3_000)
    assert result.netBondPrincipal == pytest.approx(297_000)
    assert result.projectionData[30].surrenderValue == pytest.approx(result.totalPremium * 3.6222)


def test_reference_proposal_ledger(proposal):
    rows = calculate_projection(proposal).projectionData

    assert [row.year for row in rows] == list(range(31))
    assert rows[0].netEquity == pytest.approx(639_857.14, abs=0.01)
    assert rows[0].formattedNetEquity == "$639,857"
    assert rows[1].annualBondIncome == pytest.approx(13_365.0)
    assert rows[1].annualLoanInterest == pytest.approx(70_071.43, abs=0.01)
    assert rows[1].annualPolicyGrowth == pytest.approx(0.0)
    assert rows[1].annualNetGain == pytest.approx(13_365.0 - 70_071.43, abs=0.01)
    assert rows[1].annualRoC == pytest.approx(rows[1].annualNetGain / rows[0].netEquity * 100)


def test_monthly_run_rate(proposal):
    result = calculate_projection(proposal)

    assert result.monthlyBondIncome == pytest.approx(13_365.0 / 12)
    assert result.monthlyLoanInterest == pytest.approx(result.bankLoan * 0.0545 / 12)
    assert result.monthlyNetCashflow == pytest.approx(result.monthlyBondIncome - result.monthlyLoanInterest)
    assert result.monthlyMortgagePmt == 0.0


def test_annual_fields_chain_from_cumulative(proposal):
    rows = calculate_projection(proposal).projectionData

    for prev, row in zip(rows, rows[1:]):
        assert isclose(row.annualBondIncome, row.cumulativeBondInterest - prev.cumulativeBondInterest, abs_tol=1e-6)
        assert isclose(row.annualLoanInterest, row.cumulativeInterest - prev.cumulativeInterest, abs_tol=1e-6)
        assert isclose(row.annualPolicyGrowth, row.surrenderValue - prev.surrenderValue, abs_tol=1e-6)


def test_accrual_is_linear_not_compounding(proposal):
    rows = calculate_projection(proposal).projectionData

    assert rows[10].cumulativeBondInterest == pytest.approx(10 * rows[1].cumulativeBondInterest)
    assert rows[30].cumulativeInterest == pytest.approx(30 * rows[1].cumulativeInterest)


def test_loan_is_interest_only(proposal):
    result = calculate_projection(proposal)
    for row in result.projectionData:
        assert row.loan == result.bankLoan


def test_cash_funded_net_equity_and_gain(proposal):
    rows = calculate_projection(proposal).projectionData

    for row in rows:
        expected = row.totalAssets - row.loan - row.cumulativeInterest
        assert row.netEquity == pytest.approx(expected)
        assert row.cumulativeNetGain == pytest.approx(row.netEquity - rows[0].netEquity)
        assert row.mortgageBalance == 0.0


def test_final_figures_and_roi(proposal):
    result = calculate_projection(proposal)

    assert result.finalNetEquity == result.projectionData[30].netEquity
    assert result.roi == pytest.approx(result.projectionData[30].cumulativeNetGain / 1_000_000 * 100)


def test_degenerate_input_produces_empty_proposal(proposal_payload):
    """
    Sanity check: with no money at all, there is no premium, no loan, and no equity in any year.
    """
    inp = SimulationInput.model_validate(
        proposal_payload(budget=0, cashReserve=0, bondAlloc=0)
    )
    result = calculate_projection(inp)

    assert result.totalPremium == 0
    assert result.bankLoan == 0
    for row in result.projectionData:
        assert isclose(row.netEquity, 0.0, abs_tol=0.0)
        assert row.annualRoC == 0.0
    # zero budget leaves roi undefined rather than raising
    assert math.isnan(result.roi)


def test_over_allocation_books_shortfall_as_loan(proposal_payload):
    """
    Cash reserve plus bonds above budget funds no policy, but the shortfall
    (premium - equity with zero premium) is still carried as bank debt.
    """
    inp = SimulationInput.model_validate(proposal_payload(cashReserve=600_000, bondAlloc=600_000))
    result = calculate_projection(inp)
    rows = result.projectionData

    assert result.pfEquity == pytest.approx(-200_000)
    assert result.totalPremium == 0
    assert result.bankLoan == pytest.approx(200_000)
    assert rows[0].surrenderValue == 0
    assert rows[0].netEquity == pytest.approx(594_000 + 600_000 - 200_000)
    for row in rows[1:]:
        assert row.loan == pytest.approx(200_000)
        assert row.annualLoanInterest == pytest.approx(200_000 * 0.0545)
    assert rows[30].cumulativeInterest == pytest.approx(200_000 * 0.0545 * 30)
    assert result.monthlyLoanInterest == pytest.approx(200_000 * 0.0545 / 12)


def test_excessive_leverage_sizes_no_policy():
    # 1 - 1.25 * 0.8 == 0
    assert size_premium(500_000, 125) == 0.0
    assert size_premium(500_000, 150) == 0.0
    assert size_premium(500_000, 0) == pytest.approx(500_000)


def test_effective_rate_is_capped(proposal_payload):
    assert effective_rate(8.0, 1.3, 9.0) == 9.0
    assert effective_rate(4.15, 1.3, 9.0) == pytest.approx(5.45)

    inp = SimulationInput.model_validate(proposal_payload(hibor=8.5, capRate=7.25))
    assert calculate_projection(inp).effectiveRate == 7.25


def test_cost_of_funds_basis(proposal_payload):
    inp = SimulationInput.model_validate(
        proposal_payload(interestBasis="cof", cofRate=3.0, hibor=6.0)
    )
    assert calculate_projection(inp).effectiveRate == pytest.approx(4.3)


def test_mortgage_funded_projection(mortgage_proposal):
    result = calculate_projection(mortgage_proposal)
    rows = result.projectionData
    annual_payment = result.monthlyMortgagePmt * 12

    assert result.monthlyMortgagePmt > 0
    assert rows[0].mortgageBalance == 3_000_000
    assert rows[0].annualMortgagePayment == 0.0
    assert rows[0].netEquity == pytest.approx(rows[0].totalAssets - result.bankLoan - 3_000_000)

    for row in rows[1:]:
        paid_years = min(row.year, 20)
        assert row.cumulativeMortgageCost == pytest.approx(annual_payment * paid_years)
        assert row.netEquity == pytest.approx(
            row.totalAssets - row.loan - row.cumulativeInterest - row.mortgageBalance
        )
        assert row.cumulativeNetGain == pytest.approx(
            row.netEquity - rows[0].netEquity - row.cumulativeMortgageCost
        )
        assert row.annualNetGain == pytest.approx(
            row.annualBondIncome + row.annualPolicyGrowth - row.annualLoanInterest - row.annualMortgagePayment
        )
        assert row.annualRoC == pytest.approx(row.annualNetGain / 3_000_000 * 100)

    for row in rows[21:]:
        assert row.mortgageBalance == 0.0
        assert row.annualMortgagePayment == 0.0


def test_supplied_mortgage_payment_is_used(mortgage_proposal):
    inp = mortgage_proposal.model_copy(update={"monthlyMortgagePmt": 25_000.0})
    result = calculate_projection(inp)

    assert result.monthlyMortgagePmt == 25_000.0
    assert result.projectionData[1].annualMortgagePayment == pytest.approx(300_000.0)
    assert result.monthlyNetCashflow == pytest.approx(
        result.monthlyBondIncome - result.monthlyLoanInterest - 25_000.0
    )


def test_mortgage_fields_ignored_for_cash_funding(proposal):
    with_mortgage_fields = proposal.model_copy(
        update={"unlockedCash": 1_000_000, "effectiveMortgageRate": 4.0}
    )
    plain = calculate_projection(proposal)
    other = calculate_projection(with_mortgage_fields)

    assert other.finalNetEquity == plain.finalNetEquity
    assert other.monthlyMortgagePmt == 0.0


def test_policy_growth_tracks_factor_table(proposal):
    result = calculate_projection(proposal)
    row = result.projectionData[15]
    assert row.cumulativePolicyGrowth == pytest.approx(
        result.totalPremium * (total_factor(15) - total_factor(0))
    )
