"""Data contracts for the baseline 30-year projection."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

FundSource = Literal["cash", "mortgage"]
InterestBasis = Literal["hibor", "cof"]


class SimulationInput(BaseModel):
    """
    One proposal: capital allocation, bank lending terms and market rates.
    All rates are in percent. Mortgage fields only matter when
    ``fundSource == "mortgage"``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    budget: float
    cashReserve: float
    bondAlloc: float
    bondYield: float
    hibor: float
    cofRate: float = 0.0
    interestBasis: InterestBasis = "hibor"
    spread: float
    capRate: float
    handlingFee: float = 0.0
    leverageLTV: float
    fundSource: FundSource = "cash"

    unlockedCash: float = 0.0
    effectiveMortgageRate: float = 0.0
    # derived from the annuity formula when omitted
    monthlyMortgagePmt: Optional[float] = None
    mortgageTenor: int = 30


class ProjectionRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=0)
    surrenderValue: float
    bondPrincipal: float
    cumulativeBondInterest: float
    bondFundNetValue: float
    cashValue: float
    totalAssets: float
    loan: float
    cumulativeInterest: float
    netEquity: float
    formattedNetEquity: str
    formattedLoan: str
    annualBondIncome: float
    annualLoanInterest: float
    annualPolicyGrowth: float
    annualNetGain: float
    annualRoC: float
    cumulativePolicyGrowth: float
    cumulativeNetGain: float
    mortgageBalance: float
    cumulativeMortgageCost: float
    cumulativeMortgageInterest: float
    annualMortgagePayment: float


class SimulationOutput(BaseModel):
    """Day-1 structure, the year 0..30 ledger and summary figures."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pfEquity: float
    totalPremium: float
    bankLoan: float
    effectiveRate: float
    projectionData: List[ProjectionRow]
    finalNetEquity: float
    roi: float
    monthlyBondIncome: float
    monthlyLoanInterest: float
    monthlyNetCashflow: float
    oneOffBondFee: float
    netBondPrincipal: float
    monthlyMortgagePmt: float
