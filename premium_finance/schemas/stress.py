"""Data contracts for the stressed projection and sensitivity grid."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from premium_finance import config
from premium_finance.schemas.projection import FundSource, ProjectionRow, SimulationInput


class StressScenario(BaseModel):
    """Shocks applied on top of a baseline proposal."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    simulatedHibor: float = Field(..., description="Alternate reference rate, in percent.")
    bondPriceDrop: float = Field(0.0, description="Haircut on the net bond principal, in percent.")
    showGuaranteed: bool = Field(False, description="Use the guaranteed cash-value curve.")
    sensitivityYear: int = config.DEFAULT_SENSITIVITY_YEAR
    hiborAxis: List[float] = Field(default_factory=lambda: list(config.DEFAULT_HIBOR_AXIS))
    yieldAxis: List[float] = Field(default_factory=lambda: list(config.DEFAULT_YIELD_AXIS))


class StressTestInput(StressScenario):
    """A stress scenario together with the baseline figures it is applied to."""

    projectionData: List[ProjectionRow]
    totalPremium: float
    netBondPrincipal: float
    bondYield: float
    bankLoan: float
    spread: float
    capRate: float
    budget: float
    cashReserve: float
    fundSource: FundSource = "cash"
    unlockedCash: float = 0.0


class StressedRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    netEquity: float
    baselineNetEquity: float
    ltv: float
    surrenderValue: Optional[float] = None
    bondFundNetValue: Optional[float] = None


class StressStats(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    breakEvenHibor: float
    lowestEquity: float


class SensitivityGrid(BaseModel):
    """Profit at the analysis year; ``data[i][j]`` is yield ``yLabels[i]`` at rate ``xLabels[j]``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    xLabels: List[float]
    yLabels: List[float]
    data: List[List[float]]


class StressTestOutput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    stressedProjection: List[StressedRow]
    stressStats: StressStats
    sensitivityData: SensitivityGrid


class StressTestRequest(BaseModel):
    """HTTP body: a proposal plus the scenario to stress it with."""

    model_config = ConfigDict(extra="forbid")

    simulation: SimulationInput
    stress: StressScenario
