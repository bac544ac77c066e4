"""Data contracts for the refinance mortgage that funds a proposal."""

from pydantic import BaseModel, ConfigDict, Field

from premium_finance import config


class MortgageScheduleRow(BaseModel):
    """Year-end state of the refinance mortgage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=0)
    balance: float
    annualPayment: float
    cumulativeInterest: float
    annualInterest: float


class RefinanceInput(BaseModel):
    """Property and pricing terms used to size a cash-out refinance."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    propertyValue: float = Field(config.DEFAULT_PROPERTY_VALUE, ge=0)
    existingMortgage: float = Field(config.DEFAULT_EXISTING_MORTGAGE, ge=0)
    mortgageLtv: float = Field(
        config.DEFAULT_MORTGAGE_LTV,
        ge=0,
        le=100,
        description="Target loan-to-value of the new mortgage, in percent.",
    )
    hibor: float = Field(..., description="Reference interbank rate, in percent.")
    hiborSpread: float = Field(config.DEFAULT_HIBOR_SPREAD, description="H + spread pricing.")
    primeRate: float = Field(config.DEFAULT_PRIME_RATE)
    primeDiscount: float = Field(config.DEFAULT_PRIME_DISCOUNT, description="P - discount pricing.")
    mortgageTenor: int = Field(config.DEFAULT_MORTGAGE_TENOR, ge=1, le=40)


class RefinanceQuote(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    unlockedCash: float
    effectiveMortgageRate: float
    monthlyMortgagePmt: float
    mortgageTenor: int
