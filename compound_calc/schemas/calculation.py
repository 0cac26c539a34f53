"""Data contracts for the calculation, chart and export endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from compound_calc.models import (
    CalculationParams,
    CalculationRecord,
    CalculationResult,
    ChartPoint,
    CompoundFrequency,
    ContributionFrequency,
    PeriodUnit,
    PresetRate,
)


class CalculationRequest(BaseModel):
    """Form inputs, bounded the same way the calculator form bounds them."""

    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., ge=0.01, le=1_000_000_000, description="Initial amount invested.")
    annualRate: float = Field(
        ...,
        ge=0,
        le=100,
        description="Annual rate as a percentage (e.g. 3.5 for 3.5%).",
    )
    period: float = Field(..., ge=1, le=100, description="Investment horizon, in periodUnit.")
    periodUnit: PeriodUnit = PeriodUnit.YEAR
    frequency: CompoundFrequency = CompoundFrequency.YEARLY
    additionalInvestment: float = Field(
        0.0,
        ge=0,
        le=100_000_000,
        description="Amount added at each contribution event.",
    )
    additionalInvestmentFrequency: ContributionFrequency = ContributionFrequency.MONTHLY

    def to_params(self) -> CalculationParams:
        return CalculationParams.model_validate(self.model_dump())


class CalculationResponse(BaseModel):
    result: CalculationResult
    record: Optional[CalculationRecord] = None
    historySaved: bool


class ChartResponse(BaseModel):
    series: List[ChartPoint]


class PresetsResponse(BaseModel):
    presets: List[PresetRate]
    defaults: CalculationParams
