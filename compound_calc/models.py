from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PeriodUnit(str, Enum):
    YEAR = "year"
    MONTH = "month"


class CompoundFrequency(str, Enum):
    YEARLY = "yearly"
    SEMI_ANNUALLY = "semi-annually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"


class ContributionFrequency(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


COMPOUNDS_PER_YEAR = {
    CompoundFrequency.YEARLY: 1,
    CompoundFrequency.SEMI_ANNUALLY: 2,
    CompoundFrequency.QUARTERLY: 4,
    CompoundFrequency.MONTHLY: 12,
}


class CalculationParams(BaseModel):
    """Engine input. Range checks live in the engine, not here."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float
    annualRate: float  # percentage, 3.5 means 3.5%
    period: float
    periodUnit: PeriodUnit = PeriodUnit.YEAR
    frequency: CompoundFrequency = CompoundFrequency.YEARLY
    additionalInvestment: float = 0.0
    additionalInvestmentFrequency: ContributionFrequency = ContributionFrequency.MONTHLY


class YearlyDetail(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(ge=1)
    beginningBalance: float
    interest: float
    additionalInvestment: float
    endingBalance: float


class CalculationResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    finalAmount: float
    totalInterest: float
    totalInvestment: float
    returnRate: float  # percentage of totalInvestment
    yearlyDetails: List[YearlyDetail] = Field(default_factory=list)


class RecordParams(BaseModel):
    """Params snapshot kept in history. `years` is already normalized to years."""

    model_config = ConfigDict(extra="forbid")

    principal: float
    rate: float
    years: float
    monthlyInvestment: Optional[float] = None
    compoundFrequency: Optional[int] = None


class RecordResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    finalAmount: float
    totalInterest: float


class CalculationRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    timestamp: datetime
    params: RecordParams
    result: RecordResult


class PresetRate(BaseModel):
    label: str
    value: float


class ChartPoint(BaseModel):
    year: int
    endingBalance: float
    interest: float
    additionalInvestment: float
