from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Type, TypeVar

from compound_calc.errors import InvalidParameterError
from compound_calc.models import (
    COMPOUNDS_PER_YEAR,
    CalculationParams,
    CalculationResult,
    CompoundFrequency,
    ContributionFrequency,
    PeriodUnit,
    YearlyDetail,
)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class NormalizedParams:
    principal: float
    rate: float  # fraction, 0.035 for 3.5%
    years: float
    compounds_per_year: int
    contribution: float
    contribution_frequency: ContributionFrequency


def _number(value: object, field: str, errors: List[str]) -> Optional[float]:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        errors.append(f"{field} must be a number")
        return None
    if not math.isfinite(number):
        errors.append(f"{field} must be finite")
        return None
    return number


def _member(enum_cls: Type[E], value: object, field: str, errors: List[str]) -> Optional[E]:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append(f"{field} must be one of: {allowed} (got {value!r})")
        return None


def normalize_params(params: CalculationParams) -> NormalizedParams:
    """Check the engine's preconditions and convert params to years / fractions.

    Every problem found is reported at once in a single InvalidParameterError.
    """
    errors: List[str] = []

    principal = _number(params.principal, "principal", errors)
    annual_rate = _number(params.annualRate, "annualRate", errors)
    period = _number(params.period, "period", errors)
    contribution = _number(params.additionalInvestment, "additionalInvestment", errors)
    unit = _member(PeriodUnit, params.periodUnit, "periodUnit", errors)
    frequency = _member(CompoundFrequency, params.frequency, "frequency", errors)
    cadence = _member(
        ContributionFrequency,
        params.additionalInvestmentFrequency,
        "additionalInvestmentFrequency",
        errors,
    )

    if principal is not None and principal <= 0:
        errors.append("principal must be greater than 0")
    if annual_rate is not None and annual_rate < 0:
        errors.append("annualRate must not be negative")
    if period is not None and period < 1:
        errors.append("period must be at least 1")
    if contribution is not None and contribution < 0:
        errors.append("additionalInvestment must not be negative")

    if errors:
        raise InvalidParameterError(errors)

    years = period if unit == PeriodUnit.YEAR else period / 12
    return NormalizedParams(
        principal=principal,
        rate=annual_rate / 100,
        years=years,
        compounds_per_year=COMPOUNDS_PER_YEAR[frequency],
        contribution=contribution,
        contribution_frequency=cadence,
    )


def _yearly_contribution(params: NormalizedParams, actual_years: float, full_year: bool) -> float:
    if params.contribution_frequency == ContributionFrequency.MONTHLY:
        per_year = params.contribution * 12
    else:
        per_year = params.contribution

    if full_year:
        return per_year
    return per_year * actual_years


def project(params: CalculationParams) -> CalculationResult:
    """
    Build the year-by-year balance table for a compound interest investment.

    Order of operations (per year):
      1) Grow the starting balance with (1 + r/n)^(n * t), where t is 1 for a
         full year and the fractional remainder for a partial final year.
      2) Add this year's contribution AFTER growth (it earns nothing this year).
         A partial final year gets the same fraction of the yearly contribution.
      3) Record the row; its ending balance starts the next year.

    Raises InvalidParameterError when principal <= 0, rate < 0, period < 1,
    or an enum field is not recognized.
    """
    p = normalize_params(params)
    n = p.compounds_per_year

    rows: List[YearlyDetail] = []
    balance = p.principal
    total_contributions = 0.0

    for year in range(1, math.ceil(p.years) + 1):
        beginning = balance

        full_year = year <= p.years
        actual_years = 1.0 if full_year else p.years - (year - 1)

        grown = beginning * (1 + p.rate / n) ** (n * actual_years)
        interest = grown - beginning

        contribution = _yearly_contribution(p, actual_years, full_year)
        total_contributions += contribution

        balance = grown + contribution
        rows.append(
            YearlyDetail(
                year=year,
                beginningBalance=beginning,
                interest=interest,
                additionalInvestment=contribution,
                endingBalance=balance,
            )
        )

        if year >= p.years:
            break

    total_investment = p.principal + total_contributions
    final_amount = rows[-1].endingBalance if rows else 0.0
    total_interest = final_amount - total_investment
    return_rate = (total_interest / total_investment) * 100 if total_investment > 0 else 0.0

    return CalculationResult(
        finalAmount=final_amount,
        totalInterest=total_interest,
        totalInvestment=total_investment,
        returnRate=return_rate,
        yearlyDetails=rows,
    )


__all__ = [
    "NormalizedParams",
    "normalize_params",
    "project",
]
