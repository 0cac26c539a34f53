"""
Glue between the projection engine and its collaborators: history recording,
presets and defaults for the form, and chart-ready series.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from compound_calc.core.history import HistoryStore
from compound_calc.core.projection import normalize_params, project
from compound_calc.errors import PersistenceError
from compound_calc.models import (
    COMPOUNDS_PER_YEAR,
    CalculationParams,
    CalculationRecord,
    CalculationResult,
    ChartPoint,
    CompoundFrequency,
    ContributionFrequency,
    PeriodUnit,
    PresetRate,
    RecordParams,
    RecordResult,
)

logger = logging.getLogger(__name__)

PRESET_RATES = [
    PresetRate(label="Demand deposit 0.35%", value=0.35),
    PresetRate(label="1-year fixed deposit 1.5%", value=1.5),
    PresetRate(label="3-year fixed deposit 2.75%", value=2.75),
    PresetRate(label="Wealth management product 3.5%", value=3.5),
    PresetRate(label="Fund investment 6%", value=6),
    PresetRate(label="Stock investment 8%", value=8),
]

_FREQUENCY_BY_COUNT = {count: frequency for frequency, count in COMPOUNDS_PER_YEAR.items()}


@dataclass
class CalculationOutcome:
    result: CalculationResult
    record: Optional[CalculationRecord]
    history_saved: bool


def preset_rates() -> List[PresetRate]:
    return list(PRESET_RATES)


def default_params() -> CalculationParams:
    return CalculationParams(
        principal=100000,
        annualRate=3.5,
        period=10,
        periodUnit=PeriodUnit.YEAR,
        frequency=CompoundFrequency.YEARLY,
        additionalInvestment=0,
        additionalInvestmentFrequency=ContributionFrequency.MONTHLY,
    )


def empty_result() -> CalculationResult:
    """
    Zero-valued result for callers that embed the engine and want something
    to display when a calculation fails. The HTTP API reports errors instead.
    """
    return CalculationResult(
        finalAmount=0.0,
        totalInterest=0.0,
        totalInvestment=0.0,
        returnRate=0.0,
        yearlyDetails=[],
    )


def record_snapshot(params: CalculationParams, result: CalculationResult) -> tuple[RecordParams, RecordResult]:
    """Flatten params to years / monthly contribution, as stored in history."""
    normalized = normalize_params(params)
    if normalized.contribution_frequency == ContributionFrequency.MONTHLY:
        monthly = normalized.contribution
    else:
        monthly = normalized.contribution / 12

    return (
        RecordParams(
            principal=normalized.principal,
            rate=params.annualRate,
            years=normalized.years,
            monthlyInvestment=monthly,
            compoundFrequency=normalized.compounds_per_year,
        ),
        RecordResult(finalAmount=result.finalAmount, totalInterest=result.totalInterest),
    )


def params_from_record(record: CalculationRecord) -> CalculationParams:
    """Refill the form from a history entry. Unknown counts fall back to monthly."""
    frequency = _FREQUENCY_BY_COUNT.get(record.params.compoundFrequency, CompoundFrequency.MONTHLY)
    return CalculationParams(
        principal=record.params.principal,
        annualRate=record.params.rate,
        period=record.params.years,
        periodUnit=PeriodUnit.YEAR,
        frequency=frequency,
        additionalInvestment=record.params.monthlyInvestment or 0,
        additionalInvestmentFrequency=ContributionFrequency.MONTHLY,
    )


def calculate(params: CalculationParams, store: Optional[HistoryStore] = None) -> CalculationOutcome:
    """
    Run the projection and record it in history when a store is given.

    InvalidParameterError propagates. A failed history save is logged and
    reported through `history_saved`; the result is returned either way.
    """
    result = project(params)
    logger.info(
        "Projection computed: principal=%s rate=%s%% period=%s %s rows=%d final=%.2f",
        params.principal,
        params.annualRate,
        params.period,
        PeriodUnit(params.periodUnit).value,
        len(result.yearlyDetails),
        result.finalAmount,
    )

    if store is None:
        return CalculationOutcome(result=result, record=None, history_saved=False)

    snapshot_params, snapshot_result = record_snapshot(params, result)
    try:
        record = store.append(snapshot_params, snapshot_result)
    except PersistenceError as exc:
        logger.warning("Projection not saved to history: %s", exc)
        return CalculationOutcome(result=result, record=None, history_saved=False)

    return CalculationOutcome(result=result, record=record, history_saved=True)


def chart_series(result: CalculationResult) -> List[ChartPoint]:
    return [
        ChartPoint(
            year=detail.year,
            endingBalance=round(detail.endingBalance, 2),
            interest=round(detail.interest, 2),
            additionalInvestment=round(detail.additionalInvestment, 2),
        )
        for detail in result.yearlyDetails
    ]
