"""Data contracts for the history endpoints."""

from typing import List

from pydantic import BaseModel

from compound_calc.models import CalculationParams, CalculationRecord


class HistoryResponse(BaseModel):
    records: List[CalculationRecord]
    count: int


class RestoredParamsResponse(BaseModel):
    id: str
    params: CalculationParams
