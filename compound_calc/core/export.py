"""CSV export of a calculation result and the parameters that produced it."""

from __future__ import annotations

import csv
import io
import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Union

from compound_calc.errors import ExportError
from compound_calc.models import (
    CalculationParams,
    CalculationResult,
    ContributionFrequency,
    PeriodUnit,
    YearlyDetail,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"
CSV_HEADERS = ["Year", "Beginning Balance", "Interest", "Additional Investment", "Ending Balance"]


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def _plain(value: float) -> str:
    # 5.0 -> "5", 3.5 -> "3.5", 1e-05 -> "0.00001"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _summary_rows(result: CalculationResult, params: CalculationParams) -> List[List[str]]:
    cadence = (
        "monthly"
        if params.additionalInvestmentFrequency == ContributionFrequency.MONTHLY
        else "yearly"
    )
    unit = "years" if params.periodUnit == PeriodUnit.YEAR else "months"
    return [
        [],
        ["Summary"],
        ["Principal", format_amount(params.principal)],
        ["Annual Rate", f"{_plain(params.annualRate)}%"],
        ["Period", f"{_plain(params.period)} {unit}"],
        ["Additional Investment", f"{format_amount(params.additionalInvestment)} ({cadence})"],
        ["Total Investment", format_amount(result.totalInvestment)],
        ["Final Amount", format_amount(result.finalAmount)],
        ["Total Interest", format_amount(result.totalInterest)],
        ["Return Rate", format_percentage(result.returnRate)],
    ]


def export_csv(result: CalculationResult, params: CalculationParams) -> str:
    """
    Render the yearly table followed by a blank row and a summary block.

    Row columns: year, beginning balance, interest, additional investment,
    ending balance, all amounts with two decimals.
    """
    rows: List[List[object]] = [CSV_HEADERS]
    for detail in result.yearlyDetails:
        rows.append(
            [
                detail.year,
                format_amount(detail.beginningBalance),
                format_amount(detail.interest),
                format_amount(detail.additionalInvestment),
                format_amount(detail.endingBalance),
            ]
        )
    rows.extend(_summary_rows(result, params))

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def to_csv_bytes(csv_text: str) -> bytes:
    """UTF-8 bytes with a leading BOM so spreadsheet apps detect the encoding."""
    return (BOM + csv_text).encode("utf-8")


def parse_csv_rows(csv_text: str) -> List[YearlyDetail]:
    """Read the yearly rows back out of an exported CSV (BOM tolerated)."""
    details: List[YearlyDetail] = []
    reader = csv.reader(io.StringIO(csv_text.lstrip(BOM)))
    next(reader, None)  # header
    for row in reader:
        if not row:
            break
        year, beginning, interest, additional, ending = row
        details.append(
            YearlyDetail(
                year=int(year),
                beginningBalance=float(beginning),
                interest=float(interest),
                additionalInvestment=float(additional),
                endingBalance=float(ending),
            )
        )
    return details


def write_csv(csv_text: str, directory: Union[str, Path], filename: str) -> Path:
    """Deliver the export blob to disk and return the written path."""
    target = Path(directory) / Path(filename).name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(to_csv_bytes(csv_text))
    except OSError as exc:
        logger.error("CSV export to %s failed: %s", target, exc)
        raise ExportError(f"could not write {target}: {exc}") from exc
    logger.info("Exported CSV to %s", target)
    return target
