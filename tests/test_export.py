from __future__ import annotations

import pytest

from compound_calc.core.export import (
    BOM,
    export_csv,
    format_amount,
    format_percentage,
    parse_csv_rows,
    to_csv_bytes,
    write_csv,
)
from compound_calc.core.projection import project
from compound_calc.errors import ExportError
from compound_calc.models import (
    CalculationParams,
    CompoundFrequency,
    ContributionFrequency,
    PeriodUnit,
)


@pytest.fixture()
def params() -> CalculationParams:
    return CalculationParams(
        principal=10000,
        annualRate=5,
        period=18,
        periodUnit=PeriodUnit.MONTH,
        frequency=CompoundFrequency.MONTHLY,
        additionalInvestment=1000,
        additionalInvestmentFrequency=ContributionFrequency.MONTHLY,
    )


def test_rows_come_back_to_two_decimals(params):
    result = project(params)

    parsed = parse_csv_rows(export_csv(result, params))

    assert len(parsed) == len(result.yearlyDetails)
    for expected, row in zip(result.yearlyDetails, parsed):
        assert row.year == expected.year
        assert row.beginningBalance == pytest.approx(expected.beginningBalance, abs=0.006)
        assert row.interest == pytest.approx(expected.interest, abs=0.006)
        assert row.additionalInvestment == pytest.approx(expected.additionalInvestment, abs=0.006)
        assert row.endingBalance == pytest.approx(expected.endingBalance, abs=0.006)


def test_layout_has_header_rows_blank_line_and_summary(params):
    result = project(params)
    lines = export_csv(result, params).split("\n")

    assert lines[0] == "Year,Beginning Balance,Interest,Additional Investment,Ending Balance"
    assert lines[1].startswith("1,10000.00,")
    assert lines[3] == ""
    assert lines[4] == "Summary"
    assert lines[5:13] == [
        "Principal,10000.00",
        "Annual Rate,5%",
        "Period,18 months",
        "Additional Investment,1000.00 (monthly)",
        f"Total Investment,{result.totalInvestment:.2f}",
        f"Final Amount,{result.finalAmount:.2f}",
        f"Total Interest,{result.totalInterest:.2f}",
        f"Return Rate,{result.returnRate:.2f}%",
    ]


def test_summary_labels_for_years_and_yearly_contributions():
    params = CalculationParams(
        principal=100000,
        annualRate=3.5,
        period=10,
        additionalInvestment=500,
        additionalInvestmentFrequency=ContributionFrequency.YEARLY,
    )

    text = export_csv(project(params), params)

    assert "Annual Rate,3.5%" in text
    assert "Period,10 years" in text
    assert "Additional Investment,500.00 (yearly)" in text


def test_bytes_start_with_bom(params):
    blob = to_csv_bytes(export_csv(project(params), params))

    assert blob.startswith(b"\xef\xbb\xbf")
    assert blob.decode("utf-8").startswith(BOM + "Year,")


def test_parse_tolerates_bom(params):
    text = export_csv(project(params), params)

    assert parse_csv_rows(BOM + text) == parse_csv_rows(text)


def test_formatting_helpers():
    assert format_amount(1234.5) == "1234.50"
    assert format_percentage(41.059876) == "41.06%"


def test_write_csv_delivers_file(tmp_path, params):
    text = export_csv(project(params), params)

    path = write_csv(text, tmp_path / "exports", "result.csv")

    assert path.exists()
    assert path.read_bytes() == to_csv_bytes(text)


def test_write_csv_failure_raises_export_error(tmp_path, params):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(ExportError):
        write_csv(export_csv(project(params), params), blocker, "result.csv")


def test_small_rates_print_without_exponent():
    params = CalculationParams(principal=1000, annualRate=0.00001, period=1.5)

    text = export_csv(project(params), params)

    assert "Annual Rate,0.00001%" in text
    assert "Period,1.5 years" in text
