from __future__ import annotations

from math import isclose

from compound_calc.core.projection import project
from compound_calc.models import (
    CalculationParams,
    CompoundFrequency,
    ContributionFrequency,
    PeriodUnit,
)


def test_eighteen_months_gives_half_final_year():
    """
    18 months at 5% yearly compounding: one full year, then half a year
    grown with (1.05)^0.5.
    """
    params = CalculationParams(principal=1000, annualRate=5, period=18, periodUnit=PeriodUnit.MONTH)

    rows = project(params).yearlyDetails

    assert len(rows) == 2
    assert isclose(rows[0].endingBalance, 1050.0, abs_tol=1e-9)
    assert isclose(rows[1].endingBalance, 1050.0 * 1.05**0.5, rel_tol=1e-12)
    assert isclose(rows[1].interest, 1050.0 * (1.05**0.5 - 1), rel_tol=1e-9)


def test_partial_year_contribution_is_prorated_monthly():
    params = CalculationParams(
        principal=1000,
        annualRate=0,
        period=18,
        periodUnit=PeriodUnit.MONTH,
        additionalInvestment=100,
        additionalInvestmentFrequency=ContributionFrequency.MONTHLY,
    )

    result = project(params)

    assert [row.additionalInvestment for row in result.yearlyDetails] == [1200, 600]
    assert result.totalInvestment == 2800
    assert result.finalAmount == 2800


def test_partial_year_contribution_is_prorated_yearly():
    params = CalculationParams(
        principal=1000,
        annualRate=6,
        period=27,
        periodUnit=PeriodUnit.MONTH,
        frequency=CompoundFrequency.MONTHLY,
        additionalInvestment=1200,
        additionalInvestmentFrequency=ContributionFrequency.YEARLY,
    )

    rows = project(params).yearlyDetails

    assert len(rows) == 3
    assert rows[0].additionalInvestment == 1200
    assert rows[1].additionalInvestment == 1200
    assert isclose(rows[2].additionalInvestment, 1200 * 0.25, abs_tol=1e-9)
    assert isclose(rows[2].endingBalance, rows[2].beginningBalance * 1.005**3 + 300, rel_tol=1e-12)


def test_fractional_year_period_unit():
    params = CalculationParams(principal=2000, annualRate=4, period=2.5)

    rows = project(params).yearlyDetails

    assert [row.year for row in rows] == [1, 2, 3]
    assert isclose(rows[-1].endingBalance, 2000 * 1.04**2.5, rel_tol=1e-12)
