from __future__ import annotations

import pytest

from satsplan.core.presentation import ChartPadding, chart_geometry, ledger_table
from satsplan.core.projection import compute
from satsplan.schemas.projection import ProjectionInputs


def drawdown_result():
    # ages 60..62, retires at 60, holdings 10 -> 9 -> 8 at a flat price of 100
    return compute(
        ProjectionInputs(
            currentAge=60,
            lifeExpectancy=62,
            initialHoldings=10.0,
            annualPurchaseBudget=0.0,
            spotPrice=100.0,
            priceGrowthRatePct=0.0,
            inflationRatePct=0.0,
            desiredAnnualIncome=100.0,
        )
    )


def test_ledger_table_has_one_plain_row_per_year():
    rows = ledger_table(drawdown_result())

    assert [row["age"] for row in rows] == [60, 61, 62]
    assert rows[1]["holdings"] == 9.0
    assert rows[1]["fiatValue"] == 900.0
    assert set(rows[0]) == {
        "age",
        "yearIndex",
        "assetPrice",
        "holdings",
        "fiatValue",
        "indexedAnnualExpense",
        "isRetired",
    }


def test_chart_geometry_maps_holdings_into_plot_area():
    geometry = chart_geometry(drawdown_result())

    assert [(p.x, p.y) for p in geometry.points] == [(60.0, 20.0), (220.0, 90.0), (380.0, 160.0)]
    assert geometry.path == "M 60.0 20.0 L 220.0 90.0 L 380.0 160.0"
    assert geometry.minValue == 8.0
    assert geometry.maxValue == 10.0
    assert geometry.retirementX == 60.0


def test_flat_series_sits_on_the_baseline():
    geometry = chart_geometry(drawdown_result(), series="assetPrice")
    assert {p.y for p in geometry.points} == {160.0}


def test_custom_size_and_padding():
    padding = ChartPadding(top=0, right=0, bottom=0, left=0)
    geometry = chart_geometry(drawdown_result(), width=100, height=50, padding=padding)
    assert [(p.x, p.y) for p in geometry.points] == [(0.0, 0.0), (50.0, 25.0), (100.0, 50.0)]


def test_unknown_series_is_rejected():
    with pytest.raises(ValueError):
        chart_geometry(drawdown_result(), series="price")


def test_empty_ledger_gives_empty_chart():
    result = compute(
        ProjectionInputs(
            currentAge=50,
            lifeExpectancy=40,
            initialHoldings=1.0,
            annualPurchaseBudget=0.0,
            spotPrice=100.0,
            priceGrowthRatePct=0.0,
            inflationRatePct=0.0,
            desiredAnnualIncome=100.0,
        )
    )
    geometry = chart_geometry(result)

    assert geometry.points == []
    assert geometry.path == ""
    assert geometry.retirementX is None
    assert ledger_table(result) == []


def test_single_year_is_drawn_at_left_edge():
    result = compute(
        ProjectionInputs(
            currentAge=40,
            lifeExpectancy=40,
            initialHoldings=1.0,
            annualPurchaseBudget=0.0,
            spotPrice=100.0,
            priceGrowthRatePct=0.0,
            inflationRatePct=0.0,
            desiredAnnualIncome=50.0,
        )
    )
    geometry = chart_geometry(result, series="fiatValue")

    assert len(geometry.points) == 1
    assert geometry.points[0].x == 60.0
    assert geometry.path.startswith("M 60.0 ")
