"""Stateless helpers that shape a projection result for charts and tables."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from satsplan.schemas.projection import ProjectionResult

CHART_SERIES = ("holdings", "fiatValue", "assetPrice")


class ChartPadding(BaseModel):
    top: float = 20.0
    right: float = 20.0
    bottom: float = 40.0
    left: float = 60.0


class ChartPoint(BaseModel):
    age: int
    value: float
    x: float
    y: float


class ChartGeometry(BaseModel):
    series: str
    width: float
    height: float
    padding: ChartPadding
    minValue: float
    maxValue: float
    points: List[ChartPoint]
    path: str
    retirementX: Optional[float] = None


def ledger_table(result: ProjectionResult) -> List[Dict[str, Any]]:
    """One plain row per ledger entry, in age order."""
    return [
        {
            "age": record.age,
            "yearIndex": record.yearIndex,
            "assetPrice": record.assetPrice,
            "holdings": record.holdings,
            "fiatValue": record.fiatValue,
            "indexedAnnualExpense": record.indexedAnnualExpense,
            "isRetired": record.isRetired,
        }
        for record in result.ledger
    ]


def chart_geometry(
    result: ProjectionResult,
    series: str = "holdings",
    width: float = 400,
    height: float = 200,
    padding: Optional[ChartPadding] = None,
) -> ChartGeometry:
    """
    Map one ledger series onto SVG coordinates.

    x runs over the year index, left padding to right padding.
    y is normalised between the series min and max (range 1 when flat),
    with larger values drawn higher.
    """
    if series not in CHART_SERIES:
        raise ValueError(f"unknown chart series {series!r}, expected one of {', '.join(CHART_SERIES)}")

    padding = padding or ChartPadding()
    plot_width = width - padding.left - padding.right
    plot_height = height - padding.top - padding.bottom

    values = [getattr(record, series) for record in result.ledger]
    if not values:
        return ChartGeometry(
            series=series,
            width=width,
            height=height,
            padding=padding,
            minValue=0.0,
            maxValue=0.0,
            points=[],
            path="",
        )

    min_value, max_value = min(values), max(values)
    value_range = (max_value - min_value) or 1
    total_years = result.ledger[-1].yearIndex

    def get_x(year_index: int) -> float:
        if total_years == 0:
            return padding.left
        return padding.left + (year_index / total_years) * plot_width

    def get_y(value: float) -> float:
        normalized = (value - min_value) / value_range
        return height - padding.bottom - normalized * plot_height

    points = [
        ChartPoint(age=record.age, value=value, x=get_x(record.yearIndex), y=get_y(value))
        for record, value in zip(result.ledger, values)
    ]
    path = " ".join(
        f"{'M' if index == 0 else 'L'} {point.x} {point.y}" for index, point in enumerate(points)
    )

    retirement_x = None
    if result.canRetire:
        retirement_x = get_x(result.retirementAge - result.ledger[0].age)

    return ChartGeometry(
        series=series,
        width=width,
        height=height,
        padding=padding,
        minValue=min_value,
        maxValue=max_value,
        points=points,
        path=path,
        retirementX=retirement_x,
    )
