"""Data contracts for the retirement projection."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProjectionInputs(BaseModel):
    """Assumptions for a single projection run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAge: int = Field(..., ge=0)
    lifeExpectancy: int = Field(..., ge=0)
    initialHoldings: float = Field(..., ge=0, description="Units of the asset held today.")
    annualPurchaseBudget: float = Field(
        ...,
        ge=0,
        description="Currency spent on the asset per year, nominal at currentAge.",
    )
    spotPrice: float = Field(..., gt=0, description="Currency per unit of the asset today.")
    priceGrowthRatePct: float = Field(..., description="Annual price growth, 20 means 20%.")
    inflationRatePct: float = Field(..., description="Annual inflation, 2 means 2%.")
    desiredAnnualIncome: float = Field(
        ...,
        ge=0,
        description="Retirement income per year in today's purchasing power.",
    )


class YearRecord(BaseModel):
    """Single row of the projection ledger."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    yearIndex: int = Field(..., ge=0)
    assetPrice: float
    # holdings before this year's purchase or sale
    holdings: float
    indexedAnnualExpense: float
    fiatValue: float
    isRetired: bool


class ProjectionResult(BaseModel):
    """Summary of a projection run plus the full ledger."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    retirementAge: int
    canRetire: bool
    finalHoldings: float
    priceAtRetirement: float
    indexedAnnualBudgetAtRetirement: float
    monthlyBudgetAtRetirement: float
    totalFiatValueAtRetirement: float
    ledger: Tuple[YearRecord, ...] = ()


# Defaults shown by the calculator form before the user types anything.
FORM_DEFAULTS: Dict[str, float] = {
    "currentAge": 30,
    "lifeExpectancy": 86,
    "initialHoldings": 0.5,
    "annualPurchaseBudget": 0.0,
    "spotPrice": 118328.79,
    "priceGrowthRatePct": 20.0,
    "inflationRatePct": 2.0,
    "desiredAnnualIncome": 120000.0,
}

_INT_FIELDS = {"currentAge", "lifeExpectancy"}
_NON_NEGATIVE_FIELDS = {
    "currentAge",
    "lifeExpectancy",
    "initialHoldings",
    "annualPurchaseBudget",
    "desiredAnnualIncome",
}
_POSITIVE_FIELDS = {"spotPrice"}
# Ages above this bound are not a human lifespan; they fall back to the default.
MAX_AGE = 150


def parse_number(raw: Any) -> Optional[float]:
    """Parse a raw form value, returning None when it is not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def coerce_field(name: str, raw: Any) -> float:
    """Coerce one form value, substituting the field default when unusable."""
    default = FORM_DEFAULTS[name]
    value = parse_number(raw)
    if value is None:
        return default
    if name in _POSITIVE_FIELDS and value <= 0:
        return default
    if name in _INT_FIELDS and value > MAX_AGE:
        return default
    if name in _NON_NEGATIVE_FIELDS and value < 0:
        return default
    if name in _INT_FIELDS:
        return int(value)
    return value


class ProjectionForm(BaseModel):
    """Lenient form payload.

    Every field accepts numbers or numeric strings. Blank, unparseable or
    out-of-range values fall back to FORM_DEFAULTS so the projector always
    receives valid numbers. Zero is kept as a real value.
    """

    model_config = ConfigDict(extra="forbid")

    currentAge: int = Field(default=FORM_DEFAULTS["currentAge"])
    lifeExpectancy: int = Field(default=FORM_DEFAULTS["lifeExpectancy"])
    initialHoldings: float = Field(default=FORM_DEFAULTS["initialHoldings"])
    annualPurchaseBudget: float = Field(default=FORM_DEFAULTS["annualPurchaseBudget"])
    spotPrice: float = Field(default=FORM_DEFAULTS["spotPrice"])
    priceGrowthRatePct: float = Field(default=FORM_DEFAULTS["priceGrowthRatePct"])
    inflationRatePct: float = Field(default=FORM_DEFAULTS["inflationRatePct"])
    desiredAnnualIncome: float = Field(default=FORM_DEFAULTS["desiredAnnualIncome"])

    @model_validator(mode="before")
    @classmethod
    def _coerce_raw_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        coerced = dict(data)
        for name in FORM_DEFAULTS:
            coerced[name] = coerce_field(name, data.get(name))
        return coerced

    def to_inputs(self) -> ProjectionInputs:
        return ProjectionInputs(**self.model_dump())


__all__ = [
    "FORM_DEFAULTS",
    "MAX_AGE",
    "ProjectionForm",
    "ProjectionInputs",
    "ProjectionResult",
    "YearRecord",
    "coerce_field",
    "parse_number",
]
