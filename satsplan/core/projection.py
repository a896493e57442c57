from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from satsplan.schemas.projection import ProjectionInputs, ProjectionResult, YearRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetirementSnapshot:
    """Values frozen at the first age where holdings cover the remaining need."""

    age: int
    holdings: float
    asset_price: float
    indexed_budget: float
    fiat_value: float


def compound(factor: float, years: int) -> float:
    """factor ** years, saturating to +/-inf instead of raising OverflowError."""
    try:
        return factor ** years
    except OverflowError:
        if factor < 0 and years % 2:
            return -math.inf
        return math.inf


def units_for(amount: float, price: float) -> float:
    """Asset units worth ``amount`` at ``price``; a zero price gives 0 or +/-inf."""
    if price == 0:
        if amount == 0:
            return 0.0
        return math.copysign(math.inf, amount) * math.copysign(1.0, price)
    return amount / price


def remaining_lifetime_need(
    desired_income: float,
    inflation_factor: float,
    age: int,
    life_expectancy: int,
) -> float:
    """
    Cost of funding every year from age..life_expectancy (inclusive),
    each year indexed from the base income by inflation_factor^(year - age).

    Closed-form geometric sum; a flat factor is just income * years.
    """
    years = life_expectancy - age + 1
    if years <= 0 or desired_income == 0:
        return 0.0
    if inflation_factor == 1:
        return desired_income * years
    return desired_income * (compound(inflation_factor, years) - 1) / (inflation_factor - 1)


def compute(inputs: ProjectionInputs) -> ProjectionResult:
    """
    Project holdings year by year and find the earliest age at which their
    fiat value covers all remaining indexed expenses.

    Per age (n = age - currentAge):
      1) price = spot * growth^n, expense = income * inflation^n
      2) Until retired, test remaining need <= holdings * price; the first
         pass freezes the retirement snapshot for good.
      3) Record the row with holdings BEFORE this year's transaction.
      4) Accumulating (and not the first year): buy budget * inflation^n
         worth of the asset. Retired: sell this year's expense.
         Holdings may go negative; shortfall is not clamped.
    """
    growth_factor = 1 + inputs.priceGrowthRatePct / 100
    inflation_factor = 1 + inputs.inflationRatePct / 100

    holdings = float(inputs.initialHoldings)
    snapshot: Optional[RetirementSnapshot] = None
    ledger: List[YearRecord] = []

    for age in range(inputs.currentAge, inputs.lifeExpectancy + 1):
        years_from_start = age - inputs.currentAge
        asset_price = inputs.spotPrice * compound(growth_factor, years_from_start)
        indexed_expense = inputs.desiredAnnualIncome * compound(inflation_factor, years_from_start)
        fiat_value = holdings * asset_price

        if snapshot is None:
            need = remaining_lifetime_need(
                inputs.desiredAnnualIncome,
                inflation_factor,
                age,
                inputs.lifeExpectancy,
            )
            if need <= fiat_value:
                snapshot = RetirementSnapshot(
                    age=age,
                    holdings=holdings,
                    asset_price=asset_price,
                    indexed_budget=indexed_expense,
                    fiat_value=fiat_value,
                )
                logger.debug(
                    "retirement reachable at age %d (need %.2f, value %.2f)", age, need, fiat_value
                )

        retired = snapshot is not None and age >= snapshot.age

        ledger.append(
            YearRecord(
                age=age,
                yearIndex=years_from_start,
                assetPrice=asset_price,
                holdings=holdings,
                indexedAnnualExpense=indexed_expense,
                fiatValue=fiat_value,
                isRetired=retired,
            )
        )

        if retired:
            holdings -= units_for(indexed_expense, asset_price)
        elif age > inputs.currentAge:
            purchase = inputs.annualPurchaseBudget * compound(inflation_factor, years_from_start)
            holdings += units_for(purchase, asset_price)

    if snapshot is not None:
        return _summarize(ledger, snapshot, inputs.lifeExpectancy, can_retire=True)

    logger.debug("retirement not reachable by age %d", inputs.lifeExpectancy)
    if ledger:
        last = ledger[-1]
        terminal = RetirementSnapshot(
            age=inputs.lifeExpectancy,
            holdings=last.holdings,
            asset_price=last.assetPrice,
            indexed_budget=last.indexedAnnualExpense,
            fiat_value=last.fiatValue,
        )
    else:
        # lifeExpectancy < currentAge: nothing simulated, report today's state
        terminal = RetirementSnapshot(
            age=inputs.lifeExpectancy,
            holdings=float(inputs.initialHoldings),
            asset_price=inputs.spotPrice,
            indexed_budget=inputs.desiredAnnualIncome,
            fiat_value=inputs.initialHoldings * inputs.spotPrice,
        )
    return _summarize(ledger, terminal, inputs.lifeExpectancy, can_retire=False)


def _summarize(
    ledger: List[YearRecord],
    snapshot: RetirementSnapshot,
    life_expectancy: int,
    can_retire: bool,
) -> ProjectionResult:
    return ProjectionResult(
        retirementAge=snapshot.age if can_retire else life_expectancy,
        canRetire=can_retire,
        finalHoldings=snapshot.holdings,
        priceAtRetirement=snapshot.asset_price,
        indexedAnnualBudgetAtRetirement=snapshot.indexed_budget,
        monthlyBudgetAtRetirement=snapshot.indexed_budget / 12,
        totalFiatValueAtRetirement=snapshot.fiat_value,
        ledger=tuple(ledger),
    )


__all__ = [
    "RetirementSnapshot",
    "compound",
    "compute",
    "remaining_lifetime_need",
    "units_for",
]
