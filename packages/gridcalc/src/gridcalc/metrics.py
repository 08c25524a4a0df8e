"""Planning figures derived from a calculated grid.

These are the secondary numbers a grid creation form shows next to the
core results: profit per grid, distance to liquidation, and how much of
the account balance the grid ties up.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from gridcalc.inputs import GridInputs
from gridcalc.results import GridResults

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class GridSummary:
    """
    Derived planning figures for one grid.

    Attributes:
        profit_per_grid_low_pct: grid_step as % of upper_price
        profit_per_grid_high_pct: grid_step as % of lower_price
        long_liq_distance_pct: Long liquidation vs lower_price, in % (negative = below range)
        short_liq_distance_pct: Short liquidation vs upper_price, in % (positive = above range)
        total_capital_required: Capital the grid ties up, reserve included
        balance_after_allocation: Balance left once the grid is funded
    """
    profit_per_grid_low_pct: Decimal
    profit_per_grid_high_pct: Decimal
    long_liq_distance_pct: Optional[Decimal]
    short_liq_distance_pct: Optional[Decimal]
    total_capital_required: Decimal
    balance_after_allocation: Optional[Decimal]


def profit_per_grid_range(results: GridResults, inputs: GridInputs) -> tuple[Decimal, Decimal]:
    """
    Gross profit of one grid step, as a percentage of price.

    The same step is a smaller fraction at the top of the range than at the
    bottom, so this returns (step / upper * 100, step / lower * 100).
    """
    return (
        results.grid_step / inputs.upper_price * _HUNDRED,
        results.grid_step / inputs.lower_price * _HUNDRED,
    )


def liquidation_distance_pct(
    results: GridResults, inputs: GridInputs
) -> tuple[Optional[Decimal], Optional[Decimal]]:
    """
    Signed distance of each liquidation price from the nearest range bound.

    Long:  (long_liq - lower_price) / lower_price * 100
    Short: (short_liq - upper_price) / upper_price * 100

    A safe long grid has a negative long distance and a safe short grid a
    positive short distance. Sides without a liquidation price return None.
    """
    prices = results.liquidation_prices
    long_distance = None
    short_distance = None
    if prices.long is not None:
        long_distance = (prices.long - inputs.lower_price) / inputs.lower_price * _HUNDRED
    if prices.short is not None:
        short_distance = (prices.short - inputs.upper_price) / inputs.upper_price * _HUNDRED
    return long_distance, short_distance


def total_capital_required(results: GridResults, inputs: GridInputs) -> Decimal:
    """
    Capital the grid ties up.

    Under auto reservation the reserve is part of the investment; under
    manual reservation it comes on top of it.
    """
    if inputs.is_auto_reserve:
        return inputs.investment
    return inputs.investment + results.reserved_margin


def balance_after_allocation(results: GridResults, inputs: GridInputs) -> Optional[Decimal]:
    """Available balance minus total capital required, or None without a balance."""
    if inputs.available_balance is None:
        return None
    return inputs.available_balance - total_capital_required(results, inputs)


def max_manual_reserve(investment: Decimal, available_balance: Decimal) -> Decimal:
    """Largest manual reserve the balance can fund next to the investment."""
    return max(_ZERO, available_balance - investment)


def investment_from_allocation(available_balance: Decimal, percent: Decimal) -> Decimal:
    """
    Investment for a capital allocation given as % of the available balance.

    Raises:
        ValueError: If percent is outside [0, 100]
    """
    percent = Decimal(str(percent))
    if not (_ZERO <= percent <= _HUNDRED):
        raise ValueError(f"allocation percent must be between 0 and 100, got {percent}")
    return available_balance * percent / _HUNDRED


def summarize(results: GridResults, inputs: GridInputs) -> GridSummary:
    """Bundle the derived planning figures for a calculated grid."""
    low_pct, high_pct = profit_per_grid_range(results, inputs)
    long_distance, short_distance = liquidation_distance_pct(results, inputs)
    return GridSummary(
        profit_per_grid_low_pct=low_pct,
        profit_per_grid_high_pct=high_pct,
        long_liq_distance_pct=long_distance,
        short_liq_distance_pct=short_distance,
        total_capital_required=total_capital_required(results, inputs),
        balance_after_allocation=balance_after_allocation(results, inputs),
    )
