"""Futures grid sizing, reserve and liquidation calculations.

The stage functions below are pure (no side effects, no state) and use
Decimal for precision. calculate_futures_grid() runs them in order:

1. entry price and grid step
2. position size
3. reserve rate, reserved and usable margin
4. maintenance margin and liquidation price(s)
5. validation (raises) and warnings

The reserve-rate and liquidation formulas are heuristic estimates assuming
isolated margin and a single average entry price; they are not
exchange-exact. Warnings and rejections are calibrated to these constants.
"""

import logging
from decimal import Decimal
from typing import Optional

from gridcalc.errors import (
    GridValidationError,
    InsufficientMargin,
    InvalidCapitalBounds,
    NegativeUsableMargin,
)
from gridcalc.inputs import AutoReserve, GridInputs, PositionSide, ReservePolicy
from gridcalc.results import GridResults, LiquidationPrices

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_ONE = Decimal("1")
_TWO = Decimal("2")

# reserve_rate = 0.08 + grid_count / 600 + leverage / 25 + (range / entry) * 0.5
RESERVE_RATE_BASE = Decimal("0.08")
RESERVE_GRID_COUNT_DIVISOR = Decimal("600")
RESERVE_LEVERAGE_DIVISOR = Decimal("25")
RESERVE_RANGE_WEIGHT = Decimal("0.5")
MIN_RESERVE_RATE = Decimal("0.10")
MAX_RESERVE_RATE = Decimal("0.35")

LONG_IN_RANGE_WARNING = 'Liquidation price (LONG) is within the grid range!'
SHORT_IN_RANGE_WARNING = 'Liquidation price (SHORT) is within the grid range!'


def resolve_entry_price(
    lower_price: Decimal, upper_price: Decimal, entry_price: Optional[Decimal] = None
) -> Decimal:
    """Reference entry price: the supplied one, else the range midpoint."""
    if entry_price is not None:
        return entry_price
    return (lower_price + upper_price) / _TWO


def calc_grid_step(lower_price: Decimal, upper_price: Decimal, grid_count: int) -> Decimal:
    """
    Price distance between adjacent grid levels.

    Formula: (upper_price - lower_price) / grid_count. Not rounded.

    Raises:
        ValueError: If grid_count is not positive
    """
    if grid_count <= 0:
        raise ValueError(f"grid_count must be positive, got {grid_count}")
    return (upper_price - lower_price) / Decimal(grid_count)


def calc_position_size(investment: Decimal, leverage: Decimal) -> Decimal:
    """
    Total notional exposure: investment * leverage.

    Reserved margin does not reduce the position size.
    """
    return investment * leverage


def calc_reserve_rate(
    grid_count: int,
    leverage: Decimal,
    lower_price: Decimal,
    upper_price: Decimal,
    entry_price: Decimal,
) -> Decimal:
    """
    Risk-scaled fraction of capital to hold back as a safety buffer.

    Formula:
        0.08 + grid_count / 600 + leverage / 25
             + ((upper_price - lower_price) / entry_price) * 0.5

    clamped to [0.10, 0.35]. More grid levels, higher leverage and a wider
    range each raise the buffer.

    Args:
        grid_count: Number of grid levels
        leverage: Position leverage
        lower_price: Bottom of the grid range
        upper_price: Top of the grid range
        entry_price: Reference entry price

    Returns:
        Reserve rate as a fraction (0.25 = 25%)
    """
    if entry_price <= _ZERO:
        raise ValueError(f"entry_price must be positive, got {entry_price}")
    rate = (
        RESERVE_RATE_BASE
        + Decimal(grid_count) / RESERVE_GRID_COUNT_DIVISOR
        + leverage / RESERVE_LEVERAGE_DIVISOR
        + (upper_price - lower_price) / entry_price * RESERVE_RANGE_WEIGHT
    )
    return max(MIN_RESERVE_RATE, min(MAX_RESERVE_RATE, rate))


def calc_reserved_margin(
    policy: ReservePolicy,
    investment: Decimal,
    reserve_rate: Decimal,
    available_balance: Optional[Decimal] = None,
) -> tuple[Decimal, Decimal]:
    """
    Split capital into reserved and usable margin.

    Auto:   reserved = investment * reserve_rate, usable = investment - reserved.
            The reserve is carved out of the investment.
    Manual: reserved = explicit amount, else min(balance * reserve_rate, balance)
            when the balance is known, else 0. usable = investment, because
            the reserve comes from the balance rather than the investment.

    Returns:
        (reserved_margin, usable_margin)
    """
    if isinstance(policy, AutoReserve):
        reserved = investment * reserve_rate
        return reserved, investment - reserved

    if policy.amount is not None:
        reserved = policy.amount
    elif available_balance:
        reserved = min(available_balance * reserve_rate, available_balance)
    else:
        reserved = _ZERO
    return reserved, investment


def calc_maintenance_margin(position_size: Decimal, maintenance_margin_rate: Decimal) -> Decimal:
    """Maintenance requirement: position_size * maintenance_margin_rate."""
    return position_size * maintenance_margin_rate


def calc_margin_ratio_with_reserve(
    leverage: Decimal, reserved_margin: Decimal, position_size: Decimal
) -> Decimal:
    """
    Fraction of notional that can be lost before the combined leverage and
    reserve buffer is exhausted: 1 / leverage + reserved_margin / position_size.
    """
    if position_size <= _ZERO:
        raise ValueError(f"position_size must be positive, got {position_size}")
    return _ONE / leverage + reserved_margin / position_size


def calc_liquidation_prices(
    position_side: PositionSide,
    entry_price: Decimal,
    margin_ratio_with_reserve: Decimal,
    maintenance_margin_rate: Decimal,
) -> LiquidationPrices:
    """
    Estimate liquidation price(s).

    Long:  entry * (1 - margin_ratio_with_reserve + mmr)
    Short: entry * (1 + margin_ratio_with_reserve - mmr)

    A NEUTRAL grid holds both a long and a short sub-position, so both
    prices are returned.
    """
    long_price = None
    short_price = None
    if position_side in (PositionSide.LONG, PositionSide.NEUTRAL):
        long_price = entry_price * (_ONE - margin_ratio_with_reserve + maintenance_margin_rate)
    if position_side in (PositionSide.SHORT, PositionSide.NEUTRAL):
        short_price = entry_price * (_ONE + margin_ratio_with_reserve - maintenance_margin_rate)
    return LiquidationPrices(long=long_price, short=short_price)


def calc_funded_margin(
    policy: ReservePolicy,
    usable_margin: Decimal,
    available_balance: Optional[Decimal] = None,
) -> Decimal:
    """
    Usable margin left once an explicit manual reserve with nowhere else to
    come from is charged to the investment.

    With a known balance the manual reserve is drawn from the balance (the
    capital bounds check caps it), and a suggested reserve is derived from
    the balance in the first place, so both leave usable_margin intact.
    Only an explicit amount with no balance to draw on has to come out of
    the investment. Under the auto policy this is simply usable_margin.
    """
    if isinstance(policy, AutoReserve) or policy.amount is None or available_balance is not None:
        return usable_margin
    return usable_margin - policy.amount


def validate(
    inputs: GridInputs,
    usable_margin: Decimal,
    maintenance_margin: Decimal,
) -> None:
    """
    Reject configurations that violate capital sufficiency.

    Checks run in order and the first failure is raised.

    Raises:
        InvalidCapitalBounds: Investment or manual reserve exceeds the balance
        NegativeUsableMargin: Reserve consumes more than the investment
        InsufficientMargin: Usable margin does not exceed maintenance margin
    """
    balance = inputs.available_balance
    manual_amount = inputs.manual_reserved_margin

    if balance is not None:
        if inputs.investment > balance:
            raise InvalidCapitalBounds(
                f"Investment ({inputs.investment}) exceeds available balance ({balance})"
            )
        if manual_amount is not None and manual_amount > balance:
            raise InvalidCapitalBounds(
                f"Reserved margin ({manual_amount}) exceeds available balance ({balance})"
            )

    funded = calc_funded_margin(inputs.reserve_policy, usable_margin, balance)
    if funded < _ZERO:
        raise NegativeUsableMargin("Reserved margin exceeds investment")
    if funded <= maintenance_margin:
        raise InsufficientMargin("Insufficient usable margin for maintenance")


def collect_warnings(
    liquidation_prices: LiquidationPrices, lower_price: Decimal, upper_price: Decimal
) -> list[str]:
    """Advisories for liquidation prices that fall inside the grid range."""
    warnings = []
    if liquidation_prices.long is not None and liquidation_prices.long >= lower_price:
        warnings.append(LONG_IN_RANGE_WARNING)
    if liquidation_prices.short is not None and liquidation_prices.short <= upper_price:
        warnings.append(SHORT_IN_RANGE_WARNING)
    return warnings


def calculate_futures_grid(inputs: GridInputs) -> GridResults:
    """
    Compute sizing and risk figures for a futures grid.

    Args:
        inputs: Validated grid parameters

    Returns:
        Fully populated GridResults

    Raises:
        InvalidCapitalBounds, NegativeUsableMargin, InsufficientMargin:
            The configuration is rejected. No partial result is produced.
    """
    entry_price = resolve_entry_price(inputs.lower_price, inputs.upper_price, inputs.entry_price)
    grid_step = calc_grid_step(inputs.lower_price, inputs.upper_price, inputs.grid_count)

    position_size = calc_position_size(inputs.investment, inputs.leverage)

    reserve_rate = calc_reserve_rate(
        inputs.grid_count, inputs.leverage, inputs.lower_price, inputs.upper_price, entry_price
    )
    reserved_margin, usable_margin = calc_reserved_margin(
        inputs.reserve_policy, inputs.investment, reserve_rate, inputs.available_balance
    )

    maintenance_margin = calc_maintenance_margin(position_size, inputs.maintenance_margin_rate)
    margin_ratio = calc_margin_ratio_with_reserve(inputs.leverage, reserved_margin, position_size)
    liquidation_prices = calc_liquidation_prices(
        inputs.position_side, entry_price, margin_ratio, inputs.maintenance_margin_rate
    )

    logger.debug(
        "Grid %s %s-%s x%s: entry=%s step=%s size=%s reserve_rate=%s reserved=%s usable=%s mm=%s liq=%s",
        inputs.position_side, inputs.lower_price, inputs.upper_price, inputs.leverage,
        entry_price, grid_step, position_size, reserve_rate, reserved_margin,
        usable_margin, maintenance_margin, liquidation_prices.as_dict(),
    )

    try:
        validate(inputs, usable_margin, maintenance_margin)
    except GridValidationError as e:
        logger.warning("Grid configuration rejected: %s", e)
        raise

    warnings = collect_warnings(liquidation_prices, inputs.lower_price, inputs.upper_price)
    for warning in warnings:
        logger.warning("%s liq=%s range=%s-%s", warning, liquidation_prices.as_dict(),
                       inputs.lower_price, inputs.upper_price)

    return GridResults(
        grid_step=grid_step,
        position_size=position_size,
        maintenance_margin=maintenance_margin,
        liquidation_prices=liquidation_prices,
        reserved_margin=reserved_margin,
        usable_margin=usable_margin,
        reserve_rate=reserve_rate,
        entry_price=entry_price,
        warnings=tuple(warnings),
    )
