"""Invariants that hold across many grid configurations."""

from decimal import Decimal

import pytest

from gridcalc.calculator import MAX_RESERVE_RATE, MIN_RESERVE_RATE, calculate_futures_grid
from gridcalc.inputs import AutoReserve, ManualReserve, PositionSide
from gridcalc.metrics import liquidation_distance_pct

TOLERANCE = Decimal("1E-12")

# (lower, upper, grid_count, investment, leverage, mmr)
CONFIGS = [
    ("50000", "60000", 50, "1000", "10", "0.004"),
    ("3000", "3500", 25, "500", "5", "0.01"),
    ("45000", "55000", 40, "2000", "3", "0.005"),
    ("0.05", "0.09", 7, "150", "2", "0.02"),
    ("100", "101", 3, "10", "1", "0.001"),
    ("30000", "40000", 100, "5000", "5", "0.005"),
    ("1", "1000000", 10000, "100", "125", "0.001"),
]


def _config_inputs(make_inputs, config, **overrides):
    lower, upper, grid_count, investment, leverage, mmr = config
    params = dict(
        lower_price=Decimal(lower),
        upper_price=Decimal(upper),
        grid_count=grid_count,
        investment=Decimal(investment),
        leverage=Decimal(leverage),
        maintenance_margin_rate=Decimal(mmr),
    )
    params.update(overrides)
    return make_inputs(**params)


@pytest.mark.parametrize("config", CONFIGS)
class TestInvariants:
    """Properties of every accepted configuration."""

    def test_grid_step_covers_range(self, make_inputs, config):
        inputs = _config_inputs(make_inputs, config)
        result = calculate_futures_grid(inputs)
        span = inputs.upper_price - inputs.lower_price
        assert abs(result.grid_step * inputs.grid_count - span) < TOLERANCE

    def test_reserve_rate_bounded(self, make_inputs, config):
        result = calculate_futures_grid(_config_inputs(make_inputs, config))
        assert MIN_RESERVE_RATE <= result.reserve_rate <= MAX_RESERVE_RATE

    def test_position_size_exact(self, make_inputs, config):
        inputs = _config_inputs(make_inputs, config)
        result = calculate_futures_grid(inputs)
        assert result.position_size == inputs.investment * inputs.leverage

    def test_auto_reserve_plus_usable_is_investment(self, make_inputs, config):
        inputs = _config_inputs(make_inputs, config, reserve_policy=AutoReserve())
        result = calculate_futures_grid(inputs)
        assert abs(result.reserved_margin + result.usable_margin - inputs.investment) < TOLERANCE

    @pytest.mark.parametrize("fraction", ["0", "0.05", "0.3"])
    def test_manual_usable_is_investment(self, make_inputs, config, fraction):
        investment = Decimal(config[3])
        amount = investment * Decimal(fraction)
        inputs = _config_inputs(
            make_inputs, config,
            reserve_policy=ManualReserve(amount),
            available_balance=investment * 3,
        )
        result = calculate_futures_grid(inputs)
        assert result.reserved_margin == amount
        assert result.usable_margin == inputs.investment

    @pytest.mark.parametrize("side,has_long,has_short", [
        (PositionSide.LONG, True, False),
        (PositionSide.SHORT, False, True),
        (PositionSide.NEUTRAL, True, True),
    ])
    def test_sides_populated(self, make_inputs, config, side, has_long, has_short):
        result = calculate_futures_grid(_config_inputs(make_inputs, config, position_side=side))
        assert (result.liquidation_prices.long is not None) == has_long
        assert (result.liquidation_prices.short is not None) == has_short


class TestRangeWidthSafety:
    """Widening the range raises the reserve, pushing liquidation away from entry."""

    # 12 grids at 2x keeps the reserve rate below the cap for the narrower ranges
    WIDTHS = [
        ("54500", "55500"),
        ("54000", "56000"),
        ("52000", "58000"),
        ("50000", "60000"),
        ("45000", "65000"),
    ]

    def _long_result(self, make_inputs, lower, upper):
        inputs = make_inputs(
            lower_price=Decimal(lower),
            upper_price=Decimal(upper),
            grid_count=12,
            leverage=Decimal("2"),
            maintenance_margin_rate=Decimal("0.005"),
            entry_price=Decimal("55000"),
        )
        return inputs, calculate_futures_grid(inputs)

    def test_liquidation_distance_below_entry_non_decreasing(self, make_inputs):
        distances = []
        for lower, upper in self.WIDTHS:
            _, result = self._long_result(make_inputs, lower, upper)
            distances.append((result.entry_price - result.liquidation_prices.long) / result.entry_price)
        assert distances == sorted(distances)
        assert distances[0] < distances[-1]

    def test_wider_range_moves_liquidation_further_below_lower_price(self, make_inputs):
        narrow_inputs, narrow = self._long_result(make_inputs, "54000", "56000")
        wide_inputs, wide = self._long_result(make_inputs, "50000", "60000")

        narrow_distance, _ = liquidation_distance_pct(narrow, narrow_inputs)
        wide_distance, _ = liquidation_distance_pct(wide, wide_inputs)

        assert wide.liquidation_prices.long < narrow.liquidation_prices.long
        assert narrow_distance < 0
        assert wide_distance < 0
        assert wide_distance < narrow_distance
        assert wide.liquidation_prices.long < wide_inputs.lower_price
