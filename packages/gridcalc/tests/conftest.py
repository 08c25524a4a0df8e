"""Shared fixtures for gridcalc tests."""

from decimal import Decimal

import pytest

from gridcalc.inputs import AutoReserve, GridInputs, PositionSide


@pytest.fixture
def make_inputs():
    """Factory for GridInputs.

    Defaults to a BTC-like 50000-60000 grid, 50 levels, 1000 USDT at 10x,
    0.4% maintenance rate, auto reserve, LONG. Keyword arguments override.
    """
    def _make(**overrides) -> GridInputs:
        params = dict(
            lower_price=Decimal("50000"),
            upper_price=Decimal("60000"),
            grid_count=50,
            investment=Decimal("1000"),
            leverage=Decimal("10"),
            maintenance_margin_rate=Decimal("0.004"),
            reserve_policy=AutoReserve(),
            position_side=PositionSide.LONG,
        )
        params.update(overrides)
        return GridInputs(**params)

    return _make
