"""Result models produced by the futures grid calculator."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LiquidationPrices:
    """
    Estimated liquidation prices per side.

    LONG and SHORT grids populate one field, NEUTRAL grids populate both.
    """
    long: Optional[Decimal] = None
    short: Optional[Decimal] = None

    def as_dict(self) -> dict[str, Decimal]:
        """Populated sides only, keyed 'long' / 'short'."""
        prices = {}
        if self.long is not None:
            prices['long'] = self.long
        if self.short is not None:
            prices['short'] = self.short
        return prices


@dataclass(frozen=True)
class GridResults:
    """
    Sizing and risk figures for a grid configuration.

    Attributes:
        grid_step: Price distance between adjacent grid levels
        position_size: Total notional exposure (investment * leverage)
        maintenance_margin: Maintenance requirement in quote currency
        liquidation_prices: Estimated liquidation price(s)
        reserved_margin: Margin held back as a safety buffer
        usable_margin: Margin available to the grid orders
        reserve_rate: Risk-scaled reserve fraction, within [0.10, 0.35]
        entry_price: Reference entry price the estimates are based on
        warnings: Non-fatal advisories, in the order they were raised
    """
    grid_step: Decimal
    position_size: Decimal
    maintenance_margin: Decimal
    liquidation_prices: LiquidationPrices
    reserved_margin: Decimal
    usable_margin: Decimal
    reserve_rate: Decimal
    entry_price: Decimal
    warnings: tuple[str, ...] = ()
