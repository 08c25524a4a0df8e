"""
gridcalc - Pure futures grid sizing and risk calculations.

Turns a proposed futures grid (price range, leverage, capital, grid count,
direction) into position size, reserved and usable margin, maintenance
margin and estimated liquidation price(s). No I/O, no exchange dependencies.
"""

from gridcalc.inputs import (
    GridInputs,
    PositionSide,
    AutoReserve,
    ManualReserve,
    ReservePolicy,
    reserve_policy_from_flags,
)
from gridcalc.results import GridResults, LiquidationPrices
from gridcalc.errors import (
    GridValidationError,
    InvalidCapitalBounds,
    InsufficientMargin,
    NegativeUsableMargin,
)
from gridcalc.calculator import (
    calculate_futures_grid,
    resolve_entry_price,
    calc_grid_step,
    calc_position_size,
    calc_reserve_rate,
    calc_reserved_margin,
    calc_maintenance_margin,
    calc_margin_ratio_with_reserve,
    calc_liquidation_prices,
    calc_funded_margin,
)
from gridcalc.metrics import (
    GridSummary,
    summarize,
    profit_per_grid_range,
    liquidation_distance_pct,
    total_capital_required,
    balance_after_allocation,
    max_manual_reserve,
    investment_from_allocation,
)

__version__ = "0.1.0"

__all__ = [
    "GridInputs",
    "PositionSide",
    "AutoReserve",
    "ManualReserve",
    "ReservePolicy",
    "reserve_policy_from_flags",
    "GridResults",
    "LiquidationPrices",
    "GridValidationError",
    "InvalidCapitalBounds",
    "InsufficientMargin",
    "NegativeUsableMargin",
    "calculate_futures_grid",
    "resolve_entry_price",
    "calc_grid_step",
    "calc_position_size",
    "calc_reserve_rate",
    "calc_reserved_margin",
    "calc_maintenance_margin",
    "calc_margin_ratio_with_reserve",
    "calc_liquidation_prices",
    "calc_funded_margin",
    "GridSummary",
    "summarize",
    "profit_per_grid_range",
    "liquidation_distance_pct",
    "total_capital_required",
    "balance_after_allocation",
    "max_manual_reserve",
    "investment_from_allocation",
]
