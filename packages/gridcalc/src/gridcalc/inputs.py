"""
Input models for the futures grid calculator.

GridInputs is the immutable parameter record a caller hands to
calculate_futures_grid(). Numeric fields are normalised to Decimal on
construction and their domains are checked up front, so the calculation
stages never see a zero grid count or an inverted price range.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Optional, Union

_ZERO = Decimal("0")
_ONE = Decimal("1")

Number = Union[Decimal, int, float, str]


class PositionSide(StrEnum):
    """Grid direction."""
    LONG = 'LONG'
    SHORT = 'SHORT'
    NEUTRAL = 'NEUTRAL'


@dataclass(frozen=True)
class AutoReserve:
    """Reserve is carved out of the investment at the computed reserve rate."""


@dataclass(frozen=True)
class ManualReserve:
    """
    Reserve is drawn from the account balance, separate from the investment.

    Attributes:
        amount: Explicit reserve in quote currency. When None the calculator
            suggests one from the available balance and the reserve rate.
    """
    amount: Optional[Decimal] = None

    def __post_init__(self):
        if self.amount is None:
            return
        amount = to_decimal(self.amount, "manual reserved margin")
        if amount < _ZERO:
            raise ValueError(f"manual reserved margin must be non-negative, got {amount}")
        object.__setattr__(self, "amount", amount)


ReservePolicy = AutoReserve | ManualReserve


def reserve_policy_from_flags(
    auto_reserve_margin: bool,
    manual_reserved_margin: Optional[Number] = None,
) -> ReservePolicy:
    """
    Build a reserve policy from the boolean + optional amount form.

    Forms usually collect the policy as a checkbox plus an optional amount
    field. The amount is ignored when auto reservation is selected.
    """
    if auto_reserve_margin:
        return AutoReserve()
    return ManualReserve(amount=manual_reserved_margin)


def to_decimal(value: Number, name: str) -> Decimal:
    """Convert a numeric input to Decimal (floats go through str())."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"{name} must be finite, got {value!r}")
    return result


@dataclass(frozen=True)
class GridInputs:
    """
    Parameters of a proposed futures grid.

    Attributes:
        lower_price: Bottom of the grid range
        upper_price: Top of the grid range (must be above lower_price)
        grid_count: Number of grid levels
        investment: Capital allocated to the grid (margin, not notional)
        leverage: Leverage multiplier, at least 1
        maintenance_margin_rate: Exchange maintenance requirement, in (0, 1)
        reserve_policy: AutoReserve() or ManualReserve(amount)
        position_side: LONG, SHORT or NEUTRAL
        entry_price: Reference entry price; defaults to the range midpoint
        available_balance: Account balance, used for validation and to size
            a suggested manual reserve
    """
    lower_price: Decimal
    upper_price: Decimal
    grid_count: int
    investment: Decimal
    leverage: Decimal
    maintenance_margin_rate: Decimal
    reserve_policy: ReservePolicy = field(default_factory=AutoReserve)
    position_side: PositionSide = PositionSide.LONG
    entry_price: Optional[Decimal] = None
    available_balance: Optional[Decimal] = None

    def __post_init__(self):
        """Normalise numeric fields and validate their domains."""
        for name in ("lower_price", "upper_price", "investment", "leverage", "maintenance_margin_rate"):
            object.__setattr__(self, name, to_decimal(getattr(self, name), name))
        for name in ("entry_price", "available_balance"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, to_decimal(value, name))

        if isinstance(self.grid_count, bool) or not isinstance(self.grid_count, int):
            raise ValueError(f"grid_count must be an integer, got {self.grid_count!r}")
        if not isinstance(self.reserve_policy, (AutoReserve, ManualReserve)):
            raise ValueError(f"reserve_policy must be AutoReserve or ManualReserve, got {self.reserve_policy!r}")
        try:
            object.__setattr__(self, "position_side", PositionSide(str(self.position_side).upper()))
        except ValueError as e:
            raise ValueError(f"position_side must be LONG, SHORT or NEUTRAL, got {self.position_side!r}") from e

        if self.lower_price <= _ZERO:
            raise ValueError(f"lower_price must be positive, got {self.lower_price}")
        if self.upper_price <= self.lower_price:
            raise ValueError(
                f"upper_price must be above lower_price, got {self.lower_price} - {self.upper_price}"
            )
        if self.grid_count <= 0:
            raise ValueError(f"grid_count must be positive, got {self.grid_count}")
        if self.investment <= _ZERO:
            raise ValueError(f"investment must be positive, got {self.investment}")
        if self.leverage < _ONE:
            raise ValueError(f"leverage must be at least 1, got {self.leverage}")
        if not (_ZERO < self.maintenance_margin_rate < _ONE):
            raise ValueError(
                f"maintenance_margin_rate must be between 0 and 1, got {self.maintenance_margin_rate}"
            )
        if self.entry_price is not None and self.entry_price <= _ZERO:
            raise ValueError(f"entry_price must be positive, got {self.entry_price}")
        if self.available_balance is not None and self.available_balance < _ZERO:
            raise ValueError(f"available_balance must be non-negative, got {self.available_balance}")

    @property
    def is_auto_reserve(self) -> bool:
        return isinstance(self.reserve_policy, AutoReserve)

    @property
    def manual_reserved_margin(self) -> Optional[Decimal]:
        """Explicit manual reserve, or None under auto policy / suggested reserve."""
        if isinstance(self.reserve_policy, ManualReserve):
            return self.reserve_policy.amount
        return None
