"""Configuration models for grid_planner.

Loads grid plans from a YAML file with Pydantic validation.
"""

import os
import re
from decimal import Decimal
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from gridcalc.inputs import GridInputs, PositionSide, reserve_policy_from_flags

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{4,20}$")


def _parse_decimal(v):
    """Convert str/float inputs to Decimal without float noise."""
    if isinstance(v, (str, float)):
        return Decimal(str(v))
    return v


class GridPlanConfig(BaseModel):
    """A single proposed futures grid."""

    name: str = Field(..., min_length=1, description="Plan label used in reports")
    symbol: Optional[str] = Field(default=None, description="Trading pair (e.g., BTCUSDT)")

    # Range and levels
    lower_price: Decimal = Field(..., gt=0, description="Bottom of the grid range")
    upper_price: Decimal = Field(..., gt=0, description="Top of the grid range")
    grid_count: int = Field(..., gt=0, description="Number of grid levels")

    # Capital
    investment: Decimal = Field(..., gt=0, description="Margin allocated to the grid in USDT")
    leverage: Decimal = Field(default=Decimal("1"), ge=1, description="Position leverage")
    maintenance_margin_rate: Decimal = Field(
        default=Decimal("0.005"),
        gt=0,
        lt=1,
        description="Maintenance margin rate (0.005 = 0.5%)",
    )
    direction: PositionSide = Field(default=PositionSide.LONG, description="LONG, SHORT or NEUTRAL")

    # Reserve
    auto_reserve_margin: bool = Field(default=True, description="Carve the reserve out of the investment")
    manual_reserved_margin: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Reserve drawn from the balance when auto_reserve_margin is false",
    )

    entry_price: Optional[Decimal] = Field(default=None, gt=0, description="Defaults to the range midpoint")
    available_balance: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Overrides the top-level available_balance for this plan",
    )

    @field_validator("symbol")
    @classmethod
    def validate_symbol_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not _SYMBOL_PATTERN.match(v):
            raise ValueError(
                f"Invalid symbol format '{v}'. "
                "Expected uppercase alphanumeric, 4-20 chars (e.g., BTCUSDT)."
            )
        return v

    @field_validator(
        "lower_price", "upper_price", "investment", "leverage", "maintenance_margin_rate",
        "manual_reserved_margin", "entry_price", "available_balance",
        mode="before",
    )
    @classmethod
    def parse_decimals(cls, v):
        return _parse_decimal(v)

    @field_validator("direction", mode="before")
    @classmethod
    def parse_direction(cls, v):
        """Accept lowercase direction names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def check_price_range(self):
        if self.lower_price >= self.upper_price:
            raise ValueError(
                f"lower_price ({self.lower_price}) must be below upper_price ({self.upper_price})"
            )
        return self

    def to_inputs(self, default_balance: Optional[Decimal] = None) -> GridInputs:
        """Build calculator inputs, falling back to the account-level balance."""
        balance = self.available_balance if self.available_balance is not None else default_balance
        return GridInputs(
            lower_price=self.lower_price,
            upper_price=self.upper_price,
            grid_count=self.grid_count,
            investment=self.investment,
            leverage=self.leverage,
            maintenance_margin_rate=self.maintenance_margin_rate,
            reserve_policy=reserve_policy_from_flags(self.auto_reserve_margin, self.manual_reserved_margin),
            position_side=self.direction,
            entry_price=self.entry_price,
            available_balance=balance,
        )


class GridPlannerConfig(BaseModel):
    """Root configuration for grid_planner."""

    available_balance: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Account balance in USDT shared by all plans",
    )
    plans: list[GridPlanConfig] = Field(..., min_length=1)

    @field_validator("available_balance", mode="before")
    @classmethod
    def parse_available_balance(cls, v):
        return _parse_decimal(v)

    @model_validator(mode="after")
    def check_unique_names(self):
        names = [p.name for p in self.plans]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate plan names: {', '.join(duplicates)}")
        return self


def load_config(config_path: Optional[str] = None) -> GridPlannerConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, checks:
            1. GRID_PLANNER_CONFIG_PATH environment variable
            2. apps/grid_planner/conf/grid_planner.yaml

    Returns:
        Validated GridPlannerConfig

    Raises:
        FileNotFoundError: If no config file found
        ValueError: If config validation fails
    """
    if config_path is None:
        config_path = os.environ.get("GRID_PLANNER_CONFIG_PATH")

    if config_path is None:
        search_paths = [
            Path(__file__).resolve().parents[2] / "conf" / "grid_planner.yaml",
            Path("apps/grid_planner/conf/grid_planner.yaml"),
            Path("conf/grid_planner.yaml"),  # apps/grid_planner cwd
            Path("grid_planner.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is None:
        raise FileNotFoundError(
            "No config file found. Set GRID_PLANNER_CONFIG_PATH or create apps/grid_planner/conf/grid_planner.yaml"
        )

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return GridPlannerConfig(**data)
