"""Run configured grid plans through the calculator."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from gridcalc.calculator import calculate_futures_grid
from gridcalc.inputs import GridInputs
from gridcalc.metrics import GridSummary, summarize
from gridcalc.results import GridResults

from grid_planner.config import GridPlanConfig, GridPlannerConfig

logger = logging.getLogger(__name__)


@dataclass
class PlanOutcome:
    """Result of evaluating one plan: either results or a rejection message."""

    name: str
    symbol: Optional[str] = None
    inputs: Optional[GridInputs] = None
    results: Optional[GridResults] = None
    summary: Optional[GridSummary] = None
    error: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def evaluate_plan(plan: GridPlanConfig, default_balance: Optional[Decimal] = None) -> PlanOutcome:
    """Calculate one plan, capturing rejections as the outcome's error."""
    outcome = PlanOutcome(name=plan.name, symbol=plan.symbol)
    try:
        outcome.inputs = plan.to_inputs(default_balance)
        outcome.results = calculate_futures_grid(outcome.inputs)
    except ValueError as e:
        logger.info(f"Plan '{plan.name}' rejected: {e}")
        outcome.error = str(e)
        return outcome

    outcome.summary = summarize(outcome.results, outcome.inputs)
    logger.info(
        f"Plan '{plan.name}': size={outcome.results.position_size} "
        f"reserved={outcome.results.reserved_margin} liq={outcome.results.liquidation_prices.as_dict()}"
    )
    return outcome


def evaluate_plans(config: GridPlannerConfig) -> list[PlanOutcome]:
    """Evaluate every configured plan in order."""
    return [evaluate_plan(plan, config.available_balance) for plan in config.plans]
