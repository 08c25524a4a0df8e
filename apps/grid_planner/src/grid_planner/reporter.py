"""Console and JSON output for grid plan outcomes.

Uses rich library for color-coded terminal tables.
Saves structured JSON to output/ directory.
"""

import json
import logging
from datetime import datetime, UTC
from decimal import Decimal
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from grid_planner.planner import PlanOutcome

logger = logging.getLogger(__name__)

console = Console()


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _format_value(val: Optional[Decimal], places: int = 2) -> str:
    """Format a value for display."""
    if val is None:
        return "-"
    return f"{val:,.{places}f}"


def _format_pct(val: Optional[Decimal]) -> str:
    if val is None:
        return "-"
    return f"{val:.2f}%"


def print_console(outcomes: list[PlanOutcome]) -> None:
    """Print plan outcomes to console with color coding."""
    console.print()
    console.rule("[bold]Grid Planner Results[/bold]")
    console.print()

    for outcome in outcomes:
        if outcome.accepted:
            _print_plan_table(outcome)
        else:
            _print_rejection(outcome)

    _print_verdict(outcomes)


def _plan_title(outcome: PlanOutcome) -> str:
    if outcome.symbol:
        return f"{outcome.name} ({outcome.symbol})"
    return outcome.name


def _print_plan_table(outcome: PlanOutcome) -> None:
    """Print a table for a single accepted plan."""
    inputs, results, summary = outcome.inputs, outcome.results, outcome.summary
    title = f"{_plan_title(outcome)} - {inputs.position_side}"
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Field", style="white", min_width=28)
    table.add_column("Value", justify="right", min_width=20)

    step_places = 4 if results.grid_step < Decimal("0.1") else 2
    table.add_row("Entry price", _format_value(results.entry_price))
    table.add_row("Grid step", _format_value(results.grid_step, step_places))
    table.add_row(
        "Profit per grid",
        f"{_format_pct(summary.profit_per_grid_low_pct)} - {_format_pct(summary.profit_per_grid_high_pct)}",
    )
    table.add_row("Position size", _format_value(results.position_size))
    table.add_row("Reserve rate", _format_pct(results.reserve_rate * 100))
    table.add_row("Reserved margin", _format_value(results.reserved_margin))
    table.add_row("Usable margin", _format_value(results.usable_margin))
    table.add_row("Maintenance margin", _format_value(results.maintenance_margin))
    table.add_row("Liquidation (long)", _format_value(results.liquidation_prices.long))
    table.add_row("  distance to lower", _format_pct(summary.long_liq_distance_pct))
    table.add_row("Liquidation (short)", _format_value(results.liquidation_prices.short))
    table.add_row("  distance to upper", _format_pct(summary.short_liq_distance_pct))
    table.add_row("Total capital required", _format_value(summary.total_capital_required))
    table.add_row("Balance after allocation", _format_value(summary.balance_after_allocation))

    console.print(table)
    for warning in results.warnings:
        console.print(Text(f"  ! {warning}", style="bold yellow"))
    console.print()


def _print_rejection(outcome: PlanOutcome) -> None:
    """Print a rejected plan with its message."""
    console.print(Text(f"{_plan_title(outcome)}: REJECTED", style="bold red"))
    console.print(f"  {outcome.error}")
    console.print()


def _print_verdict(outcomes: list[PlanOutcome]) -> None:
    """Print final accepted/rejected counts."""
    accepted = sum(1 for o in outcomes if o.accepted)
    rejected = len(outcomes) - accepted
    warned = sum(1 for o in outcomes if o.accepted and o.results.warnings)
    if rejected == 0:
        console.print(f"[bold green]ALL PLANS ACCEPTED[/bold green] ({accepted}/{len(outcomes)})")
    else:
        console.print(f"[bold red]PLANS REJECTED[/bold red] ({rejected} of {len(outcomes)})")
    if warned:
        console.print(f"[yellow]{warned} plan(s) with liquidation inside the grid range[/yellow]")
    console.print()


def outcome_to_dict(outcome: PlanOutcome) -> dict:
    """Convert a PlanOutcome to a JSON-serializable dict."""
    data = {
        "name": outcome.name,
        "symbol": outcome.symbol,
        "accepted": outcome.accepted,
        "error": outcome.error,
    }
    if outcome.inputs is not None:
        inputs = outcome.inputs
        data["inputs"] = {
            "lower_price": inputs.lower_price,
            "upper_price": inputs.upper_price,
            "grid_count": inputs.grid_count,
            "investment": inputs.investment,
            "leverage": inputs.leverage,
            "maintenance_margin_rate": inputs.maintenance_margin_rate,
            "auto_reserve_margin": inputs.is_auto_reserve,
            "manual_reserved_margin": inputs.manual_reserved_margin,
            "position_side": str(inputs.position_side),
            "entry_price": inputs.entry_price,
            "available_balance": inputs.available_balance,
        }
    if outcome.results is not None:
        results = outcome.results
        data["results"] = {
            "entry_price": results.entry_price,
            "grid_step": results.grid_step,
            "position_size": results.position_size,
            "maintenance_margin": results.maintenance_margin,
            "liquidation_prices": results.liquidation_prices.as_dict(),
            "reserved_margin": results.reserved_margin,
            "usable_margin": results.usable_margin,
            "reserve_rate": results.reserve_rate,
            "warnings": list(results.warnings),
        }
    if outcome.summary is not None:
        summary = outcome.summary
        data["summary"] = {
            "profit_per_grid_low_pct": summary.profit_per_grid_low_pct,
            "profit_per_grid_high_pct": summary.profit_per_grid_high_pct,
            "long_liq_distance_pct": summary.long_liq_distance_pct,
            "short_liq_distance_pct": summary.short_liq_distance_pct,
            "total_capital_required": summary.total_capital_required,
            "balance_after_allocation": summary.balance_after_allocation,
        }
    return data


def save_json(outcomes: list[PlanOutcome], output_dir: str = "output") -> str:
    """Save plan outcomes to a JSON file.

    Args:
        outcomes: Evaluated plans
        output_dir: Directory for output files

    Returns:
        Path to the saved JSON file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    filepath = output_path / f"grid_plan_{timestamp}.json"

    accepted = sum(1 for o in outcomes if o.accepted)
    data = {
        "timestamp": datetime.now(UTC).isoformat(),
        "summary": {
            "total": len(outcomes),
            "accepted": accepted,
            "rejected": len(outcomes) - accepted,
        },
        "plans": [outcome_to_dict(o) for o in outcomes],
    }

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, cls=_DecimalEncoder)

    logger.debug(f"Saved {len(outcomes)} plan outcomes to {filepath}")
    console.print(f"Results saved to [bold]{filepath}[/bold]")
    return str(filepath)
