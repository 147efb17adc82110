"""Rich tables for conversion plans and rebalance plans."""

from decimal import Decimal
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from conversion_engine.core.constants import MAX_UINT256, RESULT_DECIMALS
from conversion_engine.core.fixed_point import from_units
from conversion_engine.core.models import (
    ConversionPlan,
    MarketSnapshot,
    RebalanceDirection,
    RebalancePlan,
)
from conversion_engine.engine.selector import RankedPlan


class PlanReport:
    """
    Renders plans as rich tables with human-readable amounts.

    Amounts are shown in whole tokens of the market they belong to,
    plan figures in whole borrow tokens.
    """

    RANKING_COLUMNS = [
        ("#", 3),
        ("Platform", 12),
        ("Collateral", 16),
        ("Borrow", 16),
        ("Max Borrow", 16),
        ("Cost", 14),
        ("Income", 14),
        ("APR", 9),
    ]

    def __init__(self, collateral_market: MarketSnapshot, borrow_market: MarketSnapshot):
        self.collateral_market = collateral_market
        self.borrow_market = borrow_market

    def _format_amount(self, value: int, market: MarketSnapshot) -> str:
        if value == MAX_UINT256:
            return "unlimited"
        return f"{from_units(value, market.decimals):,.4f}"

    def _format_figure36(self, value: int) -> str:
        return f"{from_units(value, RESULT_DECIMALS):,.6f}"

    @staticmethod
    def _format_ratio(value: int) -> str:
        return f"{float(from_units(value, 18)) * 100:.2f}%"

    @staticmethod
    def _format_health_factor(value: int) -> Text:
        """Format a health factor with color coding."""
        if value == MAX_UINT256:
            return Text("∞", style="green")

        hf = from_units(value, 18)
        if hf < Decimal("1"):
            style = "red bold"
        elif hf < Decimal("1.1"):
            style = "yellow"
        else:
            style = "green"
        return Text(f"{hf:.4f}", style=style)

    @staticmethod
    def _format_apr(apr18: int) -> Text:
        pct = float(from_units(apr18, 18)) * 100
        # Negative APR means the supply income exceeds the borrow cost
        return Text(f"{pct:.2f}%", style="green" if apr18 <= 0 else "red")

    def plan_table(self, plan: ConversionPlan) -> Table:
        """Build a two-column table describing one conversion plan."""
        table = Table(
            title=f"{self.collateral_market.asset.name} -> {self.borrow_market.asset.name}",
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Field", style="cyan")
        table.add_column("Value", justify="right")

        if plan.is_null:
            table.add_row("Plan", Text("not available", style="dim italic"))
            return table

        table.add_row("Platform", plan.converter or "--")
        table.add_row("Collateral", self._format_amount(plan.collateral_amount, self.collateral_market))
        table.add_row("Borrow", self._format_amount(plan.amount_to_borrow, self.borrow_market))
        table.add_row("Max borrow", self._format_amount(plan.max_amount_to_borrow, self.borrow_market))
        table.add_row("Max supply", self._format_amount(plan.max_amount_to_supply, self.collateral_market))
        table.add_row("LTV", self._format_ratio(plan.ltv))
        table.add_row("Liquidation threshold", self._format_ratio(plan.liquidation_threshold))
        table.add_row("Borrow cost", self._format_figure36(plan.borrow_cost36))
        table.add_row("Supply income", self._format_figure36(plan.supply_income36))
        table.add_row("Collateral value", self._format_figure36(plan.collateral_value_in_borrow_asset36))
        return table

    def ranking_table(self, ranked: Sequence[RankedPlan]) -> Table:
        """Build a table of plans ranked across platforms."""
        table = Table(
            title=f"{self.collateral_market.asset.name} -> {self.borrow_market.asset.name}",
            header_style="bold cyan",
            border_style="dim",
        )
        for name, width in self.RANKING_COLUMNS:
            table.add_column(name, width=width, justify="left" if name == "Platform" else "right")

        if not ranked:
            table.caption = "No platform available"
            return table

        for idx, item in enumerate(ranked, start=1):
            plan = item.plan
            table.add_row(
                str(idx),
                Text(plan.converter or "--", style="bold"),
                self._format_amount(plan.collateral_amount, self.collateral_market),
                self._format_amount(plan.amount_to_borrow, self.borrow_market),
                self._format_amount(plan.max_amount_to_borrow, self.borrow_market),
                self._format_figure36(plan.borrow_cost36),
                self._format_figure36(plan.supply_income36),
                self._format_apr(item.apr18),
            )
        return table

    def rebalance_table(self, plan: RebalancePlan) -> Table:
        """Build a table describing a rebalance plan."""
        table = Table(title="Rebalance", header_style="bold cyan", border_style="dim")
        table.add_column("Field", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Direction", Text(plan.direction.value, style="bold"))
        if plan.direction != RebalanceDirection.NO_ACTION_NEEDED:
            market = (
                self.collateral_market
                if plan.direction == RebalanceDirection.REPAY_WITH_COLLATERAL_ASSET
                else self.borrow_market
            )
            table.add_row("Amount", f"{self._format_amount(plan.amount, market)} {market.asset.name}")
        table.add_row("Health factor", self._format_health_factor(plan.current_health_factor))
        table.add_row("Resulting health factor", self._format_health_factor(plan.resulting_health_factor))
        return table


def print_table(table: Table, console: Optional[Console] = None) -> None:
    """Print a table to the given console (stdout by default)."""
    (console or Console()).print(table)
