"""Helpers shared by the CLI command modules."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.models import TradeFilter

console = Console()


class DecimalType(click.ParamType):
    """Click parameter type parsing exact decimals."""

    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid number", param, ctx)
        if not number.is_finite():
            self.fail(f"{value!r} is not a finite number", param, ctx)
        return number


DECIMAL = DecimalType()
DATE = click.DateTime(formats=["%Y-%m-%d"])


def error_panel(message: str, title: str = "Error") -> None:
    """Print a red error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def empty_panel(message: str, title: str) -> None:
    console.print(Panel(
        f"[dim]{message}[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))


def get_store(ctx: click.Context):
    """Get the data store for the configured database."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import DataStore

    return DataStore(get_db_path(ctx.obj["config"]))


def get_service(ctx: click.Context):
    from tradejournal.analytics.service import AnalyticsService

    return AnalyticsService(get_store(ctx))


def resolve_account(ctx: click.Context, account: Optional[int]) -> int:
    """Explicit --account, else the configured default account."""
    if account is not None:
        return account
    return int(ctx.obj["config"]["journal"]["default_account"])


def to_date(value) -> Optional[date]:
    return value.date() if value is not None else None


FILTER_OPTIONS = [
    click.option("--account", "-a", type=int, default=None, help="Trading account ID."),
    click.option("--from", "from_date", type=DATE, default=None, help="First entry date (YYYY-MM-DD)."),
    click.option("--to", "to_date_", type=DATE, default=None, help="Last entry date, inclusive (YYYY-MM-DD)."),
    click.option("--symbol", "-s", "symbols", multiple=True, help="Restrict to symbol (repeatable)."),
    click.option("--min-pnl", type=DECIMAL, default=None, help="Minimum realized P&L."),
    click.option("--max-pnl", type=DECIMAL, default=None, help="Maximum realized P&L."),
    click.option("--min-qty", type=DECIMAL, default=None, help="Minimum quantity."),
    click.option("--max-qty", type=DECIMAL, default=None, help="Maximum quantity."),
    click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON."),
]


def filter_options(func):
    """Add the trade filter options to a command."""
    for option in reversed(FILTER_OPTIONS):
        func = option(func)
    return func


def build_filter(
    from_date=None,
    to_date_=None,
    symbols=(),
    min_pnl: Optional[Decimal] = None,
    max_pnl: Optional[Decimal] = None,
    min_qty: Optional[Decimal] = None,
    max_qty: Optional[Decimal] = None,
) -> Optional[TradeFilter]:
    """Build a TradeFilter from CLI options; None when no option is set."""
    trade_filter = TradeFilter.for_dates(
        to_date(from_date),
        to_date(to_date_),
        symbols=[s.upper() for s in symbols] if symbols else None,
        min_pnl=min_pnl,
        max_pnl=max_pnl,
        min_quantity=min_qty,
        max_quantity=max_qty,
    )
    return None if trade_filter.is_empty else trade_filter


def money(value: Decimal) -> str:
    """Colored, signed money string for rich output."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value > 0 else ""
    return f"[{color}]{sign}{value:,.2f}[/{color}]"
