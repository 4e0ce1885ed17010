"""Dashboard commands for TradeJournal CLI.

Period summary, per-symbol performance and daily realized P&L.
"""

from decimal import Decimal
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    DATE,
    console,
    empty_panel,
    get_service,
    money,
    resolve_account,
    to_date,
)

PERIOD_OPTIONS = [
    click.option("--account", "-a", type=int, default=None, help="Trading account ID."),
    click.option("--from", "from_date", type=DATE, default=None, help="Period start (default: 30 days ago)."),
    click.option("--to", "to_date_", type=DATE, default=None, help="Period end, inclusive (default: now)."),
    click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON."),
]


def period_options(func):
    for option in reversed(PERIOD_OPTIONS):
        func = option(func)
    return func


def _period(from_date, to_date_):
    from tradejournal.analytics.service import period_from_dates

    return period_from_dates(to_date(from_date), to_date(to_date_))


def _print_json_list(items) -> None:
    import json

    console.print_json(json.dumps([item.model_dump(mode="json") for item in items]))


@click.command()
@period_options
@click.pass_context
def summary(ctx: click.Context, account: Optional[int], from_date, to_date_, as_json: bool) -> None:
    """Display headline numbers for a period.

    \b
    Examples:
      tradejournal summary -a 1
      tradejournal summary -a 1 --from 2024-01-01 --to 2024-06-30
    """
    account_id = resolve_account(ctx, account)
    start, end = _period(from_date, to_date_)
    result = get_service(ctx).get_dashboard_summary(account_id, start, end)

    if as_json:
        console.print_json(result.model_dump_json())
        return

    text = (
        f"[bold]Period:[/bold] {result.period_start} to {result.period_end}\n\n"
        f"Trades:          {result.total_trades} "
        f"([dim]{result.open_trades} open, {result.closed_trades} closed[/dim])\n"
        f"Realized P&L:    {money(result.total_realized_pnl)}\n"
        f"Unrealized P&L:  {money(result.total_unrealized_pnl)}\n"
        f"Win Rate:        {result.win_rate:.2f}% "
        f"({result.winning_trades}W / {result.losing_trades}L)\n"
        f"Commissions:     {result.total_commission:,.2f}\n"
        f"Fees:            {result.total_fees:,.2f}\n"
        f"{'─' * 30}\n"
        f"[bold]Account Balance: {result.account_balance:,.2f}[/bold]"
    )
    console.print(Panel(text, title="[bold cyan]Dashboard[/bold cyan]", border_style="cyan"))


@click.command()
@period_options
@click.pass_context
def symbols(ctx: click.Context, account: Optional[int], from_date, to_date_, as_json: bool) -> None:
    """Display performance broken down by symbol.

    \b
    Examples:
      tradejournal symbols -a 1
    """
    account_id = resolve_account(ctx, account)
    start, end = _period(from_date, to_date_)
    results = get_service(ctx).get_symbol_performance(account_id, start, end)

    if as_json:
        _print_json_list(results)
        return

    if not results:
        empty_panel("No trades in this period", "Symbol Performance")
        return

    table = Table(title="Symbol Performance", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Realized P&L", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg Size", justify="right")
    table.add_column("Volume", justify="right")

    for perf in results:
        table.add_row(
            perf.symbol_ticker,
            str(perf.total_trades),
            money(perf.total_realized_pnl),
            f"{perf.win_rate:.1f}% ({perf.winning_trades}W / {perf.losing_trades}L)",
            f"{perf.avg_trade_size:,.2f}",
            f"{perf.total_volume:,.2f}",
        )

    console.print(table)


@click.command()
@period_options
@click.pass_context
def daily(ctx: click.Context, account: Optional[int], from_date, to_date_, as_json: bool) -> None:
    """Display realized P&L per exit date.

    \b
    Examples:
      tradejournal daily -a 1 --from 2024-03-01
    """
    account_id = resolve_account(ctx, account)
    start, end = _period(from_date, to_date_)
    results = get_service(ctx).get_daily_pnl(account_id, start, end)

    if as_json:
        _print_json_list(results)
        return

    if not results:
        empty_panel("No closed trades in this period", "Daily P&L")
        return

    table = Table(title="Daily P&L", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Realized P&L", justify="right")
    table.add_column("Volume", justify="right")

    for day in results:
        table.add_row(
            day.date.isoformat(),
            str(day.trades_count),
            money(day.realized_pnl),
            f"{day.volume:,.2f}",
        )

    console.print(table)
    running = sum((d.realized_pnl for d in results), Decimal("0"))
    console.print(f"\n[bold]Period Total:[/bold] {money(running)}")
