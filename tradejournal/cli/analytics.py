"""Analytics commands for TradeJournal CLI.

Overview statistics, win vs loss days, drawdown and intraday views.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    DATE,
    build_filter,
    console,
    empty_panel,
    filter_options,
    get_service,
    money,
    resolve_account,
)


def _metrics_table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    return table


def _loss(amount) -> str:
    return f"[red]{amount:,.2f}[/red]" if amount else f"{amount:,.2f}"


def stats_rows(stats) -> list[tuple[str, str]]:
    """Label/value pairs for the overview statistics panel."""
    return [
        ("Total Gain/Loss", money(stats.total_gain_loss)),
        ("Largest Gain", money(stats.largest_gain)),
        ("Largest Loss", money(stats.largest_loss)),
        ("Average Daily Gain/Loss", money(stats.average_daily_gain_loss)),
        ("Average Daily Volume", f"{stats.average_daily_volume:,.2f}"),
        ("Average Per-share Gain/Loss", f"{stats.average_per_share_gain_loss:,.4f}"),
        ("Average Trade Gain/Loss", money(stats.average_trade_gain_loss)),
        ("Average Winning Trade", money(stats.average_winning_trade)),
        ("Average Losing Trade", money(stats.average_losing_trade)),
        ("Total Number of Trades", str(stats.total_number_of_trades)),
        ("Winning / Losing / Scratch", (
            f"{stats.number_of_winning_trades} / {stats.number_of_losing_trades} / "
            f"{stats.number_of_scratch_trades}"
        )),
        ("Avg Hold Time (win / loss / scratch)", (
            f"{stats.average_hold_time_winning}m / {stats.average_hold_time_losing}m / "
            f"{stats.average_hold_time_scratches}m"
        )),
        ("Max Consecutive Wins", str(stats.max_consecutive_wins)),
        ("Max Consecutive Losses", str(stats.max_consecutive_losses)),
        ("Trade P&L Std Dev", f"{stats.trade_pnl_standard_deviation:,.4f}"),
        ("System Quality Number", f"{stats.system_quality_number}"),
        ("Probability of Random Chance", f"{stats.probability_of_random_chance:.2f}%"),
        ("Kelly Percentage", f"{stats.kelly_percentage:.2f}%"),
        ("K-Ratio", f"{stats.k_ratio}"),
        ("Profit Factor", f"{stats.profit_factor}"),
        ("Total Commissions", f"{stats.total_commissions:,.2f}"),
        ("Total Fees", f"{stats.total_fees:,.2f}"),
    ]


@click.command()
@filter_options
@click.pass_context
def stats(ctx: click.Context, account: Optional[int], as_json: bool, **filters) -> None:
    """Display comprehensive trade statistics.

    \b
    Examples:
      tradejournal stats -a 1
      tradejournal stats -a 1 --from 2024-01-01 --symbol ES --symbol NQ
    """
    account_id = resolve_account(ctx, account)
    result = get_service(ctx).get_trade_stats(account_id, build_filter(**filters))

    if as_json:
        console.print_json(result.model_dump_json())
        return

    if result.total_number_of_trades == 0:
        empty_panel("No closed trades match the filter", "Trade Statistics")
        return

    console.print(Panel(
        _metrics_table("", stats_rows(result)),
        title=f"[bold cyan]Trade Statistics - Account {account_id}[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@filter_options
@click.pass_context
def days(ctx: click.Context, account: Optional[int], as_json: bool, **filters) -> None:
    """Compare winning days against losing days.

    \b
    Examples:
      tradejournal days -a 1 --from 2024-01-01 --to 2024-03-31
    """
    account_id = resolve_account(ctx, account)
    result = get_service(ctx).get_win_loss_days_analysis(account_id, build_filter(**filters))

    if as_json:
        console.print_json(result.model_dump_json())
        return

    table = Table(title="Win vs Loss Days", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Winning Days", justify="right")
    table.add_column("Losing Days", justify="right")

    win, loss = result.winning_days, result.losing_days
    table.add_row("Total Gain/Loss", money(win.total_gain_loss), money(loss.total_gain_loss))
    table.add_row("Average Daily Gain/Loss", money(win.average_daily_gain_loss), money(loss.average_daily_gain_loss))
    table.add_row("Average Daily Volume", f"{win.average_daily_volume:,.2f}", f"{loss.average_daily_volume:,.2f}")
    table.add_row(
        "Average Per-share Gain/Loss",
        f"{win.average_per_share_gain_loss:,.4f}",
        f"{loss.average_per_share_gain_loss:,.4f}",
    )
    table.add_row("Average Trade Gain/Loss", money(win.average_trade_gain_loss), money(loss.average_trade_gain_loss))
    table.add_row("Number of Days", str(win.number_of_days), str(loss.number_of_days))
    table.add_row("Total Trades", str(win.total_trades), str(loss.total_trades))

    console.print(table)


@click.command()
@filter_options
@click.pass_context
def drawdown(ctx: click.Context, account: Optional[int], as_json: bool, **filters) -> None:
    """Display drawdown analysis of cumulative P&L.

    \b
    Examples:
      tradejournal drawdown -a 1
    """
    account_id = resolve_account(ctx, account)
    result = get_service(ctx).get_drawdown_analysis(account_id, build_filter(**filters))

    if as_json:
        console.print_json(result.model_dump_json())
        return

    summary = _metrics_table("", [
        ("Max Drawdown", _loss(result.max_drawdown)),
        ("Max Drawdown %", f"{result.max_drawdown_percent:.2f}%"),
        ("Max Drawdown Duration", f"{result.max_drawdown_duration} days"),
        ("Current Drawdown", _loss(result.current_drawdown)),
        ("Current Drawdown %", f"{result.current_drawdown_percent:.2f}%"),
        ("Current Drawdown Duration", f"{result.current_drawdown_duration} days"),
    ])
    console.print(Panel(summary, title="[bold cyan]Drawdown[/bold cyan]", border_style="cyan"))

    if not result.drawdown_periods:
        return

    table = Table(title="Drawdown Periods", show_header=True, header_style="bold cyan")
    table.add_column("Peak Date")
    table.add_column("Trough Date")
    table.add_column("Peak", justify="right")
    table.add_column("Trough", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Days", justify="right")
    table.add_column("Recovered", justify="center")

    for period in result.drawdown_periods:
        table.add_row(
            period.start_date.isoformat(),
            period.end_date.isoformat(),
            f"{period.peak_value:,.2f}",
            f"{period.trough_value:,.2f}",
            _loss(period.drawdown_amount),
            f"{period.drawdown_percent:.2f}",
            str(period.duration_days),
            period.recovery_date.isoformat() if period.recovery_date else "[yellow]open[/yellow]",
        )

    console.print(table)


@click.command()
@click.option("--account", "-a", type=int, default=None, help="Trading account ID.")
@click.option("--date", "day", type=DATE, required=True, help="Trading day (YYYY-MM-DD).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def intraday(ctx: click.Context, account: Optional[int], day, as_json: bool) -> None:
    """Display activity for a single trading day.

    \b
    Examples:
      tradejournal intraday -a 1 --date 2024-03-15
    """
    import json

    account_id = resolve_account(ctx, account)
    results = get_service(ctx).get_intraday_analysis(account_id, day.date())

    if as_json:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in results]))
        return

    if not results:
        empty_panel(f"No trades on {day.date().isoformat()}", "Intraday")
        return

    for result in results:
        rows = [
            ("Trades (W / L / S)", (
                f"{result.total_trades} ({result.winning_trades} / "
                f"{result.losing_trades} / {result.scratch_trades})"
            )),
            ("Net P&L", money(result.total_pnl)),
            ("Gross P&L", money(result.gross_pnl)),
            ("Commissions", f"{result.commissions:,.2f}"),
            ("Fees", f"{result.fees:,.2f}"),
            ("Largest Win", money(result.largest_win)),
            ("Largest Loss", money(result.largest_loss)),
            ("First Trade", result.first_trade_time.strftime("%H:%M:%S") if result.first_trade_time else "-"),
            ("Last Trade", result.last_trade_time.strftime("%H:%M:%S") if result.last_trade_time else "-"),
            ("Trading Duration", f"{result.trading_duration}m"),
            ("Average Trade Size", f"{result.average_trade_size:,.2f}"),
            ("Total Volume", f"{result.total_volume:,}"),
        ]
        console.print(Panel(
            _metrics_table("", rows),
            title=f"[bold cyan]Intraday - {result.date.isoformat()}[/bold cyan]",
            border_style="cyan",
        ))
