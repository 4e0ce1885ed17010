"""Journal commands for TradeJournal CLI.

Handles trade import and the trade listing.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    DATE,
    console,
    empty_panel,
    error_panel,
    get_store,
    money,
    resolve_account,
    to_date,
)


@click.command(name="import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--account", "-a", type=int, default=None, help="Trading account ID.")
@click.pass_context
def import_trades(ctx: click.Context, csv_file: Path, account: Optional[int]) -> None:
    """Import normalized trades from a CSV file.

    \b
    Examples:
      tradejournal import fills.csv --account 1
    """
    from tradejournal.importer import import_trades_csv

    account_id = resolve_account(ctx, account)

    try:
        result = import_trades_csv(get_store(ctx), account_id, csv_file)
    except ValueError as e:
        error_panel(str(e), title="Import Failed")

    lines = [
        f"[bold]Imported:[/bold] {result.imported} trades",
        f"[bold]Rejected:[/bold] {result.skipped}",
    ]
    if result.errors:
        lines.append("")
        lines.extend(f"[red]{msg}[/red]" for msg in result.errors[:10])
        if len(result.errors) > 10:
            lines.append(f"[dim]... and {len(result.errors) - 10} more[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Trade Import[/bold cyan]",
        border_style="cyan" if result.success else "yellow",
    ))


@click.command()
@click.option("--account", "-a", type=int, default=None, help="Trading account ID.")
@click.option("--from", "from_date", type=DATE, default=None, help="First entry date (YYYY-MM-DD).")
@click.option("--to", "to_date_", type=DATE, default=None, help="Last entry date (YYYY-MM-DD).")
@click.pass_context
def trades(ctx: click.Context, account: Optional[int], from_date, to_date_) -> None:
    """Display the account's trades.

    \b
    Examples:
      tradejournal trades -a 1
      tradejournal trades -a 1 --from 2024-03-01 --to 2024-03-31
    """
    from datetime import date

    store = get_store(ctx)
    account_id = resolve_account(ctx, account)

    if from_date or to_date_:
        rows = store.find_trades_by_date(
            account_id,
            to_date(from_date) or date.min,
            to_date(to_date_) or date.max,
        )
    else:
        rows = store.list_trades(account_id)

    if not rows:
        empty_panel("No trades found", "Trade Journal")
        return

    table = Table(title="Trade Journal", show_header=True, header_style="bold cyan")
    table.add_column("Entry", style="dim")
    table.add_column("Exit", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Qty", justify="right")
    table.add_column("Entry Px", justify="right")
    table.add_column("Exit Px", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Status", justify="center")

    for trade in rows:
        table.add_row(
            trade.entry_time.strftime("%Y-%m-%d %H:%M"),
            trade.exit_time.strftime("%Y-%m-%d %H:%M") if trade.exit_time else "-",
            trade.symbol_ticker,
            f"{trade.quantity:,}",
            f"{trade.entry_price:,.2f}",
            f"{trade.exit_price:,.2f}" if trade.exit_price is not None else "-",
            money(trade.realized_pnl) if trade.realized_pnl is not None else "-",
            trade.status.value,
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(rows)}")
