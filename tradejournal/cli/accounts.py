"""Account commands for TradeJournal CLI."""

from decimal import Decimal

import click
from rich.table import Table

from tradejournal.cli.common import DECIMAL, console, empty_panel, error_panel, get_store


@click.group()
def account() -> None:
    """Manage trading accounts."""


@account.command("add")
@click.argument("name")
@click.option("--broker", default="manual", show_default=True, help="Broker name.")
@click.option("--currency", default="USD", show_default=True, help="Account currency.")
@click.option("--balance", type=DECIMAL, default=Decimal("0"), help="Current cash balance.")
@click.pass_context
def add(ctx: click.Context, name: str, broker: str, currency: str, balance: Decimal) -> None:
    """Create a trading account.

    \b
    Examples:
      tradejournal account add "Futures" --broker ninjatrader --balance 25000
    """
    from pydantic import ValidationError

    from tradejournal.config import create_template_config
    from tradejournal.models import TradingAccount

    create_template_config()

    try:
        new_account = TradingAccount(
            name=name, broker=broker, currency=currency.upper(), current_balance=balance
        )
        stored = get_store(ctx).add_account(new_account)
    except (ValidationError, ValueError) as e:
        error_panel(str(e))

    console.print(f"[green]Created account {stored.id}:[/green] {stored.name}")


@account.command("list")
@click.pass_context
def list_accounts(ctx: click.Context) -> None:
    """List trading accounts."""
    accounts = get_store(ctx).list_accounts()

    if not accounts:
        empty_panel("No accounts yet. Run 'tradejournal account add NAME'.", "Accounts")
        return

    table = Table(title="Trading Accounts", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Broker")
    table.add_column("Currency", justify="center")
    table.add_column("Balance", justify="right")

    for acct in accounts:
        table.add_row(
            str(acct.id),
            acct.name,
            acct.broker,
            acct.currency,
            f"{acct.current_balance:,.2f}",
        )

    console.print(table)
