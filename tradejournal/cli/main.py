"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

import click

from tradejournal.cli.common import error_panel


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their commands is
    actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "account": "tradejournal.cli.accounts",
    "import": "tradejournal.cli.journal",
    "trades": "tradejournal.cli.journal",
    "stats": "tradejournal.cli.analytics",
    "days": "tradejournal.cli.analytics",
    "drawdown": "tradejournal.cli.analytics",
    "intraday": "tradejournal.cli.analytics",
    "summary": "tradejournal.cli.dashboard",
    "symbols": "tradejournal.cli.dashboard",
    "daily": "tradejournal.cli.dashboard",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - trade journal and performance analytics.

    Import closed trades from your broker exports and review win rate,
    profit factor, drawdowns and day-by-day results.

    \b
    Quick Start:
      tradejournal account add "Main"        # Create an account
      tradejournal import trades.csv -a 1    # Import a trade feed
      tradejournal stats -a 1                # Full statistics
    """
    from tradejournal.config import load_config, setup_logging

    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ValueError as e:
        error_panel(str(e), title="Configuration Error")

    setup_logging(config, verbose=verbose)
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
