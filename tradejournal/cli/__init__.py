"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal:
account management, trade import, and the analytics views.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
