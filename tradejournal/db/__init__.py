"""Persistence layer for TradeJournal."""

from tradejournal.db.store import DataStore

__all__ = ["DataStore"]
