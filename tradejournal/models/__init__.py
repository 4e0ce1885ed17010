"""Data models for TradeJournal."""

from tradejournal.models.account import TradingAccount
from tradejournal.models.analytics import (
    DailyPnl,
    DashboardSummary,
    DrawdownAnalysis,
    DrawdownPeriod,
    IntradayStats,
    SymbolPerformance,
    TradeStats,
    WinLossDays,
    WinLossDayStats,
)
from tradejournal.models.filters import TradeFilter
from tradejournal.models.trade import Trade, TradeStatus

__all__ = [
    "Trade",
    "TradeStatus",
    "TradingAccount",
    "TradeFilter",
    "TradeStats",
    "WinLossDayStats",
    "WinLossDays",
    "DrawdownPeriod",
    "DrawdownAnalysis",
    "IntradayStats",
    "DashboardSummary",
    "SymbolPerformance",
    "DailyPnl",
]
