"""Performance analytics for TradeJournal.

The stages here are pure functions of a trade list; ``AnalyticsService``
in ``tradejournal.analytics.service`` wires them to a trade store.
"""

from tradejournal.analytics.days import (
    aggregate_by_day,
    group_by_day,
    intraday_analysis,
    win_loss_day_stats,
    win_loss_days,
)
from tradejournal.analytics.drawdown import compute_drawdown, cumulative_pnl_series
from tradejournal.analytics.filters import filter_trades
from tradejournal.analytics.stats import compute_stats
from tradejournal.analytics.summary import daily_pnl, dashboard_summary, symbol_performance

__all__ = [
    "filter_trades",
    "compute_stats",
    "group_by_day",
    "aggregate_by_day",
    "win_loss_day_stats",
    "win_loss_days",
    "intraday_analysis",
    "cumulative_pnl_series",
    "compute_drawdown",
    "dashboard_summary",
    "symbol_performance",
    "daily_pnl",
]
