"""Analytics service: one call per analytics view, backed by a trade store."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from tradejournal.analytics.days import intraday_analysis, win_loss_days
from tradejournal.analytics.decimals import ZERO
from tradejournal.analytics.drawdown import compute_drawdown
from tradejournal.analytics.stats import compute_stats
from tradejournal.analytics.summary import daily_pnl, dashboard_summary, symbol_performance
from tradejournal.db.store import DataStore
from tradejournal.models import (
    DailyPnl,
    DashboardSummary,
    DrawdownAnalysis,
    IntradayStats,
    SymbolPerformance,
    TradeFilter,
    TradeStats,
    WinLossDays,
)

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 30


class AnalyticsService:
    """Reads an account's trades from the store and runs the analytics stages.

    Stateless apart from the store handle, so one instance can serve any
    number of accounts.

    Args:
        store: Trade store to read from.
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store

    # ── Realized performance ─────────────────────────────────────────────

    def get_trade_stats(
        self, account_id: int, trade_filter: Optional[TradeFilter] = None
    ) -> TradeStats:
        trades = self._store.list_closed_trades(account_id, trade_filter)
        logger.info("Trade stats for account %s over %d trades", account_id, len(trades))
        return compute_stats(trades)

    def get_win_loss_days_analysis(
        self, account_id: int, trade_filter: Optional[TradeFilter] = None
    ) -> WinLossDays:
        trades = self._store.list_closed_trades(account_id, trade_filter)
        logger.info("Win/loss days for account %s over %d trades", account_id, len(trades))
        return win_loss_days(trades)

    def get_drawdown_analysis(
        self, account_id: int, trade_filter: Optional[TradeFilter] = None
    ) -> DrawdownAnalysis:
        trades = self._store.list_closed_trades(account_id, trade_filter)
        logger.info("Drawdown for account %s over %d trades", account_id, len(trades))
        return compute_drawdown(trades)

    def get_intraday_analysis(self, account_id: int, day: date) -> list[IntradayStats]:
        """Activity on ``day``, counting trades of every status."""
        trades = self._store.find_trades_by_date(account_id, day, day)
        logger.info("Intraday analysis for account %s on %s: %d trades", account_id, day, len(trades))
        return intraday_analysis(trades, day)

    # ── Dashboard views ──────────────────────────────────────────────────

    def get_dashboard_summary(
        self,
        account_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> DashboardSummary:
        start, end = _default_period(start, end)
        trades = self._trades_between(account_id, start, end)
        account = self._store.get_account(account_id)
        balance = account.current_balance if account is not None else ZERO
        return dashboard_summary(trades, start.date(), end.date(), balance)

    def get_symbol_performance(
        self,
        account_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[SymbolPerformance]:
        start, end = _default_period(start, end)
        return symbol_performance(self._trades_between(account_id, start, end))

    def get_daily_pnl(
        self,
        account_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[DailyPnl]:
        start, end = _default_period(start, end)
        return daily_pnl(self._trades_between(account_id, start, end))

    def _trades_between(self, account_id: int, start: datetime, end: datetime):
        trades = self._store.find_trades_by_date(account_id, start.date(), end.date())
        return [t for t in trades if start <= t.entry_time <= end]


def _default_period(
    start: Optional[datetime], end: Optional[datetime]
) -> tuple[datetime, datetime]:
    """Fill in the last month up to now for missing period bounds."""
    end = end or datetime.now()
    start = start or end - timedelta(days=DEFAULT_PERIOD_DAYS)
    return start, end


def period_from_dates(
    start: Optional[date], end: Optional[date]
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Calendar dates to a period covering the whole of ``end``."""
    return (
        datetime.combine(start, time.min) if start else None,
        datetime.combine(end, time.max) if end else None,
    )
