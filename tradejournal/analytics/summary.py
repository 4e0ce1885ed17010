"""Dashboard-level views: period summary, per-symbol and per-day P&L.

Unlike the realized-performance stages these look at every trade
entered in the period, open ones included, and only restrict to closed
trades where a realized figure is reported.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal

from tradejournal.analytics.decimals import HUNDRED, RATIO, ZERO, safe_div, total
from tradejournal.models import (
    DailyPnl,
    DashboardSummary,
    SymbolPerformance,
    Trade,
    TradeStatus,
)


def win_rate(wins: int, closed: int) -> Decimal:
    """Percentage of closed trades that won, from a 4-place ratio."""
    if closed == 0:
        return ZERO
    return safe_div(Decimal(wins), closed, RATIO) * HUNDRED


def dashboard_summary(
    trades: list[Trade],
    period_start: date,
    period_end: date,
    account_balance: Decimal = ZERO,
) -> DashboardSummary:
    closed = [t for t in trades if t.is_closed]
    winners = sum(1 for t in closed if t.pnl > 0)
    losers = sum(1 for t in closed if t.pnl < 0)

    return DashboardSummary(
        total_trades=len(trades),
        open_trades=sum(1 for t in trades if t.status == TradeStatus.OPEN),
        closed_trades=len(closed),
        total_realized_pnl=total(t.pnl for t in closed),
        # Needs live market prices, which the journal does not have
        total_unrealized_pnl=ZERO,
        winning_trades=winners,
        losing_trades=losers,
        win_rate=win_rate(winners, len(closed)),
        total_commission=total(t.total_commission for t in trades),
        total_fees=total(t.total_fees for t in trades),
        account_balance=account_balance,
        period_start=period_start,
        period_end=period_end,
    )


def symbol_performance(trades: list[Trade]) -> list[SymbolPerformance]:
    """Per-symbol breakdown, best realized P&L first."""
    by_symbol: dict[str, list[Trade]] = defaultdict(list)
    for trade in trades:
        by_symbol[trade.symbol_ticker].append(trade)

    results = []
    for ticker, symbol_trades in by_symbol.items():
        closed = [t for t in symbol_trades if t.is_closed]
        winners = sum(1 for t in closed if t.pnl > 0)
        volume = total(t.entry_value for t in symbol_trades)
        results.append(
            SymbolPerformance(
                symbol_ticker=ticker,
                total_trades=len(symbol_trades),
                total_realized_pnl=total(t.pnl for t in closed),
                winning_trades=winners,
                losing_trades=sum(1 for t in closed if t.pnl < 0),
                win_rate=win_rate(winners, len(closed)),
                avg_trade_size=safe_div(volume, len(symbol_trades)),
                total_volume=volume,
            )
        )

    return sorted(results, key=lambda s: s.total_realized_pnl, reverse=True)


def daily_pnl(trades: list[Trade]) -> list[DailyPnl]:
    """Realized P&L of closed trades grouped by exit date, oldest first."""
    by_exit: dict[date, list[Trade]] = defaultdict(list)
    for trade in trades:
        if trade.is_closed and trade.exit_time is not None:
            by_exit[trade.exit_time.date()].append(trade)

    results = []
    for day in sorted(by_exit):
        day_trades = by_exit[day]
        realized = total(t.pnl for t in day_trades)
        results.append(
            DailyPnl(
                date=day,
                realized_pnl=realized,
                unrealized_pnl=ZERO,
                total_pnl=realized,
                trades_count=len(day_trades),
                volume=total(t.entry_value for t in day_trades),
            )
        )
    return results
