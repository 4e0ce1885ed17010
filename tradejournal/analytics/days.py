"""Day-aggregation stage: per-day P&L, win/loss-day stats, intraday view."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from tradejournal.analytics.decimals import RATIO, ZERO, safe_div, total
from tradejournal.models import IntradayStats, Trade, WinLossDays, WinLossDayStats


def group_by_day(trades: list[Trade]) -> dict[date, list[Trade]]:
    """Trades keyed by entry date, ascending by date."""
    days: dict[date, list[Trade]] = defaultdict(list)
    for trade in trades:
        days[trade.entry_date].append(trade)
    return {day: days[day] for day in sorted(days)}


def aggregate_by_day(trades: list[Trade]) -> dict[date, Decimal]:
    """Sum of realized P&L per entry date, ascending by date."""
    return {day: total(t.pnl for t in day_trades) for day, day_trades in group_by_day(trades).items()}


def win_loss_day_stats(
    daily_pnl: dict[date, Decimal],
    trades: list[Trade],
    winning: bool,
) -> WinLossDayStats:
    """Statistics over the winning (P&L > 0) or losing (P&L < 0) days.

    Args:
        daily_pnl: Per-day P&L as produced by ``aggregate_by_day``.
        trades: The trades the map was built from.
        winning: Select winning days when True, losing days otherwise.
    """
    days = {
        day: pnl
        for day, pnl in daily_pnl.items()
        if (pnl > 0 if winning else pnl < 0)
    }
    if not days:
        return WinLossDayStats()

    selected = [t for t in trades if t.entry_date in days]
    total_pnl = total(days.values())
    num_days = len(days)

    return WinLossDayStats(
        total_gain_loss=total_pnl,
        average_daily_gain_loss=safe_div(total_pnl, num_days),
        average_daily_volume=safe_div(total(t.entry_value for t in selected), num_days),
        average_per_share_gain_loss=safe_div(total_pnl, total(t.quantity for t in selected), RATIO),
        average_trade_gain_loss=safe_div(total_pnl, len(selected)),
        number_of_days=num_days,
        total_trades=len(selected),
    )


def win_loss_days(trades: list[Trade]) -> WinLossDays:
    daily_pnl = aggregate_by_day(trades)
    return WinLossDays(
        winning_days=win_loss_day_stats(daily_pnl, trades, winning=True),
        losing_days=win_loss_day_stats(daily_pnl, trades, winning=False),
    )


def intraday_analysis(trades: list[Trade], day: date) -> list[IntradayStats]:
    """Activity summary for the trades entered on ``day``.

    Returns an empty list when nothing was entered that day, so "no data"
    stays distinguishable from a day whose figures are all zero.
    """
    return [
        _intraday_stats(trade_date, day_trades)
        for trade_date, day_trades in group_by_day(trades).items()
        if trade_date == day
    ]


def _intraday_stats(day: date, trades: list[Trade]) -> IntradayStats:
    pnls = [t.pnl for t in trades]
    total_pnl = total(pnls)
    commissions = total(t.total_commission for t in trades)
    fees = total(t.total_fees for t in trades)

    first = min(trades, key=lambda t: t.entry_time)
    last = max(trades, key=lambda t: t.exit_time or t.entry_time)
    first_time = first.entry_time
    last_time = last.exit_time or last.entry_time

    return IntradayStats(
        date=day,
        total_trades=len(trades),
        winning_trades=sum(1 for p in pnls if p > 0),
        losing_trades=sum(1 for p in pnls if p < 0),
        scratch_trades=sum(1 for p in pnls if p == 0),
        total_pnl=total_pnl,
        gross_pnl=total_pnl + commissions + fees,
        commissions=commissions,
        fees=fees,
        largest_win=_extreme([t.realized_pnl for t in trades], max),
        largest_loss=_extreme([t.realized_pnl for t in trades], min),
        first_trade_time=first_time,
        last_trade_time=last_time,
        trading_duration=_minutes_between(first_time, last_time),
        average_trade_size=safe_div(total(t.entry_value for t in trades), len(trades)),
        total_volume=total(t.quantity for t in trades),
    )


def _extreme(values: list[Optional[Decimal]], pick) -> Decimal:
    present = [v for v in values if v is not None]
    return pick(present) if present else ZERO


def _minutes_between(start, end) -> int:
    return int((end - start).total_seconds() / 60)
