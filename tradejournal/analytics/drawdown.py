"""Drawdown engine.

Builds the cumulative realized-P&L series (one point per trading day)
and walks it once. The walk yields every drawdown period, including one
still open at the end of the series, and the current drawdown figures
are read off that same walk so the two can never disagree.

The high-water mark starts at 0, not at the first cumulative value. On a
series that never turns positive the current drawdown is therefore
measured from 0: [-10, -30, -20] reports 20, where measuring from the
series maximum (-10) would report 10.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from tradejournal.analytics.days import aggregate_by_day
from tradejournal.analytics.decimals import CURRENCY, HUNDRED, ZERO, divide, quantize
from tradejournal.models import DrawdownAnalysis, DrawdownPeriod, Trade

logger = logging.getLogger(__name__)


def cumulative_pnl_series(trades: list[Trade]) -> list[tuple[date, Decimal]]:
    """Running P&L after each trading day, ascending by date."""
    series = []
    running = ZERO
    for day, day_pnl in aggregate_by_day(trades).items():
        running += day_pnl
        series.append((day, running))
    return series


@dataclass
class _OpenDrawdown:
    peak_date: date
    peak: Decimal
    trough_date: date
    trough: Decimal


@dataclass
class DrawdownWalk:
    """Result of a single pass over a cumulative P&L series."""

    periods: list[DrawdownPeriod] = field(default_factory=list)
    open_period: Optional[DrawdownPeriod] = None
    peak: Decimal = ZERO
    peak_date: Optional[date] = None
    last_date: Optional[date] = None
    last_value: Decimal = ZERO

    @property
    def all_periods(self) -> list[DrawdownPeriod]:
        if self.open_period is None:
            return list(self.periods)
        return [*self.periods, self.open_period]


def walk_series(series: list[tuple[date, Decimal]]) -> DrawdownWalk:
    """Track the high-water mark across ``series`` and cut drawdown periods.

    The high-water mark starts at 0, dated on the first day of the series.
    A drawdown opens on the first day below the mark and closes on the
    first later day at or above the mark that opened it; that day is its
    recovery date.
    """
    walk = DrawdownWalk()
    if not series:
        return walk

    walk.peak_date = series[0][0]
    current: Optional[_OpenDrawdown] = None

    for day, value in series:
        if current is not None and value >= current.peak:
            walk.periods.append(_to_period(current, end_of_period=day, recovery_date=day))
            current = None

        if value >= walk.peak:
            walk.peak = value
            walk.peak_date = day
        elif current is None:
            current = _OpenDrawdown(walk.peak_date, walk.peak, day, value)
        elif value < current.trough:
            current.trough = value
            current.trough_date = day

    walk.last_date, walk.last_value = series[-1]
    if current is not None:
        walk.open_period = _to_period(current, end_of_period=walk.last_date, recovery_date=None)
    return walk


def compute_drawdown(trades: list[Trade]) -> DrawdownAnalysis:
    """Drawdown analysis over closed trades.

    Args:
        trades: Eligible trades in any order.

    Returns:
        DrawdownAnalysis; all zeros with no periods for empty input.
    """
    series = cumulative_pnl_series(trades)
    logger.debug("Drawdown series has %d trading days", len(series))
    return analyze_series(series)


def analyze_series(series: list[tuple[date, Decimal]]) -> DrawdownAnalysis:
    walk = walk_series(series)
    periods = walk.all_periods
    if not periods:
        return DrawdownAnalysis()

    # max() keeps the earliest period on ties
    worst = max(periods, key=lambda p: p.drawdown_amount)
    current = walk.open_period

    return DrawdownAnalysis(
        max_drawdown=worst.drawdown_amount,
        max_drawdown_percent=worst.drawdown_percent,
        max_drawdown_duration=worst.duration_days,
        current_drawdown=_current_amount(walk),
        current_drawdown_percent=(
            _percent(_current_amount(walk), walk.peak) if current is not None else ZERO
        ),
        current_drawdown_duration=(
            (walk.last_date - walk.peak_date).days if current is not None else 0
        ),
        drawdown_periods=periods,
    )


def _current_amount(walk: DrawdownWalk) -> Decimal:
    if walk.open_period is None:
        return ZERO
    return walk.peak - walk.last_value


def _to_period(
    dd: _OpenDrawdown,
    end_of_period: date,
    recovery_date: Optional[date],
) -> DrawdownPeriod:
    amount = dd.peak - dd.trough
    return DrawdownPeriod(
        start_date=dd.peak_date,
        end_date=dd.trough_date,
        peak_value=dd.peak,
        trough_value=dd.trough,
        drawdown_amount=amount,
        drawdown_percent=_percent(amount, dd.peak),
        duration_days=(end_of_period - dd.peak_date).days,
        recovery_date=recovery_date,
    )


def _percent(amount: Decimal, peak: Decimal) -> Decimal:
    """Drawdown as a percentage of a positive peak, else 0."""
    if peak <= 0:
        return ZERO
    return quantize(divide(amount, peak) * HUNDRED, CURRENCY)
