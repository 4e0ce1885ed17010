"""Statistics engine: the full TradeStats bundle for a list of closed trades.

Pure functions over already-filtered trades. Every ratio guards its
denominator and reports 0 instead of raising. A few figures follow the
journal's historical, simplified definitions rather than the textbook
ones:

* ``profit_factor`` is 0 (not infinity) when there are no losing trades.
* ``probability_of_random_chance`` is ``(1 - win rate) * 100``, a
  placeholder rather than a binomial-test p-value.
* ``k_ratio`` regresses the raw per-trade P&L sequence, not the
  cumulative equity curve.
* MAE/MFE need intraday tick data and are always 0.
"""

import logging
from decimal import Decimal

from tradejournal.analytics.decimals import (
    CURRENCY,
    HUNDRED,
    RATIO,
    ZERO,
    divide,
    mean,
    population_std,
    quantize,
    safe_div,
    sqrt,
    total,
)
from tradejournal.models import Trade, TradeStats

logger = logging.getLogger(__name__)


def compute_stats(trades: list[Trade]) -> TradeStats:
    """Compute the complete statistics bundle.

    Args:
        trades: Eligible (closed, filtered) trades in any order.

    Returns:
        TradeStats; all fields are zero for an empty list.
    """
    if not trades:
        return TradeStats()

    logger.debug("Computing trade stats over %d trades", len(trades))

    winners = [t for t in trades if t.pnl > 0]
    losers = [t for t in trades if t.pnl < 0]
    scratches = [t for t in trades if t.pnl == 0]

    pnls = [t.pnl for t in trades]
    total_pnl = total(pnls)
    trading_days = len({t.entry_date for t in trades})

    return TradeStats(
        total_gain_loss=total_pnl,
        largest_gain=max(pnls),
        largest_loss=min(pnls),
        average_daily_gain_loss=safe_div(total_pnl, trading_days),
        average_daily_volume=safe_div(total(t.entry_value for t in trades), trading_days),
        average_per_share_gain_loss=safe_div(
            total_pnl, total(t.quantity for t in trades), RATIO
        ),
        average_trade_gain_loss=safe_div(total_pnl, len(trades)),
        average_winning_trade=safe_div(total(t.pnl for t in winners), len(winners)),
        average_losing_trade=safe_div(total(t.pnl for t in losers), len(losers)),
        total_number_of_trades=len(trades),
        number_of_winning_trades=len(winners),
        number_of_losing_trades=len(losers),
        number_of_scratch_trades=len(scratches),
        average_hold_time_scratches=average_hold_time(scratches),
        average_hold_time_winning=average_hold_time(winners),
        average_hold_time_losing=average_hold_time(losers),
        max_consecutive_wins=max_consecutive(trades, winning=True),
        max_consecutive_losses=max_consecutive(trades, winning=False),
        trade_pnl_standard_deviation=quantize(population_std(pnls), RATIO),
        system_quality_number=system_quality_number(pnls),
        probability_of_random_chance=probability_of_random_chance(len(winners), len(trades)),
        kelly_percentage=kelly_percentage(winners, losers),
        k_ratio=k_ratio(pnls),
        profit_factor=profit_factor(winners, losers),
        total_commissions=total(t.total_commission for t in trades),
        total_fees=total(t.total_fees for t in trades),
    )


def average_hold_time(trades: list[Trade]) -> int:
    """Mean hold time in whole minutes over trades that have exited."""
    holds = [t.hold_minutes for t in trades if t.hold_minutes is not None]
    if not holds:
        return 0
    return int(sum(holds) / len(holds))


def max_consecutive(trades: list[Trade], winning: bool) -> int:
    """Longest run of wins (or losses) in entry-time order.

    Any trade that does not match, scratches included, resets the run.
    """
    longest = 0
    current = 0
    for trade in sorted(trades, key=lambda t: t.entry_time):
        matches = trade.pnl > 0 if winning else trade.pnl < 0
        if matches:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def profit_factor(winners: list[Trade], losers: list[Trade]) -> Decimal:
    gross_profit = total(t.pnl for t in winners)
    gross_loss = abs(total(t.pnl for t in losers))
    return safe_div(gross_profit, gross_loss)


def system_quality_number(pnls: list[Decimal]) -> Decimal:
    """SQN = mean * sqrt(N) / stddev."""
    if not pnls:
        return ZERO
    std = population_std(pnls)
    return safe_div(mean(pnls) * sqrt(Decimal(len(pnls))), std)


def probability_of_random_chance(wins: int, total_trades: int) -> Decimal:
    if total_trades == 0:
        return ZERO
    win_rate = safe_div(Decimal(wins), total_trades, RATIO)
    return (Decimal("1") - win_rate) * HUNDRED


def kelly_percentage(winners: list[Trade], losers: list[Trade]) -> Decimal:
    """Kelly % = 100 * (b*p - q) / b.

    ``b`` is average win over average loss magnitude and ``p`` the win
    rate among trades that were not scratches.
    """
    if not winners or not losers:
        return ZERO

    avg_win = divide(total(t.pnl for t in winners), Decimal(len(winners)))
    avg_loss = divide(abs(total(t.pnl for t in losers)), Decimal(len(losers)))
    p = divide(Decimal(len(winners)), Decimal(len(winners) + len(losers)))
    q = Decimal("1") - p
    b = divide(avg_win, avg_loss)
    if b <= 0:
        return ZERO
    return safe_div(b * p - q, b, RATIO) * HUNDRED


def k_ratio(pnls: list[Decimal]) -> Decimal:
    """Least-squares slope of the P&L sequence over its standard error.

    The sequence is indexed 1..N; the standard error is stddev / sqrt(N).
    """
    n = len(pnls)
    if n < 2:
        return ZERO

    slope = regression_slope(pnls)
    std_error = divide(population_std(pnls), sqrt(Decimal(n)))
    return safe_div(slope, std_error, CURRENCY)


def regression_slope(values: list[Decimal]) -> Decimal:
    n = len(values)
    xs = range(1, n + 1)
    x_sum = Decimal(sum(xs))
    y_sum = total(values)
    xy_sum = total(Decimal(x) * y for x, y in zip(xs, values))
    x_sq_sum = Decimal(sum(x * x for x in xs))

    numerator = n * xy_sum - x_sum * y_sum
    denominator = n * x_sq_sum - x_sum * x_sum
    return divide(numerator, denominator)
