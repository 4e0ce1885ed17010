"""Property-based and example tests for the statistics engine.

**Feature: trade-statistics**
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics.stats import (
    compute_stats,
    k_ratio,
    kelly_percentage,
    max_consecutive,
    system_quality_number,
)
from tradejournal.models import Trade, TradeStats, TradeStatus

BASE_TIME = datetime(2024, 3, 4, 9, 30)


def make_trade(
    pnl,
    entry_time: datetime = BASE_TIME,
    hold_minutes: int | None = 10,
    quantity="10",
    entry_value="1000",
    commission="0",
    fees="0",
) -> Trade:
    """Create a closed trade with the given realized P&L."""
    return Trade(
        trading_account_id=1,
        symbol_ticker="ES",
        quantity=Decimal(quantity),
        entry_price=Decimal(entry_value) / Decimal(quantity),
        entry_value=Decimal(entry_value),
        realized_pnl=Decimal(pnl) if pnl is not None else None,
        total_commission=Decimal(commission),
        total_fees=Decimal(fees),
        entry_time=entry_time,
        exit_time=entry_time + timedelta(minutes=hold_minutes) if hold_minutes is not None else None,
        status=TradeStatus.CLOSED,
    )


def sequence(pnls: list) -> list[Trade]:
    """Trades one hour apart, in the given order."""
    return [make_trade(p, entry_time=BASE_TIME + timedelta(hours=i)) for i, p in enumerate(pnls)]


pnl_strategy = st.decimals(
    min_value=Decimal("-10000"),
    max_value=Decimal("10000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)


def trade_list_strategy(max_size: int = 40):
    return st.lists(
        st.tuples(
            pnl_strategy,
            st.integers(min_value=0, max_value=60 * 24 * 20),
            st.integers(min_value=1, max_value=500),
        ),
        min_size=0,
        max_size=max_size,
    ).map(
        lambda rows: [
            make_trade(
                pnl,
                entry_time=BASE_TIME + timedelta(minutes=offset),
                quantity=str(qty),
                entry_value=str(qty * 100),
            )
            for pnl, offset, qty in rows
        ]
    )


class TestTradeCountPartition:
    """
    **Property: wins + losses + scratches == total trades**
    """

    @given(trades=trade_list_strategy())
    @settings(max_examples=100)
    def test_outcome_counts_partition_total(self, trades: list[Trade]):
        stats = compute_stats(trades)

        assert (
            stats.number_of_winning_trades
            + stats.number_of_losing_trades
            + stats.number_of_scratch_trades
            == stats.total_number_of_trades
            == len(trades)
        )


class TestTotalGainLossExact:
    """
    **Property: total gain/loss equals the exact sum of realized P&L**
    """

    @given(trades=trade_list_strategy())
    @settings(max_examples=100)
    def test_total_equals_sum(self, trades: list[Trade]):
        stats = compute_stats(trades)
        assert stats.total_gain_loss == sum((t.realized_pnl for t in trades), Decimal("0"))

    @given(trades=trade_list_strategy())
    @settings(max_examples=50)
    def test_total_independent_of_order(self, trades: list[Trade]):
        forward = compute_stats(trades)
        backward = compute_stats(list(reversed(trades)))
        assert forward.total_gain_loss == backward.total_gain_loss


class TestIdempotence:
    """
    **Property: computing stats twice on the same input is identical**
    """

    @given(trades=trade_list_strategy())
    @settings(max_examples=50)
    def test_same_input_same_output(self, trades: list[Trade]):
        assert compute_stats(trades) == compute_stats(trades)


class TestEmptyInput:
    """Empty input yields an all-zero bundle, never an error."""

    def test_every_numeric_field_is_zero(self):
        stats = compute_stats([])

        for name, value in stats.model_dump().items():
            assert value == 0, f"{name} should be 0 for empty input, got {value!r}"
            assert value is not None

    def test_empty_matches_default_bundle(self):
        assert compute_stats([]) == TradeStats()


class TestConsecutiveStreaks:
    """Streak detection over trades in entry order."""

    def test_documented_example(self):
        # win, win, loss, win, win, win, scratch, win
        trades = sequence([10, 20, -5, 10, 10, 10, 0, 10])
        stats = compute_stats(trades)

        assert stats.max_consecutive_wins == 3
        assert stats.max_consecutive_losses == 1

    def test_streaks_follow_entry_time_not_input_order(self):
        trades = sequence([-1, -1, -1, 5, 5])
        shuffled = [trades[3], trades[0], trades[4], trades[1], trades[2]]

        assert max_consecutive(shuffled, winning=False) == 3
        assert max_consecutive(shuffled, winning=True) == 2

    def test_scratch_breaks_loss_streak(self):
        trades = sequence([-1, -1, 0, -1])
        assert max_consecutive(trades, winning=False) == 2

    @given(trades=trade_list_strategy())
    @settings(max_examples=50)
    def test_streaks_bounded_by_counts(self, trades: list[Trade]):
        stats = compute_stats(trades)
        assert stats.max_consecutive_wins <= stats.number_of_winning_trades
        assert stats.max_consecutive_losses <= stats.number_of_losing_trades


class TestAggregateMetrics:
    """Worked example over four trades on two days."""

    @pytest.fixture
    def stats(self) -> TradeStats:
        day1 = datetime(2024, 3, 4, 9, 30)
        day2 = datetime(2024, 3, 5, 9, 30)
        trades = [
            make_trade("100", day1, hold_minutes=10, quantity="10", entry_value="1000",
                       commission="2.50", fees="0.40"),
            make_trade("-50", day1 + timedelta(minutes=30), hold_minutes=30, quantity="10",
                       entry_value="1000", commission="2.50", fees="0.40"),
            make_trade("200", day2, hold_minutes=60, quantity="20", entry_value="2000",
                       commission="5.00", fees="0.80"),
            make_trade("-25", day2 + timedelta(minutes=90), hold_minutes=5, quantity="10",
                       entry_value="500", commission="2.50", fees="0.40"),
        ]
        return compute_stats(trades)

    def test_totals(self, stats: TradeStats):
        assert stats.total_gain_loss == Decimal("225")
        assert stats.largest_gain == Decimal("200")
        assert stats.largest_loss == Decimal("-50")
        assert stats.total_commissions == Decimal("12.50")
        assert stats.total_fees == Decimal("2.00")

    def test_averages(self, stats: TradeStats):
        assert stats.average_daily_gain_loss == Decimal("112.50")
        assert stats.average_daily_volume == Decimal("2250.00")
        assert stats.average_per_share_gain_loss == Decimal("4.5000")
        assert stats.average_trade_gain_loss == Decimal("56.25")
        assert stats.average_winning_trade == Decimal("150.00")
        assert stats.average_losing_trade == Decimal("-37.50")

    def test_profit_factor(self, stats: TradeStats):
        # P&L [100, -50, 200, -25] => 300 / 75
        assert stats.profit_factor == Decimal("4.00")

    def test_hold_times_truncate_to_whole_minutes(self, stats: TradeStats):
        assert stats.average_hold_time_winning == 35
        assert stats.average_hold_time_losing == 17
        assert stats.average_hold_time_scratches == 0

    def test_probability_of_random_chance(self, stats: TradeStats):
        assert stats.probability_of_random_chance == Decimal("50")

    def test_kelly(self, stats: TradeStats):
        # b = 150 / 37.5 = 4, p = 0.5 => (2 - 0.5) / 4 = 37.5%
        assert stats.kelly_percentage == Decimal("37.5")

    def test_mae_mfe_not_computed(self, stats: TradeStats):
        assert stats.average_position_mae == 0
        assert stats.average_position_mfe == 0


class TestZeroDivisionGuards:
    """Every ratio reports 0 when its denominator is zero."""

    def test_profit_factor_zero_without_losses(self):
        stats = compute_stats(sequence([100, 50]))
        assert stats.profit_factor == 0
        assert stats.average_losing_trade == 0

    def test_kelly_zero_without_losses(self):
        trades = sequence([100, 50])
        assert kelly_percentage(trades, []) == 0

    def test_kelly_ignores_scratches(self):
        with_scratch = compute_stats(sequence([100, -50, 0, 0]))
        without = compute_stats(sequence([100, -50]))
        assert with_scratch.kelly_percentage == without.kelly_percentage

    def test_sqn_zero_when_all_equal(self):
        assert system_quality_number([Decimal("5")] * 4) == 0

    def test_k_ratio_needs_two_trades(self):
        assert k_ratio([Decimal("10")]) == 0

    def test_all_scratches(self):
        stats = compute_stats(sequence([0, 0, 0]))
        assert stats.number_of_scratch_trades == 3
        assert stats.trade_pnl_standard_deviation == 0
        assert stats.system_quality_number == 0
        assert stats.k_ratio == 0
        assert stats.profit_factor == 0

    def test_hold_time_zero_without_exit_times(self):
        trades = [make_trade("10", hold_minutes=None)]
        assert compute_stats(trades).average_hold_time_winning == 0

    @given(trades=trade_list_strategy())
    @settings(max_examples=100)
    def test_never_raises(self, trades: list[Trade]):
        compute_stats(trades)


class TestDispersionMetrics:
    """Standard deviation, SQN and K-ratio on a two-trade sequence."""

    def test_population_standard_deviation(self):
        stats = compute_stats(sequence([10, 30]))
        assert stats.trade_pnl_standard_deviation == Decimal("10.0000")

    def test_system_quality_number(self):
        # mean 20 * sqrt(2) / 10
        stats = compute_stats(sequence([10, 30]))
        assert stats.system_quality_number == Decimal("2.83")

    def test_k_ratio_uses_raw_pnl_sequence(self):
        # slope 20 over stderr 10 / sqrt(2)
        assert k_ratio([Decimal("10"), Decimal("30")]) == Decimal("2.83")

    def test_k_ratio_negative_for_declining_sequence(self):
        assert k_ratio([Decimal("30"), Decimal("10")]) == Decimal("-2.83")


class TestMissingPnl:
    """A closed trade with no realized P&L counts as a zero outcome."""

    def test_null_pnl_is_scratch(self):
        stats = compute_stats([make_trade(None), make_trade("10")])

        assert stats.number_of_scratch_trades == 1
        assert stats.total_gain_loss == Decimal("10")
