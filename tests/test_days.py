"""Tests for the day-aggregation stage.

**Feature: day-aggregation**
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics.days import (
    aggregate_by_day,
    group_by_day,
    intraday_analysis,
    win_loss_day_stats,
    win_loss_days,
)
from tradejournal.models import Trade, TradeStatus, WinLossDayStats

D1 = date(2024, 3, 4)
D2 = date(2024, 3, 5)
D3 = date(2024, 3, 6)


def make_trade(
    day: date,
    pnl,
    hour: int = 10,
    minute: int = 0,
    hold_minutes: int | None = 15,
    quantity: str = "5",
    entry_value: str = "250",
    commission: str = "0",
    fees: str = "0",
    status: TradeStatus = TradeStatus.CLOSED,
) -> Trade:
    entry = datetime.combine(day, datetime.min.time()) + timedelta(hours=hour, minutes=minute)
    return Trade(
        trading_account_id=1,
        symbol_ticker="NQ",
        quantity=Decimal(quantity),
        entry_price=Decimal(entry_value) / Decimal(quantity),
        entry_value=Decimal(entry_value),
        realized_pnl=Decimal(pnl) if pnl is not None else None,
        total_commission=Decimal(commission),
        total_fees=Decimal(fees),
        entry_time=entry,
        exit_time=entry + timedelta(minutes=hold_minutes) if hold_minutes is not None else None,
        status=status,
    )


def three_day_trades() -> list[Trade]:
    """Daily P&L of +50, -30 and +20."""
    return [
        make_trade(D1, "50", quantity="10", entry_value="1000"),
        make_trade(D2, "-30", quantity="5", entry_value="500"),
        make_trade(D3, "30", hour=10),
        make_trade(D3, "-10", hour=11),
    ]


class TestAggregateByDay:
    """Per-day sums keyed by entry date."""

    def test_sums_per_day(self):
        assert aggregate_by_day(three_day_trades()) == {
            D1: Decimal("50"),
            D2: Decimal("-30"),
            D3: Decimal("20"),
        }

    def test_days_ascending_regardless_of_input_order(self):
        trades = list(reversed(three_day_trades()))
        assert list(aggregate_by_day(trades)) == [D1, D2, D3]

    def test_group_keeps_original_trades(self):
        groups = group_by_day(three_day_trades())
        assert len(groups[D3]) == 2

    @given(pnls=st.lists(st.integers(min_value=-500, max_value=500), max_size=30))
    @settings(max_examples=100)
    def test_day_sums_add_up_to_total(self, pnls: list[int]):
        trades = [make_trade(D1 + timedelta(days=i % 4), str(p)) for i, p in enumerate(pnls)]
        assert sum(aggregate_by_day(trades).values(), Decimal("0")) == sum(
            (t.pnl for t in trades), Decimal("0")
        )


class TestWinLossDays:
    """
    **Property: winning-day stats cover exactly the days with P&L > 0**
    """

    def test_winning_days(self):
        trades = three_day_trades()
        stats = win_loss_day_stats(aggregate_by_day(trades), trades, winning=True)

        assert stats.total_gain_loss == Decimal("70")
        assert stats.number_of_days == 2
        assert stats.total_trades == 3
        assert stats.average_daily_gain_loss == Decimal("35.00")
        assert stats.average_daily_volume == Decimal("750.00")
        assert stats.average_per_share_gain_loss == Decimal("3.5000")
        assert stats.average_trade_gain_loss == Decimal("23.33")

    def test_losing_days(self):
        result = win_loss_days(three_day_trades())
        losing = result.losing_days

        assert losing.total_gain_loss == Decimal("-30")
        assert losing.number_of_days == 1
        assert losing.total_trades == 1
        assert losing.average_daily_volume == Decimal("500.00")
        assert losing.average_per_share_gain_loss == Decimal("-6.0000")

    def test_no_selected_days_is_all_zero(self):
        trades = [make_trade(D1, "10"), make_trade(D2, "5")]
        stats = win_loss_day_stats(aggregate_by_day(trades), trades, winning=False)

        assert stats == WinLossDayStats()

    def test_flat_day_is_neither(self):
        trades = [make_trade(D1, "10"), make_trade(D1, "-10")]
        result = win_loss_days(trades)

        assert result.winning_days.number_of_days == 0
        assert result.losing_days.number_of_days == 0

    def test_empty_input(self):
        result = win_loss_days([])
        assert result.winning_days == WinLossDayStats()
        assert result.losing_days == WinLossDayStats()


class TestIntradayAnalysis:
    """Single-day activity summary."""

    def day_trades(self) -> list[Trade]:
        return [
            make_trade(D1, "40", hour=9, minute=30, hold_minutes=15, quantity="2",
                       entry_value="1000", commission="2", fees="1"),
            make_trade(D1, "-15", hour=10, hold_minutes=90, quantity="3",
                       entry_value="1500", commission="2", fees="0.5"),
            make_trade(D1, None, hour=12, hold_minutes=None, quantity="1",
                       entry_value="100", status=TradeStatus.OPEN),
            make_trade(D2, "100"),
        ]

    def test_no_trades_on_date_is_empty_list(self):
        assert intraday_analysis(self.day_trades(), D3) == []

    def test_single_record_for_date(self):
        results = intraday_analysis(self.day_trades(), D1)
        assert len(results) == 1
        assert results[0].date == D1

    def test_counts_and_totals(self):
        result = intraday_analysis(self.day_trades(), D1)[0]

        assert result.total_trades == 3
        assert result.winning_trades == 1
        assert result.losing_trades == 1
        assert result.scratch_trades == 1
        assert result.total_pnl == Decimal("25")
        assert result.commissions == Decimal("4")
        assert result.fees == Decimal("1.5")
        assert result.gross_pnl == Decimal("30.5")
        assert result.largest_win == Decimal("40")
        assert result.largest_loss == Decimal("-15")
        assert result.average_trade_size == Decimal("866.67")
        assert result.total_volume == Decimal("6")

    def test_first_and_last_trade_times(self):
        result = intraday_analysis(self.day_trades(), D1)[0]

        assert result.first_trade_time == datetime(2024, 3, 4, 9, 30)
        # The open trade has no exit, so its entry time is the last activity
        assert result.last_trade_time == datetime(2024, 3, 4, 12, 0)
        assert result.trading_duration == 150

    def test_last_trade_time_uses_exit(self):
        trades = [
            make_trade(D1, "5", hour=9, hold_minutes=240),
            make_trade(D1, "5", hour=11, hold_minutes=10),
        ]
        result = intraday_analysis(trades, D1)[0]

        assert result.last_trade_time == datetime(2024, 3, 4, 13, 0)
        assert result.trading_duration == 240
