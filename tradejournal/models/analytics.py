"""Analytics result models.

All of these are derived value objects recomputed on every request;
none of them is persisted.
"""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

ZERO = Decimal("0")


class TradeStats(BaseModel):
    """Full performance statistics bundle for a set of closed trades."""

    total_gain_loss: Decimal = Field(default=ZERO, description="Sum of realized P&L")
    largest_gain: Decimal = Field(default=ZERO, description="Best single trade")
    largest_loss: Decimal = Field(default=ZERO, description="Worst single trade")
    average_daily_gain_loss: Decimal = Field(default=ZERO, description="P&L per trading day")
    average_daily_volume: Decimal = Field(default=ZERO, description="Entry value per trading day")
    average_per_share_gain_loss: Decimal = Field(default=ZERO, description="P&L per share")
    average_trade_gain_loss: Decimal = Field(default=ZERO, description="P&L per trade")
    average_winning_trade: Decimal = Field(default=ZERO, description="Mean winning P&L")
    average_losing_trade: Decimal = Field(default=ZERO, description="Mean losing P&L (negative)")
    total_number_of_trades: int = Field(default=0, ge=0)
    number_of_winning_trades: int = Field(default=0, ge=0)
    number_of_losing_trades: int = Field(default=0, ge=0)
    number_of_scratch_trades: int = Field(default=0, ge=0)
    average_hold_time_scratches: int = Field(default=0, description="Minutes")
    average_hold_time_winning: int = Field(default=0, description="Minutes")
    average_hold_time_losing: int = Field(default=0, description="Minutes")
    max_consecutive_wins: int = Field(default=0, ge=0)
    max_consecutive_losses: int = Field(default=0, ge=0)
    trade_pnl_standard_deviation: Decimal = Field(default=ZERO, description="Population std dev of P&L")
    system_quality_number: Decimal = Field(default=ZERO, description="SQN")
    probability_of_random_chance: Decimal = Field(
        default=ZERO, description="Simplified (1 - win rate) x 100, not a binomial p-value"
    )
    kelly_percentage: Decimal = Field(default=ZERO, description="Kelly bet fraction x 100")
    k_ratio: Decimal = Field(default=ZERO, description="Slope / standard error of the P&L sequence")
    profit_factor: Decimal = Field(default=ZERO, description="Gross profit / gross loss, 0 with no losses")
    total_commissions: Decimal = Field(default=ZERO)
    total_fees: Decimal = Field(default=ZERO)
    average_position_mae: Decimal = Field(default=ZERO, description="Not computed without tick data")
    average_position_mfe: Decimal = Field(default=ZERO, description="Not computed without tick data")

    model_config = {"frozen": True}


class WinLossDayStats(BaseModel):
    """Aggregate statistics over either the winning or the losing days."""

    total_gain_loss: Decimal = Field(default=ZERO)
    average_daily_gain_loss: Decimal = Field(default=ZERO)
    average_daily_volume: Decimal = Field(default=ZERO)
    average_per_share_gain_loss: Decimal = Field(default=ZERO)
    average_trade_gain_loss: Decimal = Field(default=ZERO)
    number_of_days: int = Field(default=0, ge=0)
    total_trades: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class WinLossDays(BaseModel):
    """Winning-day versus losing-day comparison."""

    winning_days: WinLossDayStats = Field(default_factory=WinLossDayStats)
    losing_days: WinLossDayStats = Field(default_factory=WinLossDayStats)

    model_config = {"frozen": True}


class DrawdownPeriod(BaseModel):
    """A peak-to-trough decline of cumulative P&L."""

    start_date: date_type = Field(..., description="Date of the peak")
    end_date: date_type = Field(..., description="Date of the trough")
    peak_value: Decimal
    trough_value: Decimal
    drawdown_amount: Decimal = Field(..., ge=0, description="Peak minus trough")
    drawdown_percent: Decimal = Field(..., description="Amount as a percentage of the peak")
    duration_days: int = Field(..., ge=0, description="Peak to recovery, or to the last day if open")
    recovery_date: Optional[date_type] = Field(default=None, description="First day back at the peak")

    model_config = {"frozen": True}


class DrawdownAnalysis(BaseModel):
    """Drawdown summary plus every detected drawdown period."""

    max_drawdown: Decimal = Field(default=ZERO)
    max_drawdown_percent: Decimal = Field(default=ZERO)
    max_drawdown_duration: int = Field(default=0, description="Days")
    current_drawdown: Decimal = Field(default=ZERO)
    current_drawdown_percent: Decimal = Field(default=ZERO)
    current_drawdown_duration: int = Field(default=0, description="Days")
    drawdown_periods: list[DrawdownPeriod] = Field(default_factory=list)

    model_config = {"frozen": True}


class IntradayStats(BaseModel):
    """Activity summary for a single trading day."""

    date: date_type
    total_trades: int = Field(..., ge=0)
    winning_trades: int = Field(..., ge=0)
    losing_trades: int = Field(..., ge=0)
    scratch_trades: int = Field(..., ge=0)
    total_pnl: Decimal
    gross_pnl: Decimal = Field(..., description="P&L before commissions and fees")
    commissions: Decimal
    fees: Decimal
    largest_win: Decimal
    largest_loss: Decimal
    first_trade_time: Optional[datetime] = None
    last_trade_time: Optional[datetime] = None
    trading_duration: int = Field(default=0, description="Minutes from first entry to last activity")
    average_trade_size: Decimal
    total_volume: Decimal = Field(..., description="Sum of quantities")

    model_config = {"frozen": True}


class DashboardSummary(BaseModel):
    """Headline numbers for an account over a period."""

    total_trades: int
    open_trades: int
    closed_trades: int
    total_realized_pnl: Decimal
    total_unrealized_pnl: Decimal
    winning_trades: int
    losing_trades: int
    win_rate: Decimal
    total_commission: Decimal
    total_fees: Decimal
    account_balance: Decimal
    period_start: date_type
    period_end: date_type

    model_config = {"frozen": True}


class SymbolPerformance(BaseModel):
    """Per-symbol breakdown over a period."""

    symbol_ticker: str
    total_trades: int
    total_realized_pnl: Decimal
    winning_trades: int
    losing_trades: int
    win_rate: Decimal
    avg_trade_size: Decimal
    total_volume: Decimal

    model_config = {"frozen": True}


class DailyPnl(BaseModel):
    """Realized P&L for one exit date."""

    date: date_type
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    total_pnl: Decimal
    trades_count: int
    volume: Decimal

    model_config = {"frozen": True}
