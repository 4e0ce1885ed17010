"""Trade data model."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def naive_wall_clock(value: Optional[datetime]) -> Optional[datetime]:
    """Drop a UTC offset without converting, so 23:30-05:00 stays 23:30 that day."""
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


class TradeStatus(str, Enum):
    """Lifecycle state of a round-trip trade."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    PARTIALLY_CLOSED = "PARTIALLY_CLOSED"


class Trade(BaseModel):
    """Represents a round-trip trade (entry fill plus optional exit fill)."""

    id: Optional[int] = Field(default=None, description="Database ID")
    trading_account_id: int = Field(..., description="Owning trading account")
    symbol_ticker: str = Field(..., min_length=1, description="Trading symbol")
    quantity: Decimal = Field(..., gt=0, description="Shares or contracts")
    entry_price: Decimal = Field(..., ge=0, description="Average entry price")
    exit_price: Optional[Decimal] = Field(default=None, ge=0, description="Average exit price")
    entry_value: Decimal = Field(..., description="Quantity x entry price")
    exit_value: Optional[Decimal] = Field(default=None, description="Quantity x exit price")
    realized_pnl: Optional[Decimal] = Field(
        default=None, description="Realized P&L net of commissions and fees"
    )
    total_commission: Decimal = Field(default=Decimal("0"), ge=0, description="Commissions paid")
    total_fees: Decimal = Field(default=Decimal("0"), ge=0, description="Exchange and regulatory fees")
    entry_time: datetime = Field(..., description="Entry fill timestamp")
    exit_time: Optional[datetime] = Field(default=None, description="Exit fill timestamp")
    status: TradeStatus = Field(..., description="Trade status")

    model_config = {"frozen": True}

    @field_validator("entry_time", "exit_time")
    @classmethod
    def drop_utc_offset(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Keep the recorded wall-clock time and discard any UTC offset."""
        return naive_wall_clock(value)

    @property
    def pnl(self) -> Decimal:
        """Realized P&L with a missing value counted as zero."""
        return self.realized_pnl if self.realized_pnl is not None else Decimal("0")

    @property
    def entry_date(self) -> date:
        """Calendar date the trade was entered."""
        return self.entry_time.date()

    @property
    def hold_minutes(self) -> Optional[int]:
        """Whole minutes between entry and exit, or None while open."""
        if self.exit_time is None:
            return None
        seconds = (self.exit_time - self.entry_time).total_seconds()
        return int(seconds / 60)

    @property
    def is_closed(self) -> bool:
        return self.status == TradeStatus.CLOSED
