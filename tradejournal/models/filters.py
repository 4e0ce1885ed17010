"""TradeFilter data model."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tradejournal.models.trade import naive_wall_clock


class TradeFilter(BaseModel):
    """Optional criteria narrowing an account's closed trades.

    Every bound is inclusive and an absent bound imposes no restriction.
    Date bounds apply to the trade's entry time.
    """

    start_date: Optional[datetime] = Field(default=None, description="Earliest entry time")
    end_date: Optional[datetime] = Field(default=None, description="Latest entry time")
    symbols: Optional[list[str]] = Field(default=None, description="Allowed symbol tickers")
    min_pnl: Optional[Decimal] = Field(default=None, description="Minimum realized P&L")
    max_pnl: Optional[Decimal] = Field(default=None, description="Maximum realized P&L")
    min_quantity: Optional[Decimal] = Field(default=None, description="Minimum quantity")
    max_quantity: Optional[Decimal] = Field(default=None, description="Maximum quantity")

    model_config = {"frozen": True}

    @field_validator("start_date", "end_date")
    @classmethod
    def drop_utc_offset(cls, value: Optional[datetime]) -> Optional[datetime]:
        return naive_wall_clock(value)

    @classmethod
    def for_dates(
        cls,
        start: Optional[date] = None,
        end: Optional[date] = None,
        **criteria,
    ) -> "TradeFilter":
        """Build a filter from calendar dates.

        The end date is pushed to the start of the following day so the
        whole of ``end`` is included.
        """
        return cls(
            start_date=datetime.combine(start, time.min) if start else None,
            end_date=datetime.combine(end + timedelta(days=1), time.min) if end else None,
            **criteria,
        )

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())
