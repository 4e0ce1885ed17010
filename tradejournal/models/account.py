"""TradingAccount data model."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class TradingAccount(BaseModel):
    """Represents a brokerage account whose trades are journaled."""

    id: Optional[int] = Field(default=None, description="Database ID")
    name: str = Field(..., min_length=1, description="Account display name")
    broker: str = Field(default="manual", description="Broker the account belongs to")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="Account currency")
    current_balance: Decimal = Field(default=Decimal("0"), description="Latest known cash balance")

    model_config = {"frozen": True}
