"""Import of a normalized trade feed from CSV into the store.

Each row is one round-trip trade that an upstream broker export has
already normalized. Expected columns::

    symbol, quantity, entry_price, exit_price, entry_time, exit_time,
    realized_pnl, commission, fees, status

``entry_value``/``exit_value`` columns are optional and default to
quantity x price. ``status`` defaults to CLOSED when an exit time is
present and OPEN otherwise. Malformed rows are reported, not fatal.
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradejournal.db.store import DataStore
from tradejournal.models import Trade, TradeStatus

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["symbol", "quantity", "entry_price", "entry_time"]


@dataclass
class ImportResult:
    """Outcome of an import run."""

    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def _optional(row: dict, key: str) -> Optional[str]:
    value = (row.get(key) or "").strip()
    return value or None


def _decimal(row: dict, key: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
    value = _optional(row, key)
    if value is None:
        return default
    try:
        return Decimal(value.replace(",", ""))
    except InvalidOperation as e:
        raise ValueError(f"invalid number for {key}: {value!r}") from e


def _timestamp(row: dict, key: str) -> Optional[datetime]:
    value = _optional(row, key)
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"invalid timestamp for {key}: {value!r}") from e


def parse_trade_row(row: dict, account_id: int) -> Trade:
    """Build a Trade from one CSV row.

    Raises:
        ValueError: If a required value is missing or malformed.
    """
    missing = [c for c in REQUIRED_COLUMNS if _optional(row, c) is None]
    if missing:
        raise ValueError(f"missing {', '.join(missing)}")

    quantity = _decimal(row, "quantity")
    entry_price = _decimal(row, "entry_price")
    exit_price = _decimal(row, "exit_price")
    exit_time = _timestamp(row, "exit_time")

    status_text = _optional(row, "status")
    if status_text:
        try:
            status = TradeStatus(status_text.upper())
        except ValueError as e:
            raise ValueError(f"unknown status {status_text!r}") from e
    else:
        status = TradeStatus.CLOSED if exit_time else TradeStatus.OPEN

    default_exit_value = quantity * exit_price if exit_price is not None else None

    try:
        return Trade(
            trading_account_id=account_id,
            symbol_ticker=_optional(row, "symbol").upper(),
            quantity=quantity,
            entry_price=entry_price,
            exit_price=exit_price,
            entry_value=_decimal(row, "entry_value", quantity * entry_price),
            exit_value=_decimal(row, "exit_value", default_exit_value),
            realized_pnl=_decimal(row, "realized_pnl"),
            total_commission=_decimal(row, "commission", Decimal("0")),
            total_fees=_decimal(row, "fees", Decimal("0")),
            entry_time=_timestamp(row, "entry_time"),
            exit_time=exit_time,
            status=status,
        )
    except ValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"])
        raise ValueError(f"{field_name}: {first['msg']}") from e


def import_trades_csv(store: DataStore, account_id: int, csv_path: Path) -> ImportResult:
    """Import every valid row of ``csv_path`` into ``account_id``.

    Args:
        store: Destination trade store.
        account_id: Account that owns the imported trades.
        csv_path: CSV file to read.

    Returns:
        ImportResult with one error message per rejected row.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the account does not exist.
    """
    if store.get_account(account_id) is None:
        raise ValueError(f"Trading account {account_id} not found")

    result = ImportResult()
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        # Header is line 1
        for line_no, row in enumerate(reader, start=2):
            try:
                trade = parse_trade_row(row, account_id)
                store.log_trade(trade)
            except ValueError as e:
                result.skipped += 1
                result.errors.append(f"Line {line_no}: {e}")
                continue
            result.imported += 1

    logger.info(
        "Imported %d trades into account %s from %s (%d rejected)",
        result.imported,
        account_id,
        csv_path,
        result.skipped,
    )
    return result
