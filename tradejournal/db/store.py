"""SQLite data store for TradeJournal.

Decimal columns are stored as TEXT so money values survive a round trip
exactly.
"""

import logging
import sqlite3
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from tradejournal.analytics.filters import filter_trades
from tradejournal.models import Trade, TradeFilter, TradeStatus, TradingAccount

logger = logging.getLogger(__name__)


def _dec(value: Optional[str]) -> Optional[Decimal]:
    return Decimal(value) if value is not None else None


def _text(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


class DataStore:
    """SQLite-based trade store for TradeJournal."""

    REQUIRED_TABLES = [
        "trading_accounts",
        "trades",
    ]

    _TRADE_COLUMNS = """
        id, trading_account_id, symbol_ticker, quantity, entry_price, exit_price,
        entry_value, exit_value, realized_pnl, total_commission, total_fees,
        entry_time, exit_time, status
    """

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trading_accounts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    broker TEXT NOT NULL,
                    currency TEXT NOT NULL DEFAULT 'USD',
                    current_balance TEXT NOT NULL DEFAULT '0'
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    trading_account_id INTEGER NOT NULL REFERENCES trading_accounts(id),
                    symbol_ticker TEXT NOT NULL,
                    quantity TEXT NOT NULL,
                    entry_price TEXT NOT NULL,
                    exit_price TEXT,
                    entry_value TEXT NOT NULL,
                    exit_value TEXT,
                    realized_pnl TEXT,
                    total_commission TEXT NOT NULL DEFAULT '0',
                    total_fees TEXT NOT NULL DEFAULT '0',
                    entry_time TEXT NOT NULL,
                    exit_time TEXT,
                    status TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_trades_account_entry
                ON trades (trading_account_id, entry_time)
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Accounts ====================

    def add_account(self, account: TradingAccount) -> TradingAccount:
        """Insert a trading account.

        Args:
            account: Account to add (its id is ignored).

        Returns:
            The stored account with its database ID.

        Raises:
            ValueError: If an account with the same name exists.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO trading_accounts (name, broker, currency, current_balance)
                    VALUES (?, ?, ?, ?)
                    """,
                    (account.name, account.broker, account.currency, str(account.current_balance)),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Account '{account.name}' already exists") from e
            conn.commit()
            logger.info("Added trading account %s (%s)", cursor.lastrowid, account.name)
            return account.model_copy(update={"id": cursor.lastrowid})
        finally:
            conn.close()

    def get_account(self, account_id: int) -> Optional[TradingAccount]:
        """Get a trading account by ID, or None if it does not exist."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, name, broker, currency, current_balance FROM trading_accounts WHERE id = ?",
                (account_id,),
            )
            row = cursor.fetchone()
            return self._row_to_account(row) if row else None
        finally:
            conn.close()

    def list_accounts(self) -> list[TradingAccount]:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, name, broker, currency, current_balance FROM trading_accounts ORDER BY id"
            )
            return [self._row_to_account(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_account(row: sqlite3.Row) -> TradingAccount:
        return TradingAccount(
            id=row["id"],
            name=row["name"],
            broker=row["broker"],
            currency=row["currency"],
            current_balance=Decimal(row["current_balance"]),
        )

    # ==================== Trades ====================

    def log_trade(self, trade: Trade) -> Trade:
        """Log a trade to the database.

        Args:
            trade: Trade to log (its id is ignored).

        Returns:
            The stored trade with its database ID.

        Raises:
            ValueError: If the account is unknown, or a CLOSED trade lacks
                a realized P&L or exit time.
        """
        if trade.is_closed and (
            trade.realized_pnl is None or trade.exit_time is None
        ):
            raise ValueError("A CLOSED trade needs both realized_pnl and exit_time")

        if self.get_account(trade.trading_account_id) is None:
            raise ValueError(f"Trading account {trade.trading_account_id} not found")

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades
                (trading_account_id, symbol_ticker, quantity, entry_price, exit_price,
                 entry_value, exit_value, realized_pnl, total_commission, total_fees,
                 entry_time, exit_time, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.trading_account_id,
                    trade.symbol_ticker,
                    str(trade.quantity),
                    str(trade.entry_price),
                    _text(trade.exit_price),
                    str(trade.entry_value),
                    _text(trade.exit_value),
                    _text(trade.realized_pnl),
                    str(trade.total_commission),
                    str(trade.total_fees),
                    trade.entry_time.isoformat(),
                    trade.exit_time.isoformat() if trade.exit_time else None,
                    trade.status.value,
                ),
            )
            conn.commit()
            return trade.model_copy(update={"id": cursor.lastrowid})
        finally:
            conn.close()

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {self._TRADE_COLUMNS} FROM trades WHERE id = ?",
                (trade_id,),
            )
            row = cursor.fetchone()
            return self._row_to_trade(row) if row else None
        finally:
            conn.close()

    def list_trades(
        self,
        account_id: int,
        status: Optional[TradeStatus] = None,
    ) -> list[Trade]:
        """Get an account's trades, optionally restricted to one status.

        Args:
            account_id: Trading account ID.
            status: Optional status filter. If None, returns all trades.

        Returns:
            Trades ordered by entry time.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if status is not None:
                cursor.execute(
                    f"""
                    SELECT {self._TRADE_COLUMNS}
                    FROM trades
                    WHERE trading_account_id = ? AND status = ?
                    ORDER BY entry_time
                    """,
                    (account_id, status.value),
                )
            else:
                cursor.execute(
                    f"""
                    SELECT {self._TRADE_COLUMNS}
                    FROM trades
                    WHERE trading_account_id = ?
                    ORDER BY entry_time
                    """,
                    (account_id,),
                )
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def list_closed_trades(
        self,
        account_id: int,
        trade_filter: Optional[TradeFilter] = None,
    ) -> list[Trade]:
        """Get an account's closed trades matching an optional filter."""
        trades = self.list_trades(account_id, status=TradeStatus.CLOSED)
        return filter_trades(trades, account_id, trade_filter)

    def find_trades_by_date(
        self,
        account_id: int,
        from_date: date,
        to_date: date,
    ) -> list[Trade]:
        """Get all of an account's trades entered between two dates (inclusive)."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {self._TRADE_COLUMNS}
                FROM trades
                WHERE trading_account_id = ?
                AND substr(entry_time, 1, 10) >= ? AND substr(entry_time, 1, 10) <= ?
                ORDER BY entry_time
                """,
                (account_id, from_date.isoformat(), to_date.isoformat()),
            )
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            trading_account_id=row["trading_account_id"],
            symbol_ticker=row["symbol_ticker"],
            quantity=Decimal(row["quantity"]),
            entry_price=Decimal(row["entry_price"]),
            exit_price=_dec(row["exit_price"]),
            entry_value=Decimal(row["entry_value"]),
            exit_value=_dec(row["exit_value"]),
            realized_pnl=_dec(row["realized_pnl"]),
            total_commission=Decimal(row["total_commission"]),
            total_fees=Decimal(row["total_fees"]),
            entry_time=datetime.fromisoformat(row["entry_time"]),
            exit_time=datetime.fromisoformat(row["exit_time"]) if row["exit_time"] else None,
            status=TradeStatus(row["status"]),
        )
