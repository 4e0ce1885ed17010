"""Filter stage: narrows an account's trades to the eligible closed set."""

from typing import Iterable, Optional

from tradejournal.models import Trade, TradeFilter


def filter_trades(
    trades: Iterable[Trade],
    account_id: Optional[int] = None,
    criteria: Optional[TradeFilter] = None,
) -> list[Trade]:
    """Return the closed trades of ``account_id`` matching ``criteria``.

    Only CLOSED trades are ever eligible. Each criterion present on the
    filter is ANDed with the others; date, P&L and quantity bounds are
    inclusive. An empty result is valid.

    Args:
        trades: Candidate trades, in any order.
        account_id: Restrict to this trading account; None keeps all.
        criteria: Optional filter bounds.

    Returns:
        Matching trades in their original order.
    """
    result = [t for t in trades if t.is_closed]

    if account_id is not None:
        result = [t for t in result if t.trading_account_id == account_id]

    if criteria is None:
        return result

    if criteria.start_date is not None:
        result = [t for t in result if t.entry_time >= criteria.start_date]
    if criteria.end_date is not None:
        result = [t for t in result if t.entry_time <= criteria.end_date]
    if criteria.symbols is not None:
        allowed = set(criteria.symbols)
        result = [t for t in result if t.symbol_ticker in allowed]
    if criteria.min_pnl is not None:
        result = [t for t in result if t.pnl >= criteria.min_pnl]
    if criteria.max_pnl is not None:
        result = [t for t in result if t.pnl <= criteria.max_pnl]
    if criteria.min_quantity is not None:
        result = [t for t in result if t.quantity >= criteria.min_quantity]
    if criteria.max_quantity is not None:
        result = [t for t in result if t.quantity <= criteria.max_quantity]

    return result
