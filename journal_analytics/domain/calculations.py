"""Per-trade arithmetic: PNL, return percentage, holding time.

Formulas:
    long:  pnl = (exit - entry) × quantity
    short: pnl = (entry - exit) × quantity
"""

from datetime import datetime


def calculate_pnl(
    entry_price: float,
    exit_price: float,
    quantity: float,
    side: str,
) -> float:
    """Calculate realized PNL for a closed trade.

    Args:
        entry_price: Fill price on entry
        exit_price: Fill price on exit
        quantity: Position size (positive)
        side: "long" or "short"

    Returns:
        Signed PNL in account currency (before commission)

    Example:
        >>> calculate_pnl(100.0, 110.0, 10, "long")
        100.0
        >>> calculate_pnl(100.0, 110.0, 10, "short")
        -100.0
    """
    if side == "long":
        return (exit_price - entry_price) * quantity
    return (entry_price - exit_price) * quantity


def calculate_pnl_percentage(
    entry_price: float,
    exit_price: float,
    side: str,
) -> float:
    """Calculate return on entry price, on a 0-100 scale.

    Returns 0.0 when entry_price is 0.
    """
    if entry_price == 0:
        return 0.0
    if side == "long":
        return (exit_price - entry_price) / entry_price * 100
    return (entry_price - exit_price) / entry_price * 100


def calculate_duration_seconds(entry_time: datetime, exit_time: datetime) -> float:
    """Holding time in seconds (never negative)."""
    return max((exit_time - entry_time).total_seconds(), 0.0)
